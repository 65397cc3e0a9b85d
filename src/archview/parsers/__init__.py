# src/archview/parsers/__init__.py
"""
解析器套件，將外部協作者提供的原始資料 (tree API 回應、架構模型檔案) 轉換為資料模型。
"""

from .architecture_parser import load_architecture, parse_architecture
from .listing_parser import load_tree_listing, parse_tree_listing

__all__ = [
    "load_architecture",
    "load_tree_listing",
    "parse_architecture",
    "parse_tree_listing",
]
