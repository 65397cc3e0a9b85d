# src/archview/builders/__init__.py
"""
建構器套件，負責將外部提供的原始資料轉換為檔案樹與圖形投影。
"""

from .graph_projector import project_graph
from .tree_builder import build_tree, count_files, filter_tree, iter_tree

__all__ = [
    "build_tree",
    "count_files",
    "filter_tree",
    "iter_tree",
    "project_graph",
]
