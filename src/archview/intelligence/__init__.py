# src/archview/intelligence/__init__.py
"""
圖論分析套件，為投影後的依賴關係圖提供統計與組件細節。
"""

from .graph_analyzer import GraphAnalyzer

__all__ = ["GraphAnalyzer"]
