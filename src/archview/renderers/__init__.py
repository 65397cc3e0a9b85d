# src/archview/renderers/__init__.py
"""
渲染器套件，負責將投影後的圖形資料交給 Graphviz 視覺化為圖檔。
"""

from .graph_renderer import generate_graph_dot_source, render_graph

__all__ = [
    "generate_graph_dot_source",
    "render_graph",
]
