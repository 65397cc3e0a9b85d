# src/archview/models/__init__.py
"""
資料模型套件，定義檔案樹、架構模型與圖形投影所使用的不可變資料結構。
"""

from .architecture_models import (
    ArchitectureModel,
    ComponentKind,
    ComponentNode,
    Layer,
    Relationship,
    RelationshipKind,
)
from .tree_models import PathKind, PathRecord, TreeNode
from .view_models import (
    CategoryFilter,
    NodeSizing,
    ProjectedGraph,
    ViewConfig,
    ViewMode,
    VisualEdge,
    VisualNode,
)

__all__ = [
    "ArchitectureModel",
    "CategoryFilter",
    "ComponentKind",
    "ComponentNode",
    "Layer",
    "NodeSizing",
    "PathKind",
    "PathRecord",
    "ProjectedGraph",
    "Relationship",
    "RelationshipKind",
    "TreeNode",
    "ViewConfig",
    "ViewMode",
    "VisualEdge",
    "VisualNode",
]
