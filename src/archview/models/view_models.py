# src/archview/models/view_models.py
"""
檢視設定與投影結果的資料模型。

ViewConfig 是 UI 所持有設定的不可變快照；投影器只讀取傳入的快照，
不讀取任何共享的可變狀態。
"""

# 1. 標準庫導入
from dataclasses import dataclass, replace
from enum import Enum

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from .architecture_models import ComponentNode, Relationship


class CategoryFilter(str, Enum):
    ALL = "all"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    PYTHON = "python"
    CPP = "cpp"
    CONFIG = "config"


class ViewMode(str, Enum):
    DEPENDENCIES = "dependencies"
    COMPONENTS = "components"
    LAYERS = "layers"
    FILES = "files"


@dataclass(frozen=True)
class ViewConfig:
    """使用者目前選擇的顯示過濾與選項。"""

    category_filter: CategoryFilter = CategoryFilter.ALL
    search_term: str = ""
    view_mode: ViewMode = ViewMode.DEPENDENCIES
    show_labels: bool = True

    def replace(self, **changes) -> "ViewConfig":
        """回傳套用變更後的新快照。"""
        return replace(self, **changes)


@dataclass(frozen=True)
class NodeSizing:
    """節點半徑公式的參數。"""

    base_radius: float = 16.0
    complexity_weight: float = 8.0
    line_weight: float = 4.0


@dataclass(frozen=True)
class VisualNode:
    component: ComponentNode
    display_label: str
    fill_color: str
    border_color: str
    radius: float
    shape: str
    hierarchy_level: int | None
    group: str
    font_size: int
    font_color: str
    tooltip: str

    @property
    def id(self) -> str:
        return self.component.id

    @property
    def name(self) -> str:
        return self.component.name


@dataclass(frozen=True)
class VisualEdge:
    relationship: Relationship
    stroke_color: str
    stroke_width: float
    label: str
    tooltip: str

    @property
    def id(self) -> str:
        return self.relationship.id

    @property
    def source(self) -> str:
        return self.relationship.source

    @property
    def target(self) -> str:
        return self.relationship.target


@dataclass(frozen=True)
class ProjectedGraph:
    """已過濾、已完成視覺編碼、可直接交給渲染引擎的節點/邊集合。"""

    nodes: tuple[VisualNode, ...] = ()
    edges: tuple[VisualEdge, ...] = ()

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    @property
    def is_empty(self) -> bool:
        return not self.nodes
