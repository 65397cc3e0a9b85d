# src/archview/builders/graph_projector.py
"""
提供依賴關係圖的投影邏輯：依檢視設定過濾架構模型，並為存活的節點與邊計算視覺編碼。

本模組為純函式，相同輸入永遠產生相同輸出，不讀取任何環境狀態。
"""

# 1. 標準庫導入
import logging
from collections.abc import Sequence
from enum import Enum

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from archview.models.architecture_models import ComponentKind, ComponentNode, Layer, Relationship, RelationshipKind
from archview.models.view_models import (
    CategoryFilter,
    NodeSizing,
    ProjectedGraph,
    ViewConfig,
    ViewMode,
    VisualEdge,
    VisualNode,
)
from archview.utils.color_utils import get_contrast_text_color

CATEGORY_EXTENSIONS: dict[str, frozenset[str]] = {
    CategoryFilter.JAVASCRIPT.value: frozenset({"js", "jsx"}),
    CategoryFilter.TYPESCRIPT.value: frozenset({"ts", "tsx"}),
    CategoryFilter.PYTHON.value: frozenset({"py"}),
    CategoryFilter.CPP.value: frozenset({"cpp", "c", "h", "hpp"}),
    CategoryFilter.CONFIG.value: frozenset({"json", "yaml", "yml", "toml", "ini"}),
}

# (背景色, 邊框色)
LAYER_COLORS: dict[str, tuple[str, str]] = {
    Layer.PRESENTATION.value: ("#dbeafe", "#3b82f6"),
    Layer.BUSINESS.value: ("#f3e8ff", "#8b5cf6"),
    Layer.DATA.value: ("#dcfce7", "#22c55e"),
    Layer.INFRASTRUCTURE.value: ("#fed7aa", "#f97316"),
    Layer.EXTERNAL.value: ("#fecaca", "#ef4444"),
}
DEFAULT_LAYER_COLOR = LAYER_COLORS[Layer.BUSINESS.value]

KIND_COLORS: dict[str, tuple[str, str]] = {
    ComponentKind.CLASS.value: ("#e0f2fe", "#0891b2"),
    ComponentKind.FUNCTION.value: ("#fef3c7", "#f59e0b"),
    ComponentKind.MODULE.value: ("#e7e5e4", "#78716c"),
    ComponentKind.SERVICE.value: ("#ecfdf5", "#10b981"),
    ComponentKind.COMPONENT.value: ("#ede9fe", "#7c3aed"),
    ComponentKind.CONFIG.value: ("#fef2f2", "#dc2626"),
}
DEFAULT_KIND_COLOR = KIND_COLORS[ComponentKind.MODULE.value]

KIND_SHAPES: dict[str, str] = {
    ComponentKind.CLASS.value: "box",
    ComponentKind.FUNCTION.value: "ellipse",
    ComponentKind.MODULE.value: "diamond",
    ComponentKind.SERVICE.value: "star",
    ComponentKind.COMPONENT.value: "triangle",
    ComponentKind.CONFIG.value: "square",
}
DEFAULT_SHAPE = "dot"

LAYER_LEVELS: dict[str, int] = {
    Layer.PRESENTATION.value: 1,
    Layer.BUSINESS.value: 2,
    Layer.DATA.value: 3,
    Layer.INFRASTRUCTURE.value: 4,
    Layer.EXTERNAL.value: 5,
}
DEFAULT_LEVEL = LAYER_LEVELS[Layer.BUSINESS.value]

EDGE_COLORS: dict[str, str] = {
    RelationshipKind.IMPORTS.value: "#64748b",
    RelationshipKind.CALLS.value: "#3b82f6",
    RelationshipKind.EXTENDS.value: "#8b5cf6",
    RelationshipKind.IMPLEMENTS.value: "#06b6d4",
    RelationshipKind.USES.value: "#10b981",
    RelationshipKind.CONFIGURES.value: "#f59e0b",
}
DEFAULT_EDGE_COLOR = "#64748b"

LONG_NAME_THRESHOLD = 15


def enum_text(value: object) -> str:
    """列舉成員取其值，未知的原始字串原樣回傳。"""
    return value.value if isinstance(value, Enum) else str(value)


def _file_extension(file_path: str) -> str | None:
    """取得路徑最後一段的副檔名 (小寫)，沒有副檔名時回傳 None。"""
    file_name = file_path.rsplit("/", 1)[-1]
    if "." not in file_name:
        return None
    extension = file_name.rsplit(".", 1)[-1].lower()
    return extension or None


def _resolve_category(category_filter: CategoryFilter | str) -> CategoryFilter:
    try:
        return CategoryFilter(category_filter)
    except ValueError:
        logging.warning(f"未知的分類過濾器 '{category_filter}'，將視為 'all'。")
        return CategoryFilter.ALL


def matches_category(component: ComponentNode, category_filter: CategoryFilter | str) -> bool:
    """判斷組件的檔案副檔名是否屬於指定分類。'all' 永遠符合。"""
    category = _resolve_category(category_filter)
    if category == CategoryFilter.ALL:
        return True
    return _file_extension(component.file) in CATEGORY_EXTENSIONS[category.value]


def matches_search(component: ComponentNode, search_term: str) -> bool:
    """名稱、檔案路徑或描述中包含搜尋詞 (不分大小寫) 即符合。空字串永遠符合。"""
    if not search_term:
        return True
    needle = search_term.lower()
    haystacks = (component.name, component.file, component.description or "")
    return any(needle in text.lower() for text in haystacks)


def get_node_colors(component: ComponentNode, view_mode: ViewMode | str) -> tuple[str, str]:
    if enum_text(view_mode) == ViewMode.LAYERS.value:
        return LAYER_COLORS.get(enum_text(component.layer), DEFAULT_LAYER_COLOR)
    return KIND_COLORS.get(enum_text(component.kind), DEFAULT_KIND_COLOR)


def get_node_radius(component: ComponentNode, sizing: NodeSizing) -> float:
    """複雜度與行數以次線性方式貢獻，且各自設有上限。"""
    complexity_multiplier = min(2.0, component.complexity_score / 5)
    lines_multiplier = min(1.5, component.line_count / 100)
    return (
        sizing.base_radius
        + complexity_multiplier * sizing.complexity_weight
        + lines_multiplier * sizing.line_weight
    )


def get_node_shape(component: ComponentNode) -> str:
    return KIND_SHAPES.get(enum_text(component.kind), DEFAULT_SHAPE)


def get_hierarchy_level(component: ComponentNode, view_mode: ViewMode | str) -> int | None:
    """僅在 layers 模式下提供分層佈局提示。"""
    if enum_text(view_mode) != ViewMode.LAYERS.value:
        return None
    return LAYER_LEVELS.get(enum_text(component.layer), DEFAULT_LEVEL)


def get_edge_color(relationship: Relationship) -> str:
    return EDGE_COLORS.get(enum_text(relationship.kind), DEFAULT_EDGE_COLOR)


def get_edge_width(weight: float) -> float:
    return max(1.0, min(5.0, weight * 2))


def create_tooltip(component: ComponentNode) -> str:
    lines = [
        component.name,
        f"{enum_text(component.kind)} • {enum_text(component.layer)}",
        f"File: {component.file}",
        f"Lines: {component.line_count} • Complexity: {component.complexity_score:g}",
    ]
    if component.description:
        lines.append(component.description)
    return "\n".join(lines)


def _encode_node(component: ComponentNode, view_config: ViewConfig, sizing: NodeSizing) -> VisualNode:
    fill_color, border_color = get_node_colors(component, view_config.view_mode)
    return VisualNode(
        component=component,
        display_label=component.name if view_config.show_labels else "",
        fill_color=fill_color,
        border_color=border_color,
        radius=get_node_radius(component, sizing),
        shape=get_node_shape(component),
        hierarchy_level=get_hierarchy_level(component, view_config.view_mode),
        group=enum_text(component.layer),
        font_size=10 if len(component.name) > LONG_NAME_THRESHOLD else 14,
        font_color=get_contrast_text_color(fill_color),
        tooltip=create_tooltip(component),
    )


def _encode_edge(relationship: Relationship) -> VisualEdge:
    kind_text = enum_text(relationship.kind)
    return VisualEdge(
        relationship=relationship,
        stroke_color=get_edge_color(relationship),
        stroke_width=get_edge_width(relationship.weight),
        label=relationship.description or kind_text,
        tooltip=f"{kind_text}: {relationship.description or 'No description'}",
    )


def project_graph(
    components: Sequence[ComponentNode],
    relationships: Sequence[Relationship],
    view_config: ViewConfig,
    sizing: NodeSizing | None = None,
) -> ProjectedGraph:
    """
    依檢視設定過濾架構模型，並產出可交給渲染引擎的節點/邊投影。

    過濾順序：分類過濾 → 搜尋過濾 → 邊的參照閉包 (任一端點被移除的邊一律丟棄)。

    Args:
        components: 外部提供的組件序列。
        relationships: 外部提供的關係序列。
        view_config: 檢視設定的不可變快照。
        sizing: 節點半徑公式參數，預設使用 NodeSizing()。

    Returns:
        ProjectedGraph；過濾後為空時回傳空投影，而非拋出錯誤。
    """
    sizing = sizing or NodeSizing()
    category = _resolve_category(view_config.category_filter)

    filtered_components = [
        c
        for c in components
        if matches_category(c, category) and matches_search(c, view_config.search_term)
    ]
    surviving_ids = {c.id for c in filtered_components}
    filtered_relationships = [
        r for r in relationships if r.source in surviving_ids and r.target in surviving_ids
    ]

    logging.debug(
        f"投影完成：{len(filtered_components)}/{len(components)} 個節點，"
        f"{len(filtered_relationships)}/{len(relationships)} 條邊 "
        f"(filter={category.value}, search='{view_config.search_term}', mode={enum_text(view_config.view_mode)})。"
    )

    return ProjectedGraph(
        nodes=tuple(_encode_node(c, view_config, sizing) for c in filtered_components),
        edges=tuple(_encode_edge(r) for r in filtered_relationships),
    )
