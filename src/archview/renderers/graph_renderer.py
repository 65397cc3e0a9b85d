# src/archview/renderers/graph_renderer.py
"""
封裝依賴關係圖的 Graphviz 渲染邏輯。
佈局與像素座標完全交由 Graphviz 計算；本模組只負責把投影轉為 DOT 描述。
"""

# 1. 標準庫導入
import html
import logging
import subprocess
from collections import defaultdict
from pathlib import Path
from typing import Any

# 2. 第三方庫導入
import graphviz

# 3. 本專案導入
from archview.builders.graph_projector import (
    EDGE_COLORS,
    KIND_COLORS,
    LAYER_COLORS,
    LAYER_LEVELS,
    enum_text,
)
from archview.models.view_models import ProjectedGraph, ViewConfig, ViewMode, VisualNode
from archview.utils.color_utils import get_analogous_dark_color

# 投影使用的標記形狀 -> Graphviz 節點形狀
GRAPHVIZ_SHAPES: dict[str, str] = {
    "box": "box",
    "ellipse": "ellipse",
    "diamond": "diamond",
    "star": "star",
    "triangle": "triangle",
    "square": "square",
    "dot": "circle",
}

POINTS_PER_INCH = 72.0
FONT_NAME = "Inter"


def _create_legend_html(projected: ProjectedGraph, view_mode: ViewMode | str) -> str:
    """依目前檢視模式，只列出圖中實際出現的節點色彩與關係類型。"""
    font_tag_start = f'<FONT FACE="{FONT_NAME}" POINT-SIZE="10">'
    font_tag_end = "</FONT>"
    is_layers = enum_text(view_mode) == ViewMode.LAYERS.value

    palette = LAYER_COLORS if is_layers else KIND_COLORS
    header = "Layers" if is_layers else "Component Types"
    active_keys = sorted(
        {node.group if is_layers else enum_text(node.component.kind) for node in projected.nodes}
    )

    node_rows = [f'<TR><TD COLSPAN="2" ALIGN="LEFT"><B>{font_tag_start}{header}{font_tag_end}</B></TD></TR>']
    for key in active_keys:
        fill, border = palette.get(key, ("#FFFFFF", "#888888"))
        node_rows.append(
            f'<TR><TD BGCOLOR="{fill}" COLOR="{border}" WIDTH="16" HEIGHT="16" BORDER="1" FIXEDSIZE="TRUE"></TD>'
            f'<TD ALIGN="LEFT">{font_tag_start}{html.escape(key)}{font_tag_end}</TD></TR>'
        )

    active_kinds = sorted({enum_text(edge.relationship.kind) for edge in projected.edges})
    link_rows = []
    if active_kinds:
        link_rows.append(
            f'<TR><TD COLSPAN="2" ALIGN="LEFT"><B>{font_tag_start}Relationships{font_tag_end}</B></TD></TR>'
        )
        for kind in active_kinds:
            color = EDGE_COLORS.get(kind, "#64748b")
            link_rows.append(
                f'<TR><TD ALIGN="RIGHT"><FONT COLOR="{color}">&mdash;&mdash;&gt;</FONT></TD>'
                f'<TD ALIGN="LEFT">{font_tag_start}{html.escape(kind)}{font_tag_end}</TD></TR>'
            )

    left_table = f'<TABLE BORDER="0" CELLBORDER="0" CELLSPACING="4">{"".join(node_rows)}</TABLE>'
    cells = f'<TD VALIGN="TOP">{left_table}</TD>'
    if link_rows:
        right_table = f'<TABLE BORDER="0" CELLBORDER="0" CELLSPACING="4">{"".join(link_rows)}</TABLE>'
        cells += f'<TD WIDTH="1" BGCOLOR="#DDDDDD"></TD><TD VALIGN="TOP">{right_table}</TD>'

    return f'<TABLE BORDER="1" CELLBORDER="0" CELLSPACING="0" BGCOLOR="#FAFAFA" COLOR="#DDDDDD"><TR>{cells}</TR></TABLE>'


def _node_attrs(node: VisualNode) -> dict[str, str]:
    diameter = f"{node.radius * 2 / POINTS_PER_INCH:.2f}"
    return {
        "label": node.display_label,
        "shape": GRAPHVIZ_SHAPES.get(node.shape, "circle"),
        "fillcolor": node.fill_color,
        "color": node.border_color,
        "fontcolor": node.font_color,
        "fontsize": str(node.font_size),
        "width": diameter,
        "height": diameter,
        "tooltip": node.tooltip,
        "id": node.id,
    }


def generate_graph_dot_source(
    projected: ProjectedGraph,
    project_name: str,
    view_config: ViewConfig,
    graph_config: dict[str, Any] | None = None,
) -> str:
    """
    生成依賴關係圖的 DOT 原始碼字串。

    Args:
        projected: 由 project_graph 產出的投影。
        project_name: 顯示在標題中的專案名稱。
        view_config: 產生此投影時使用的檢視設定。
        graph_config: visualization.dependency_map 設定區塊。

    Returns:
        DOT 格式的圖形描述字串。
    """
    graph_config = graph_config or {}
    layout_engine = graph_config.get("layout_engine", "dot")
    is_layers = enum_text(view_config.view_mode) == ViewMode.LAYERS.value

    dot = graphviz.Digraph("DependencyMap")

    if projected.is_empty:
        dot.node("empty_graph", "No components match the current filters", shape="plaintext")
        return dot.source

    subtitle = (
        f"view: {enum_text(view_config.view_mode)} | filter: {enum_text(view_config.category_filter)}"
        f" | engine: {layout_engine}"
    )
    if view_config.search_term:
        subtitle += f" | search: {view_config.search_term}"

    header_html = (
        f'<<TABLE BORDER="0" CELLBORDER="0" CELLSPACING="0" CELLPADDING="10">'
        f'<TR><TD><FONT FACE="{FONT_NAME}" POINT-SIZE="24"><B>{html.escape(project_name)}</B></FONT></TD></TR>'
        f'<TR><TD><FONT FACE="{FONT_NAME}" POINT-SIZE="14">{html.escape(subtitle)}</FONT></TD></TR>'
        f"<TR><TD>{_create_legend_html(projected, view_config.view_mode)}</TD></TR>"
        f"</TABLE>>"
    )

    dot.attr(
        label=header_html,
        labelloc="t",
        fontname=FONT_NAME,
        charset="UTF-8",
        rankdir="TB" if is_layers else "LR",
        nodesep="0.6",
        ranksep="1" if is_layers else "0.8",
    )
    dot.attr("node", style="filled", fontname=FONT_NAME, penwidth="2", fixedsize="false")
    dot.attr("edge", arrowsize="0.8", fontname=FONT_NAME, fontsize="10")

    # 組件 id 可能含有 ':'，Graphviz 會將其解讀為 node:port，因此改用內部名稱。
    node_names = {node.id: f"n{index}" for index, node in enumerate(projected.nodes)}

    if is_layers:
        nodes_by_level: dict[int, list[VisualNode]] = defaultdict(list)
        for node in projected.nodes:
            nodes_by_level[node.hierarchy_level or LAYER_LEVELS["business"]].append(node)

        levels = sorted(nodes_by_level)
        for level in levels:
            with dot.subgraph(name=f"level_{level}") as s:
                s.attr(rank="same")
                s.node(f"level_anchor_{level}", label="", style="invis", width="0", height="0")
                for node in nodes_by_level[level]:
                    s.node(node_names[node.id], **_node_attrs(node))
        for upper, lower in zip(levels, levels[1:], strict=False):
            dot.edge(f"level_anchor_{upper}", f"level_anchor_{lower}", style="invis")
    else:
        for node in projected.nodes:
            dot.node(node_names[node.id], **_node_attrs(node))

    for edge in projected.edges:
        edge_attrs = {
            "color": edge.stroke_color,
            "penwidth": f"{edge.stroke_width:g}",
            "tooltip": edge.tooltip,
        }
        if view_config.show_labels:
            edge_attrs["label"] = edge.label
            edge_attrs["fontcolor"] = get_analogous_dark_color(edge.stroke_color)
        dot.edge(node_names[edge.source], node_names[edge.target], **edge_attrs)

    return dot.source


def render_graph(
    dot_source: str,
    output_path: Path,
    graph_config: dict[str, Any] | None = None,
) -> bool:
    """
    使用 Graphviz 執行檔將 DOT 原始碼渲染成圖片檔案。

    Returns:
        渲染成功時回傳 True；任何 Graphviz 相關錯誤只記錄日誌並回傳 False。
    """
    graph_config = graph_config or {}
    layout_engine = graph_config.get("layout_engine", "dot")
    dpi = graph_config.get("dpi", 200)
    render_timeout = graph_config.get("render_timeout", 120)

    logging.info(f"準備將依賴關係圖渲染至: {output_path} (DPI: {dpi}, Timeout: {render_timeout}s)")
    command = [layout_engine, f"-T{output_path.suffix[1:]}", f"-Gdpi={dpi}"]
    try:
        process = subprocess.run(
            command, input=dot_source.encode("utf-8"), capture_output=True, check=True, timeout=render_timeout
        )
        with open(output_path, "wb") as f:
            f.write(process.stdout)
        logging.info(f"圖表已成功儲存至: {output_path}")
        return True
    except subprocess.TimeoutExpired:
        logging.error(f"Graphviz 渲染超時 (超過 {render_timeout} 秒)。")
        logging.info("建議：設定分類過濾或搜尋詞以縮小圖表，或在設定中增加 'render_timeout'。")
    except subprocess.CalledProcessError as e:
        logging.error(f"Graphviz ({layout_engine}) 執行時返回錯誤。")
        error_message = e.stderr.decode("utf-8", errors="ignore")
        logging.error(f"Graphviz 錯誤訊息:\n{error_message}")
    except FileNotFoundError:
        logging.error(f"Graphviz 執行檔 '{layout_engine}' 未找到。請確保 Graphviz 已安裝並已加入系統 PATH。")
    except OSError as e:
        logging.error(f"寫入圖檔時發生錯誤: {e}")
    return False
