# src/archview/reporters/markdown_reporter.py
"""
提供將檔案樹與依賴關係圖匯總為單一 Markdown 報告的功能。
"""

# 1. 標準庫導入
import datetime
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from archview.builders.graph_projector import enum_text
from archview.builders.tree_builder import filter_tree
from archview.intelligence.graph_analyzer import GraphAnalyzer
from archview.models.tree_models import TreeNode
from archview.models.view_models import ProjectedGraph, ViewConfig
from archview.utils.tree_text_utils import render_tree_lines


def _generate_adjacency_list_text(projected: ProjectedGraph) -> list[str]:
    """將投影轉換為帶有關係類型標籤的鄰接串列。"""
    if projected.is_empty:
        return ["_目前的過濾條件下沒有任何組件。_\n"]

    adjacency_list: dict[str, list[str]] = defaultdict(list)
    for edge in projected.edges:
        adjacency_list[edge.source].append(f"{enum_text(edge.relationship.kind).upper()}: {edge.target}")

    text_parts = ["<details>\n<summary>點擊展開/摺疊鄰接串列</summary>\n", "```markdown"]
    for node in sorted(projected.nodes, key=lambda n: n.id):
        text_parts.append(f"- **{node.id}** ({node.group}, {enum_text(node.component.kind)}):")
        for edge_str in sorted(adjacency_list.get(node.id, [])):
            text_parts.append(f"  {edge_str}")
    text_parts.append("```\n</details>\n")
    return text_parts


def _format_truncated(listing: dict[str, Any]) -> str:
    if not listing["items"]:
        return "(無)"
    text = ", ".join(listing["items"])
    if listing["more"]:
        text += f" (+{listing['more']} more)"
    return text


def _generate_component_details(projected: ProjectedGraph) -> list[str]:
    """為每個組件產生詳細資訊區塊，內容與互動式側邊面板一致。"""
    analyzer = GraphAnalyzer(projected)
    text_parts = ["<details>\n<summary>點擊展開/摺疊組件詳細資訊</summary>\n"]
    for node in projected.nodes:
        details = analyzer.describe_component(node.id)
        text_parts.append(f"### {details['name']} (`{details['id']}`)")
        text_parts.append(f"- **類型**: {details['kind']} • **架構層**: {details['layer']}")
        text_parts.append(f"- **檔案**: `{details['file']}`")
        text_parts.append(f"- **行數**: {details['lines']} • **複雜度**: {details['complexity']:g}")
        text_parts.append(f"- **依賴套件**: {_format_truncated(details['dependencies'])}")
        text_parts.append(f"- **匯出**: {_format_truncated(details['exports'])}")
        text_parts.append(f"- **被依賴於**: {', '.join(details['dependents']) or '(無)'}")
        text_parts.append(f"- **依賴於**: {', '.join(details['depends_on']) or '(無)'}")
        if details["description"]:
            text_parts.append(f"\n{details['description']}")
        text_parts.append("")
    text_parts.append("</details>\n")
    return text_parts


def _generate_view_section(view_config: ViewConfig, stats: dict[str, int]) -> list[str]:
    return [
        "| 設定 | 值 |",
        "|---|---|",
        f"| 檢視模式 | {enum_text(view_config.view_mode)} |",
        f"| 分類過濾 | {enum_text(view_config.category_filter)} |",
        f"| 搜尋詞 | {view_config.search_term or '(無)'} |",
        f"| 顯示標籤 | {'是' if view_config.show_labels else '否'} |",
        "",
        f"**{stats.get('nodes', 0)}** 個節點 • **{stats.get('edges', 0)}** 條連線 • "
        f"**{stats.get('clusters', 0)}** 個群組 • **{stats.get('connected_components', 0)}** 個連通分量\n",
    ]


def generate_markdown_report(
    project_name: str,
    output_path: Path,
    analysis_results: dict[str, Any],
    report_settings: dict[str, Any],
):
    """
    生成一份 Markdown 分析報告。

    analysis_results 可包含的鍵：
        file_tree: list[TreeNode]
        projected_graph: ProjectedGraph
        view_config: ViewConfig
        network_stats: dict[str, int]
        dot_source: str
    """
    report_parts = []
    analysis_time = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    report_parts.append(f"# ArchView 分析報告: {project_name}")
    report_parts.append(f"**分析時間**: {analysis_time}")

    file_tree: list[TreeNode] | None = analysis_results.get("file_tree")
    if file_tree is not None:
        tree_settings = report_settings.get("tree_view", {})
        visible_tree = filter_tree(
            file_tree,
            search_term=tree_settings.get("search_term", ""),
            show_only_files=tree_settings.get("show_only_files", False),
        )
        report_parts.append("\n## 1. 專案結構總覽")
        report_parts.append("<details>\n<summary>點擊展開/摺疊專案檔案樹</summary>\n")
        report_parts.append("```")
        report_parts.extend(
            render_tree_lines(visible_tree, root_label=project_name, show_sizes=tree_settings.get("show_sizes", True))
        )
        report_parts.append("```\n</details>\n")

    projected: ProjectedGraph | None = analysis_results.get("projected_graph")
    if projected is not None:
        view_config = analysis_results.get("view_config") or ViewConfig()
        report_parts.append("## 2. 依賴關係圖檢視")
        report_parts.extend(_generate_view_section(view_config, analysis_results.get("network_stats", {})))
        report_parts.append("## 3. 組件關係 (鄰接串列)")
        report_parts.extend(_generate_adjacency_list_text(projected))
        if not projected.is_empty:
            report_parts.append("## 4. 組件詳細資訊")
            report_parts.extend(_generate_component_details(projected))

    dot_source = analysis_results.get("dot_source")
    if dot_source:
        report_parts.append("## 5. 依賴關係圖 DOT 原始碼")
        report_parts.append("<details>\n<summary>點擊展開/摺疊 DOT 原始碼</summary>\n")
        report_parts.append("```dot")
        report_parts.append(dot_source)
        report_parts.append("```\n</details>\n")

    try:
        output_path.write_text("\n".join(report_parts), encoding="utf-8")
        logging.info(f"Markdown 報告已成功儲存至: {output_path}")
    except OSError as e:
        logging.error(f"寫入 Markdown 報告時發生錯誤: {e}")
