# src/archview/intelligence/graph_analyzer.py
"""
基於 networkx 的投影圖分析器。
"""

# 1. 標準庫導入
import logging
from typing import Any

# 2. 第三方庫導入
import networkx as nx

# 3. 本專案導入
from archview.builders.graph_projector import enum_text
from archview.models.view_models import ProjectedGraph, VisualNode

DEFAULT_DETAIL_LIMIT = 5


class GraphAnalyzer:
    """
    分析投影後的依賴關係圖，計算網路統計與單一組件的詳細資訊。
    """

    def __init__(self, projected: ProjectedGraph):
        self.projected = projected
        self.nodes_by_id: dict[str, VisualNode] = {node.id: node for node in projected.nodes}
        self.graph = self._build_graph(projected)

    @staticmethod
    def _build_graph(projected: ProjectedGraph) -> nx.DiGraph:
        """將投影轉換為 NetworkX 有向圖。"""
        graph = nx.DiGraph()
        for node in projected.nodes:
            graph.add_node(node.id, group=node.group)
        for edge in projected.edges:
            graph.add_edge(edge.source, edge.target, weight=edge.relationship.weight)
        return graph

    def compute_stats(self) -> dict[str, int]:
        """
        計算網路統計。

        Returns:
            包含 nodes、edges、clusters (不同群組數) 與
            connected_components (弱連通分量數) 的字典。
        """
        if self.graph.number_of_nodes() == 0:
            logging.debug("投影圖為空，統計值皆為 0。")
            return {"nodes": 0, "edges": 0, "clusters": 0, "connected_components": 0}

        stats = {
            "nodes": len(self.projected.nodes),
            "edges": len(self.projected.edges),
            "clusters": len({node.group for node in self.projected.nodes}),
            "connected_components": nx.number_weakly_connected_components(self.graph),
        }
        logging.info(
            f"網路統計：{stats['nodes']} 個節點，{stats['edges']} 條連線，"
            f"{stats['clusters']} 個群組，{stats['connected_components']} 個連通分量。"
        )
        return stats

    @staticmethod
    def _truncate(items: tuple[str, ...] | list[str], limit: int) -> dict[str, Any]:
        return {"items": list(items[:limit]), "more": max(0, len(items) - limit)}

    def describe_component(self, node_id: str, limit: int = DEFAULT_DETAIL_LIMIT) -> dict[str, Any] | None:
        """
        取得單一組件的詳細資訊，供側邊面板或報告使用。

        依賴與匯出清單只保留前 limit 項，其餘以 more 計數表示。
        dependents / depends_on 為在目前投影圖中實際存在的上下游組件。
        """
        node = self.nodes_by_id.get(node_id)
        if node is None:
            return None

        component = node.component
        return {
            "id": component.id,
            "name": component.name,
            "kind": enum_text(component.kind),
            "layer": node.group,
            "file": component.file,
            "lines": component.line_count,
            "complexity": component.complexity_score,
            "description": component.description,
            "dependencies": self._truncate(component.dependencies, limit),
            "exports": self._truncate(component.exports, limit),
            "dependents": sorted(self.graph.predecessors(node_id)),
            "depends_on": sorted(self.graph.successors(node_id)),
        }

    def layer_sizes(self) -> list[tuple[str, int]]:
        """依節點數由大到小列出各群組。"""
        counts: dict[str, int] = {}
        for node in self.projected.nodes:
            counts[node.group] = counts.get(node.group, 0) + 1
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))
