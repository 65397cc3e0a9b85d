# src/archview/core/project_processor.py
"""
ArchView 的核心處理引擎：串連清單解析、檔案樹建構、圖形投影、渲染與報告。
"""

# 1. 標準庫導入
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

# 2. 第三方庫導入
import yaml

# 3. 本專案導入
from archview.builders.graph_projector import project_graph
from archview.builders.tree_builder import build_tree
from archview.core.config_loader import ConfigLoader
from archview.core.interactive_wizard import InteractiveWizard
from archview.intelligence.graph_analyzer import GraphAnalyzer
from archview.models.architecture_models import ArchitectureModel
from archview.models.tree_models import TreeNode
from archview.models.view_models import CategoryFilter, ProjectedGraph
from archview.parsers.architecture_parser import load_architecture
from archview.parsers.listing_parser import load_tree_listing
from archview.renderers.graph_renderer import generate_graph_dot_source, render_graph
from archview.reporters.markdown_reporter import generate_markdown_report
from archview.utils.path_utils import resolve_relative_to

ASSESSMENT_THRESHOLDS = {
    "max_nodes_before_wizard": 300,
}


class ProjectProcessor:
    """一個處理單一專案完整流程的類別。"""

    def __init__(self, config_path: Path):
        self.config_path = config_path
        self.project_name = config_path.stem
        self.config_loader = ConfigLoader(config_path)
        self.config = self.config_loader.config

    def run(self):
        """執行完整的專案處理流程。"""
        if self.config is None:
            logging.error(f"因設定檔 '{self.config_path.name}' 載入失敗，終止處理。")
            return

        logging.info(f"========== 開始處理專案: {self.project_name} ==========")

        analysis_types = self.config.get("analysis_types", [])
        if not isinstance(analysis_types, list) or not analysis_types:
            logging.warning(f"設定檔 '{self.config_path.name}' 中 'analysis_types' 為空或格式不正確，已跳過。")
            return

        output_dir = resolve_relative_to(self.config_path, self.config.get("output_dir", "output"))
        os.makedirs(output_dir, exist_ok=True)

        report_analysis_results: dict[str, Any] = {}

        for analysis_type in analysis_types:
            logging.info(f"--- 開始執行分析: '{analysis_type}' ---")
            if analysis_type == "file_tree":
                file_tree = self._run_file_tree()
                if file_tree is not None:
                    report_analysis_results["file_tree"] = file_tree
            elif analysis_type == "dependency_map":
                keep_going = self._run_dependency_map(output_dir, report_analysis_results)
                if not keep_going:
                    return
            else:
                logging.warning(f"未知的分析類型 '{analysis_type}'，已跳過。")

        if report_analysis_results:
            report_output_path = output_dir / f"{self.project_name}_ArchViewReport.md"
            generate_markdown_report(
                project_name=self.project_name,
                output_path=report_output_path,
                analysis_results=report_analysis_results,
                report_settings=self.config.get("report_settings", {}),
            )

        logging.info(f"========== 專案 '{self.project_name}' 處理完成 ==========\n")

    def _resolve_input(self, key: str) -> Path | None:
        path_str = self.config.get(key)
        if not path_str:
            logging.error(f"設定檔 '{self.config_path.name}' 中缺少 '{key}'。")
            return None
        path = resolve_relative_to(self.config_path, path_str)
        if not path.is_file():
            logging.error(f"輸入檔案不存在: {path}")
            return None
        return path

    def _run_file_tree(self) -> list[TreeNode] | None:
        """載入扁平清單並重建檔案樹。"""
        listing_path = self._resolve_input("tree_listing_path")
        if listing_path is None:
            return None
        try:
            records = load_tree_listing(listing_path)
        except (OSError, json.JSONDecodeError, ValueError) as e:
            logging.error(f"載入檔案清單 '{listing_path.name}' 時發生錯誤: {e}")
            return None

        file_tree = build_tree(records)
        logging.info(f"檔案樹重建完成，根層級共有 {len(file_tree)} 個項目。")
        return file_tree

    def _load_model(self) -> ArchitectureModel | None:
        model_path = self._resolve_input("architecture_path")
        if model_path is None:
            return None
        try:
            return load_architecture(model_path)
        except (OSError, json.JSONDecodeError, yaml.YAMLError, ValueError) as e:
            logging.error(f"載入架構模型 '{model_path.name}' 時發生錯誤: {e}")
            return None

    def _project(self, model: ArchitectureModel) -> ProjectedGraph:
        return project_graph(
            model.components,
            model.relationships,
            self.config_loader.build_view_config(),
            self.config_loader.build_node_sizing(),
        )

    def _run_dependency_map(self, output_dir: Path, report_analysis_results: dict[str, Any]) -> bool:
        """
        投影並渲染依賴關係圖。

        Returns:
            使用者在精靈中選擇退出時回傳 False，其餘情況回傳 True。
        """
        model = self._load_model()
        if model is None:
            return True

        projected = self._project(model)
        while self._needs_wizard(len(projected.nodes)):
            wizard = InteractiveWizard(self.config_path)
            action = wizard.run(model.components, projected)
            if action == "exit":
                logging.info("使用者選擇退出。")
                return False

            self.config_loader = ConfigLoader(self.config_path)
            self.config = self.config_loader.config
            if self.config is None:
                logging.error("重新載入設定檔失敗，終止處理。")
                return False
            projected = self._project(model)

        view_config = self.config_loader.build_view_config()
        graph_config = self.config_loader.graph_config
        stats = GraphAnalyzer(projected).compute_stats()

        repository_url = model.metadata.get("repositoryUrl") or model.metadata.get("repository_url")
        display_name = str(repository_url).rstrip("/").split("/")[-1] if repository_url else self.project_name
        dot_source = generate_graph_dot_source(projected, display_name, view_config, graph_config)

        output_format = graph_config.get("output_format", "png")
        layout_engine = graph_config.get("layout_engine", "dot")
        image_path = output_dir / f"{self.project_name}_dependency_map_{layout_engine}.{output_format}"
        render_graph(dot_source, image_path, graph_config)

        report_analysis_results.update(
            {
                "projected_graph": projected,
                "view_config": view_config,
                "network_stats": stats,
                "dot_source": dot_source,
            }
        )
        return True

    def _needs_wizard(self, node_count: int) -> bool:
        """判斷是否需要啟動互動式精靈。"""
        view_config = self.config_loader.build_view_config()
        has_filter = view_config.category_filter != CategoryFilter.ALL
        has_search = bool(view_config.search_term)
        is_forced = self.config.get("force_analysis", False)

        return (
            node_count > ASSESSMENT_THRESHOLDS["max_nodes_before_wizard"]
            and not has_filter
            and not has_search
            and not is_forced
            and sys.stdout.isatty()
        )
