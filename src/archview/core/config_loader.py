# src/archview/core/config_loader.py
"""
負責載入、合併與更新所有與專案處理相關的設定，並產生不可變的檢視設定快照。
"""

# 1. 標準庫導入
import copy
import logging
from pathlib import Path
from typing import Any

# 2. 第三方庫導入
import yaml
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError as RuamelYAMLError

# 3. 本專案導入
from archview.models.view_models import CategoryFilter, NodeSizing, ViewConfig, ViewMode

DEFAULT_VIEW_CONFIG: dict[str, Any] = {
    "category_filter": CategoryFilter.ALL.value,
    "search_term": "",
    "view_mode": ViewMode.DEPENDENCIES.value,
    "show_labels": True,
}

DEFAULT_VIS_CONFIG: dict[str, Any] = {
    "dependency_map": {
        "layout_engine": "dot",
        "dpi": 200,
        "render_timeout": 120,
        "output_format": "png",
        "node_sizing": {
            "base_radius": 16,
            "complexity_weight": 8,
            "line_weight": 4,
        },
    },
}

DEFAULT_REPORT_SETTINGS: dict[str, Any] = {
    "tree_view": {
        "search_term": "",
        "show_only_files": False,
        "show_sizes": True,
    },
}

DEFAULT_ANALYSIS_TYPES = ["file_tree", "dependency_map"]


class ConfigLoader:
    """一個處理設定檔載入與合併的類別。"""

    def __init__(self, config_path: Path):
        self.config_path = config_path
        self.config = self._load_yaml(config_path)
        if self.config is not None:
            self._process_config()

    @staticmethod
    def _load_yaml(path: Path) -> dict[str, Any] | None:
        """安全地載入一個 YAML 檔案。"""
        if not path.is_file():
            logging.error(f"指定的設定檔不存在: {path}")
            return None
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logging.error(f"解析設定檔 '{path.name}' 時發生錯誤: {e}")
            return None
        if data is None:
            return {}
        if not isinstance(data, dict):
            logging.error(f"設定檔 '{path.name}' 的頂層必須是映射。")
            return None
        return data

    def _process_config(self):
        """將使用者設定合併到預設設定之上。"""
        self.config["view"] = self._merge_configs(copy.deepcopy(DEFAULT_VIEW_CONFIG), self.config.get("view") or {})
        self.config["visualization"] = self._merge_configs(
            copy.deepcopy(DEFAULT_VIS_CONFIG), self.config.get("visualization") or {}
        )
        self.config["report_settings"] = self._merge_configs(
            copy.deepcopy(DEFAULT_REPORT_SETTINGS), self.config.get("report_settings") or {}
        )
        self.config.setdefault("analysis_types", list(DEFAULT_ANALYSIS_TYPES))
        self.config.setdefault("output_dir", "output")

    @staticmethod
    def _merge_configs(default: dict, user: dict) -> dict:
        """遞迴地合併使用者設定到預設設定中。"""
        for key, value in user.items():
            if isinstance(value, dict) and isinstance(default.get(key), dict):
                default[key] = ConfigLoader._merge_configs(default[key], value)
            else:
                default[key] = value
        return default

    def build_view_config(self) -> ViewConfig:
        """
        由 'view' 區塊建立 ViewConfig 快照。
        無效的列舉值會記錄警告並改用預設值。
        """
        view = (self.config or {}).get("view", DEFAULT_VIEW_CONFIG)

        category_value = str(view.get("category_filter", CategoryFilter.ALL.value)).lower()
        try:
            category_filter = CategoryFilter(category_value)
        except ValueError:
            logging.warning(f"無效的 category_filter '{category_value}'，改用 'all'。")
            category_filter = CategoryFilter.ALL

        mode_value = str(view.get("view_mode", ViewMode.DEPENDENCIES.value)).lower()
        try:
            view_mode = ViewMode(mode_value)
        except ValueError:
            logging.warning(f"無效的 view_mode '{mode_value}'，改用 'dependencies'。")
            view_mode = ViewMode.DEPENDENCIES

        return ViewConfig(
            category_filter=category_filter,
            search_term=str(view.get("search_term") or ""),
            view_mode=view_mode,
            show_labels=bool(view.get("show_labels", True)),
        )

    def build_node_sizing(self) -> NodeSizing:
        """由 visualization.dependency_map.node_sizing 建立 NodeSizing。"""
        sizing = self.graph_config.get("node_sizing", {})
        defaults = NodeSizing()
        values = {}
        for field_name in ("base_radius", "complexity_weight", "line_weight"):
            raw = sizing.get(field_name, getattr(defaults, field_name))
            try:
                values[field_name] = float(raw)
            except (TypeError, ValueError):
                logging.warning(f"無效的 node_sizing.{field_name} '{raw}'，改用預設值。")
                values[field_name] = getattr(defaults, field_name)
        return NodeSizing(**values)

    @property
    def graph_config(self) -> dict[str, Any]:
        return (self.config or {}).get("visualization", DEFAULT_VIS_CONFIG).get("dependency_map", {})

    @staticmethod
    def update_config_file(config_path: Path, updates: dict[str, Any]):
        """使用 ruamel.yaml 安全地更新設定檔，保留註解和格式。"""
        yaml_loader = YAML()
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = yaml_loader.load(f)
            if config_data is None:
                config_data = {}

            for key, value in updates.items():
                keys = key.split(".")
                d = config_data
                for k in keys[:-1]:
                    d = d.setdefault(k, {})
                d[keys[-1]] = value

            with open(config_path, "w", encoding="utf-8") as f:
                yaml_loader.dump(config_data, f)
            logging.info(f"已自動更新設定檔: {config_path.name}")
        except (OSError, RuamelYAMLError) as e:
            logging.error(f"自動更新設定檔 '{config_path.name}' 時失敗: {e}")
