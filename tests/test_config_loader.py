from __future__ import annotations

import logging
from pathlib import Path

import pytest
from archview.core import ConfigLoader
from archview.models import CategoryFilter, NodeSizing, ViewConfig, ViewMode


def _write(tmp_path: Path, text: str) -> Path:
    config_path = tmp_path / "project.yaml"
    config_path.write_text(text, encoding="utf-8")
    return config_path


def test_missing_or_invalid_file_yields_no_config(tmp_path: Path) -> None:
    assert ConfigLoader(tmp_path / "missing.yaml").config is None
    assert ConfigLoader(_write(tmp_path, "view: [unclosed\n")).config is None
    assert ConfigLoader(_write(tmp_path, "- just\n- a list\n")).config is None


def test_empty_file_gets_all_defaults(tmp_path: Path) -> None:
    loader = ConfigLoader(_write(tmp_path, ""))

    assert loader.config["analysis_types"] == ["file_tree", "dependency_map"]
    assert loader.config["output_dir"] == "output"
    assert loader.build_view_config() == ViewConfig()
    assert loader.build_node_sizing() == NodeSizing()
    assert loader.graph_config["layout_engine"] == "dot"


def test_user_values_merge_over_defaults(tmp_path: Path) -> None:
    loader = ConfigLoader(
        _write(
            tmp_path,
            "view:\n"
            "  category_filter: Python\n"
            "  view_mode: layers\n"
            "  search_term: models\n"
            "  show_labels: false\n"
            "visualization:\n"
            "  dependency_map:\n"
            "    dpi: 96\n"
            "    node_sizing:\n"
            "      base_radius: 20\n",
        )
    )

    assert loader.build_view_config() == ViewConfig(
        category_filter=CategoryFilter.PYTHON,
        search_term="models",
        view_mode=ViewMode.LAYERS,
        show_labels=False,
    )
    assert loader.graph_config["dpi"] == 96
    assert loader.graph_config["render_timeout"] == 120
    assert loader.build_node_sizing() == NodeSizing(base_radius=20.0)


def test_invalid_view_values_fall_back_with_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    loader = ConfigLoader(
        _write(
            tmp_path,
            "view:\n"
            "  category_filter: rust\n"
            "  view_mode: galaxy\n"
            "visualization:\n"
            "  dependency_map:\n"
            "    node_sizing:\n"
            "      line_weight: heavy\n",
        )
    )

    with caplog.at_level(logging.WARNING):
        view_config = loader.build_view_config()
        sizing = loader.build_node_sizing()

    assert view_config.category_filter == CategoryFilter.ALL
    assert view_config.view_mode == ViewMode.DEPENDENCIES
    assert sizing.line_weight == NodeSizing().line_weight
    assert "rust" in caplog.text
    assert "galaxy" in caplog.text


def test_update_config_file_preserves_comments(tmp_path: Path) -> None:
    config_path = _write(
        tmp_path,
        "# 專案設定\n"
        "view:\n"
        "  category_filter: all  # 分類\n",
    )

    ConfigLoader.update_config_file(config_path, {"view.search_term": "api", "force_analysis": True})

    text = config_path.read_text(encoding="utf-8")
    assert "# 專案設定" in text
    assert "# 分類" in text
    reloaded = ConfigLoader(config_path)
    assert reloaded.build_view_config().search_term == "api"
    assert reloaded.config["force_analysis"] is True
