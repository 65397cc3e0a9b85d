from __future__ import annotations

from pathlib import Path

import pytest
from archview.builders import project_graph
from archview.core import ConfigLoader, InteractiveWizard
from archview.models import CategoryFilter, ComponentNode, ViewConfig


def _feed_input(monkeypatch: pytest.MonkeyPatch, *answers: str) -> None:
    replies = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "project.yaml"
    path.write_text("view:\n  category_filter: all\n", encoding="utf-8")
    return path


def test_category_counts_are_sorted_by_size(config_path: Path, mixed_components: list[ComponentNode]) -> None:
    wizard = InteractiveWizard(config_path)

    wizard.analyze_categories(mixed_components)

    assert wizard.category_counts == [
        (CategoryFilter.TYPESCRIPT, 2),
        (CategoryFilter.CONFIG, 1),
        (CategoryFilter.CPP, 1),
        (CategoryFilter.JAVASCRIPT, 1),
        (CategoryFilter.PYTHON, 1),
    ]


def test_choosing_a_category_updates_config(
    monkeypatch: pytest.MonkeyPatch, config_path: Path, mixed_components: list[ComponentNode]
) -> None:
    _feed_input(monkeypatch, "abc", "99", "1")
    projected = project_graph(mixed_components, [], ViewConfig())

    action = InteractiveWizard(config_path).run(mixed_components, projected)

    assert action == "proceed"
    assert ConfigLoader(config_path).build_view_config().category_filter == CategoryFilter.TYPESCRIPT


def test_search_option_writes_search_term(
    monkeypatch: pytest.MonkeyPatch, config_path: Path, mixed_components: list[ComponentNode]
) -> None:
    _feed_input(monkeypatch, "6", "  services  ")
    projected = project_graph(mixed_components, [], ViewConfig())

    action = InteractiveWizard(config_path).run(mixed_components, projected)

    assert action == "proceed"
    assert ConfigLoader(config_path).build_view_config().search_term == "services"


def test_force_and_exit_options(
    monkeypatch: pytest.MonkeyPatch, config_path: Path, mixed_components: list[ComponentNode]
) -> None:
    projected = project_graph(mixed_components, [], ViewConfig())

    _feed_input(monkeypatch, "7")
    assert InteractiveWizard(config_path).run(mixed_components, projected) == "proceed"
    assert ConfigLoader(config_path).config["force_analysis"] is True

    _feed_input(monkeypatch, "8")
    assert InteractiveWizard(config_path).run(mixed_components, projected) == "exit"
