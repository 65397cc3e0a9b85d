from __future__ import annotations

from pathlib import Path

import pytest
from archview.utils import find_project_root, resolve_relative_to


def test_find_project_root_falls_back_to_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "archview-root.marker").write_text("", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert find_project_root("archview-root.marker") == tmp_path


def test_find_project_root_raises_when_marker_is_absent(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(FileNotFoundError):
        find_project_root("no-such-marker-anywhere.txt")


def test_resolve_relative_to_uses_config_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "configs" / "projects" / "demo.yaml"

    assert resolve_relative_to(config_path, "data/tree.json") == (
        tmp_path / "configs" / "projects" / "data" / "tree.json"
    ).resolve()
    assert resolve_relative_to(config_path, "../../output") == (tmp_path / "output").resolve()
