from __future__ import annotations

from pathlib import Path

import pytest
from archview import __main__ as entry


class _RecordingProcessor:
    runs: list[str] = []

    def __init__(self, config_path: Path):
        self.config_path = config_path

    def run(self) -> None:
        if self.config_path.name == "broken.yaml":
            raise RuntimeError("boom")
        self.runs.append(self.config_path.name)


@pytest.fixture
def workspace(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    (tmp_path / "configs" / "projects").mkdir(parents=True)
    monkeypatch.setattr(entry, "find_project_root", lambda: tmp_path)
    monkeypatch.setattr(entry, "ProjectProcessor", _RecordingProcessor)
    _RecordingProcessor.runs = []
    return tmp_path


def test_runs_every_active_project_and_survives_failures(
    workspace: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (workspace / "configs" / "workspace.yaml").write_text(
        "active_projects:\n  - broken.yaml\n  - demo.yaml\n", encoding="utf-8"
    )

    entry.main()

    assert _RecordingProcessor.runs == ["demo.yaml"]
    assert "broken.yaml" in caplog.text
    assert "boom" in caplog.text
    assert "1/2 個專案處理失敗: broken.yaml" in caplog.text


def test_missing_workspace_file_runs_nothing(workspace: Path, caplog: pytest.LogCaptureFixture) -> None:
    entry.main()

    assert _RecordingProcessor.runs == []
    assert "workspace.yaml" in caplog.text


def test_empty_project_list_runs_nothing(workspace: Path) -> None:
    (workspace / "configs" / "workspace.yaml").write_text("active_projects: []\n", encoding="utf-8")

    entry.main()

    assert _RecordingProcessor.runs == []


def test_malformed_workspace_file_runs_nothing(workspace: Path, caplog: pytest.LogCaptureFixture) -> None:
    (workspace / "configs" / "workspace.yaml").write_text("active_projects: [unclosed\n", encoding="utf-8")

    entry.main()

    assert _RecordingProcessor.runs == []
    assert "解析工作區設定檔" in caplog.text
