# src/archview/__main__.py
"""
ArchView 主執行入口。
"""

# 1. 標準庫導入
import logging
from pathlib import Path

# 2. 第三方庫導入
import yaml

# 3. 本專案導入
from archview.core.project_processor import ProjectProcessor
from archview.utils.path_utils import find_project_root

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _setup_logging(level: int = logging.INFO):
    """設定根日誌記錄器；已有處理器時 (例如由外部程式嵌入) 只調整層級。"""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if root_logger.handlers:
        return
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)


def _load_active_projects(workspace_path: Path) -> list[str] | None:
    """讀取工作區設定中的 active_projects；設定檔不存在或無法解析時回傳 None。"""
    if not workspace_path.is_file():
        logging.error(f"工作區設定檔 '{workspace_path}' 不存在。")
        logging.info("請從 'workspace.template.yaml' 複製一份並進行設定。")
        return None
    try:
        with open(workspace_path, encoding="utf-8") as f:
            workspace_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logging.error(f"解析工作區設定檔時發生錯誤: {e}")
        return None
    return [str(name) for name in workspace_config.get("active_projects") or []]


def main():
    """依工作區設定逐一處理專案，單一專案失敗不影響其他專案。"""
    _setup_logging()

    try:
        project_root = find_project_root()
    except FileNotFoundError as e:
        logging.error(f"初始化失敗: {e}")
        return

    configs_dir = project_root / "configs"
    active_projects = _load_active_projects(configs_dir / "workspace.yaml")
    if active_projects is None:
        return
    if not active_projects:
        logging.warning("工作區設定檔中沒有指定任何 'active_projects'。")
        return

    logging.info(f"ArchView 啟動，共有 {len(active_projects)} 個專案待處理。")
    failed: list[str] = []
    for project_config_name in active_projects:
        try:
            ProjectProcessor(configs_dir / "projects" / project_config_name).run()
        except Exception as e:
            logging.error(f"處理專案 '{project_config_name}' 時發生未預期的嚴重錯誤: {e}", exc_info=True)
            failed.append(project_config_name)

    if failed:
        logging.warning(f"{len(failed)}/{len(active_projects)} 個專案處理失敗: {', '.join(failed)}")
    else:
        logging.info(f"全部 {len(active_projects)} 個專案處理完成。")


if __name__ == "__main__":
    main()
