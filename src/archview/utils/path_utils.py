# src/archview/utils/path_utils.py
"""
提供與專案路徑解析相關的通用工具函式。
"""

# 1. 標準庫導入
import importlib.resources
from pathlib import Path

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
# (無)


def find_project_root(marker: str = "pyproject.toml") -> Path:
    """
    使用 importlib.resources 定位套件位置，然後向上遍歷尋找標記檔案。
    找不到時，改由當前工作目錄向上尋找。
    """
    try:
        anchor = importlib.resources.files("archview")
    except ModuleNotFoundError:
        anchor = Path(__file__).resolve().parent

    for start in (Path(str(anchor)), Path.cwd()):
        current_path = start
        while current_path != current_path.parent:
            if (current_path / marker).exists():
                return current_path
            current_path = current_path.parent

    raise FileNotFoundError(f"無法從 '{anchor}' 或當前工作目錄向上找到專案根目錄標記檔案: {marker}")


def resolve_relative_to(base_file: Path, path_str: str) -> Path:
    """將設定檔中的相對路徑解析為以設定檔所在目錄為基準的絕對路徑。"""
    return (base_file.parent / path_str).resolve()
