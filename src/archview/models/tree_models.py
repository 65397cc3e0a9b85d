# src/archview/models/tree_models.py
"""
檔案樹相關的資料模型：扁平清單中的 PathRecord 與重建後的 TreeNode。
"""

# 1. 標準庫導入
from dataclasses import dataclass
from enum import Enum

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
# (無)


class PathKind(str, Enum):
    """清單項目的種類。"""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class PathRecord:
    """
    扁平儲存庫清單中的單一項目 (檔案或目錄)。

    Attributes:
        path: 以 '/' 分隔、不含前導斜線的完整路徑。
        kind: 檔案或目錄。
        size: 檔案大小 (位元組)，目錄通常為 None。
        id: 來源端提供的不透明識別碼 (例如 Git 物件的 sha)。
    """

    path: str
    kind: PathKind
    size: int | None = None
    id: str | None = None

    @property
    def depth(self) -> int:
        return len(self.path.split("/"))


@dataclass(frozen=True)
class TreeNode:
    """
    重建後檔案樹中的單一節點。

    目錄節點的 children 為 tuple (可能為空)，檔案節點的 children 為 None。
    """

    name: str
    path: str
    kind: PathKind
    size: int | None = None
    children: tuple["TreeNode", ...] | None = None

    @property
    def is_directory(self) -> bool:
        return self.kind == PathKind.DIRECTORY
