# src/archview/utils/tree_text_utils.py
"""
將重建後的檔案樹轉換為文字表示的結構樹。
"""

# 1. 標準庫導入
from collections.abc import Sequence

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from archview.builders.tree_builder import count_files
from archview.models.tree_models import TreeNode

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_file_size(size: int) -> str:
    """將位元組數轉為易讀格式，例如 1536 -> '1.5 KB'。"""
    if size <= 0:
        return "0 B"
    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    if unit_index == 0:
        return f"{int(value)} B"
    return f"{round(value, 2):g} {SIZE_UNITS[unit_index]}"


def render_tree_lines(
    nodes: Sequence[TreeNode],
    root_label: str | None = None,
    show_sizes: bool = True,
) -> list[str]:
    """
    生成檔案樹的文字結構，目錄附上檔案數量，檔案附上大小。

    Args:
        nodes: 根層級的 TreeNode 列表。
        root_label: 若提供，會作為第一行的根目錄名稱。
        show_sizes: 是否顯示檔案大小與目錄內的檔案數量。

    Returns:
        一個包含目錄樹結構字串的列表。
    """
    tree_lines = [f"{root_label}/"] if root_label else []

    def recurse(level: Sequence[TreeNode], prefix: str = ""):
        pointers = ["├── "] * (len(level) - 1) + ["└── "]
        for pointer, node in zip(pointers, level, strict=False):
            line = f"{prefix}{pointer}{node.name}"
            if node.is_directory:
                line += "/"
                if show_sizes:
                    line += f" ({count_files(node)} files)"
            elif show_sizes and node.size:
                line += f" ({format_file_size(node.size)})"
            tree_lines.append(line)

            if node.children:
                extension = "│   " if pointer == "├── " else "    "
                recurse(node.children, prefix + extension)

    recurse(nodes)
    return tree_lines
