# src/archview/builders/tree_builder.py
"""
將扁平、無序的路徑清單 (例如原始碼託管服務的 tree API 回應) 重建為階層式檔案樹。

處理策略：
1. 重複路徑：後出現者勝出，被丟棄的項目會記錄警告。
2. 孤兒路徑 (父目錄從未被列出)：掛到最近的已列出目錄祖先，若無則掛到根層級。
"""

# 1. 標準庫導入
import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from archview.models.tree_models import PathKind, PathRecord, TreeNode


def _normalize_path(path: str) -> str:
    return path.strip("/")


def _deduplicate(records: Iterable[PathRecord]) -> list[PathRecord]:
    """依路徑去除重複項目，後出現者勝出。"""
    by_path: dict[str, PathRecord] = {}
    for record in records:
        path = _normalize_path(record.path)
        if not path:
            logging.debug("略過空路徑項目。")
            continue
        if path in by_path:
            logging.warning(f"清單中出現重複路徑 '{path}'，將以後出現的項目覆寫先前的項目。")
        by_path[path] = record
    return list(by_path.values())


def _find_nearest_directory(path: str, nodes_by_path: dict[str, dict[str, Any]]) -> dict[str, Any] | None:
    """由父路徑開始向上尋找最近的已列出目錄節點。"""
    parts = path.split("/")[:-1]
    while parts:
        candidate = nodes_by_path.get("/".join(parts))
        if candidate is not None and candidate["kind"] == PathKind.DIRECTORY:
            return candidate
        parts.pop()
    return None


def _sort_key(node: dict[str, Any]) -> tuple[bool, str]:
    return node["kind"] != PathKind.DIRECTORY, node["name"]


def _freeze(node: dict[str, Any]) -> TreeNode:
    """遞迴排序子節點並轉為不可變的 TreeNode。"""
    children = None
    if node["kind"] == PathKind.DIRECTORY:
        children = tuple(_freeze(child) for child in sorted(node["children"], key=_sort_key))
    return TreeNode(
        name=node["name"],
        path=node["path"],
        kind=node["kind"],
        size=node["size"],
        children=children,
    )


def build_tree(records: Iterable[PathRecord]) -> list[TreeNode]:
    """
    由扁平路徑清單建構檔案樹森林。

    Args:
        records: PathRecord 序列，順序不限。

    Returns:
        根層級的 TreeNode 列表。每一層皆為「目錄在前、名稱依序數比較排序」。
    """
    unique_records = _deduplicate(records)
    sorted_records = sorted(
        unique_records,
        key=lambda r: (len(_normalize_path(r.path).split("/")), _normalize_path(r.path)),
    )

    roots: list[dict[str, Any]] = []
    nodes_by_path: dict[str, dict[str, Any]] = {}
    orphan_count = 0

    for record in sorted_records:
        path = _normalize_path(record.path)
        parts = path.split("/")
        node: dict[str, Any] = {
            "name": parts[-1],
            "path": path,
            "kind": record.kind,
            "size": record.size,
            "children": [],
        }
        nodes_by_path[path] = node

        if len(parts) == 1:
            roots.append(node)
            continue

        parent = nodes_by_path.get("/".join(parts[:-1]))
        if parent is not None and parent["kind"] == PathKind.DIRECTORY:
            parent["children"].append(node)
            continue

        orphan_count += 1
        ancestor = _find_nearest_directory(path, nodes_by_path)
        if ancestor is not None:
            logging.debug(f"孤兒路徑 '{path}' 的父目錄未被列出，已掛到最近的祖先 '{ancestor['path']}'。")
            ancestor["children"].append(node)
        else:
            logging.debug(f"孤兒路徑 '{path}' 沒有任何已列出的祖先目錄，已掛到根層級。")
            roots.append(node)

    if orphan_count:
        logging.info(f"檔案樹建構完成，其中有 {orphan_count} 個孤兒路徑被重新掛載。")

    return [_freeze(node) for node in sorted(roots, key=_sort_key)]


def count_files(node: TreeNode) -> int:
    """遞迴計算節點下的檔案數量 (檔案本身計為 1)。"""
    if not node.is_directory:
        return 1
    return sum(count_files(child) for child in node.children or ())


def iter_tree(nodes: Iterable[TreeNode]) -> Iterator[TreeNode]:
    """深度優先、前序走訪整個森林。"""
    for node in nodes:
        yield node
        if node.children:
            yield from iter_tree(node.children)


def _with_children(node: TreeNode, children: Sequence[TreeNode]) -> TreeNode:
    return TreeNode(name=node.name, path=node.path, kind=node.kind, size=node.size, children=tuple(children))


def filter_tree(
    nodes: Sequence[TreeNode],
    search_term: str = "",
    show_only_files: bool = False,
) -> list[TreeNode]:
    """
    依搜尋詞過濾檔案樹。

    - 名稱或路徑包含搜尋詞 (不分大小寫) 即視為符合。
    - 不符合的目錄只有在子孫中有符合項目時才會保留。
    - show_only_files 為 True 時，目錄會被攤平，其符合的檔案直接提升到上一層。
    """
    if not search_term and not show_only_files:
        return list(nodes)

    needle = search_term.lower()

    def matches(node: TreeNode) -> bool:
        return not needle or needle in node.name.lower() or needle in node.path.lower()

    def recurse(level: Sequence[TreeNode]) -> list[TreeNode]:
        filtered: list[TreeNode] = []
        for node in level:
            if node.is_directory:
                filtered_children = recurse(node.children or ())
                if show_only_files:
                    filtered.extend(filtered_children)
                elif matches(node) or filtered_children:
                    filtered.append(_with_children(node, filtered_children))
            elif matches(node):
                filtered.append(node)
        return filtered

    return recurse(nodes)
