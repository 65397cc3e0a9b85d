# src/archview/parsers/listing_parser.py
"""
解析原始碼託管服務的遞迴 tree API 回應，產出 PathRecord 列表。
"""

# 1. 標準庫導入
import json
import logging
from pathlib import Path
from typing import Any

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from archview.models.tree_models import PathKind, PathRecord

ENTRY_TYPE_MAP: dict[str, PathKind] = {
    "blob": PathKind.FILE,
    "file": PathKind.FILE,
    "tree": PathKind.DIRECTORY,
    "dir": PathKind.DIRECTORY,
    "directory": PathKind.DIRECTORY,
}

# 子模組 (gitlink) 在 tree API 中以 commit 類型出現，沒有可瀏覽的內容。
SKIPPED_ENTRY_TYPES = {"commit"}


def parse_tree_listing(payload: dict[str, Any] | list[dict[str, Any]]) -> list[PathRecord]:
    """
    將 tree API 的回應轉換為 PathRecord 列表。

    Args:
        payload: 含有 "tree" 列表的回應物件，或直接為項目列表。

    Returns:
        PathRecord 列表，順序與輸入一致。

    Raises:
        ValueError: 回應格式不正確，或某個項目缺少 path。
    """
    if isinstance(payload, dict):
        if payload.get("truncated"):
            logging.warning("tree API 回應已被截斷，重建的檔案樹可能不完整。")
        entries = payload.get("tree")
    else:
        entries = payload

    if not isinstance(entries, list):
        raise ValueError("清單格式不正確：預期為項目列表或含有 'tree' 列表的物件。")

    records: list[PathRecord] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict) or not entry.get("path"):
            raise ValueError(f"清單第 {index} 個項目缺少 'path' 欄位: {entry!r}")

        entry_type = str(entry.get("type", "blob")).lower()
        if entry_type in SKIPPED_ENTRY_TYPES:
            logging.debug(f"略過子模組項目: {entry['path']}")
            continue

        kind = ENTRY_TYPE_MAP.get(entry_type)
        if kind is None:
            logging.warning(f"未知的項目類型 '{entry_type}' ({entry['path']})，將視為檔案。")
            kind = PathKind.FILE

        size = entry.get("size")
        records.append(
            PathRecord(
                path=str(entry["path"]),
                kind=kind,
                size=int(size) if size is not None else None,
                id=entry.get("sha") or entry.get("id"),
            )
        )

    logging.info(f"已解析 {len(records)} 個清單項目。")
    return records


def load_tree_listing(listing_path: Path) -> list[PathRecord]:
    """從 JSON 檔案載入並解析 tree API 回應。"""
    with open(listing_path, encoding="utf-8") as f:
        payload = json.load(f)
    return parse_tree_listing(payload)
