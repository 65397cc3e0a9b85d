# src/archview/parsers/architecture_parser.py
"""
解析外部靜態分析器產出的架構模型 (JSON 或 YAML)。

同時接受兩種欄位命名：
- type / complexity / lines / from / to
- kind / complexityScore / lineCount / source / target
"""

# 1. 標準庫導入
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

# 2. 第三方庫導入
import yaml

# 3. 本專案導入
from archview.models.architecture_models import (
    ArchitectureModel,
    ComponentKind,
    ComponentNode,
    Layer,
    Relationship,
    RelationshipKind,
)

E = TypeVar("E", bound=Enum)


def _first_present(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def _optional_text(value: Any) -> str | None:
    """非空值轉為字串，空值回傳 None。"""
    if value is None or value == "":
        return None
    return str(value)


def _coerce_enum(enum_cls: type[E], value: Any, default: E) -> E | str:
    """可辨識的值轉為列舉成員，未知值保留原始字串，缺值時使用預設。"""
    if value is None:
        return default
    try:
        return enum_cls(str(value))
    except ValueError:
        logging.debug(f"未知的 {enum_cls.__name__} 值 '{value}'，將原樣保留。")
        return str(value)


def _parse_component(data: dict[str, Any]) -> ComponentNode:
    component_id = data.get("id")
    if not component_id:
        raise ValueError(f"組件缺少 'id' 欄位: {data!r}")

    line_count = int(_first_present(data, "lineCount", "line_count", "lines", default=0))
    complexity = float(_first_present(data, "complexityScore", "complexity_score", "complexity", default=0))

    return ComponentNode(
        id=str(component_id),
        name=str(data.get("name") or component_id),
        kind=_coerce_enum(ComponentKind, _first_present(data, "kind", "type"), ComponentKind.MODULE),
        layer=_coerce_enum(Layer, data.get("layer"), Layer.BUSINESS),
        file=str(data.get("file", "")),
        line_count=max(0, line_count),
        complexity_score=max(0.0, complexity),
        description=_optional_text(data.get("description")),
        dependencies=tuple(str(dep) for dep in data.get("dependencies") or ()),
        exports=tuple(str(exp) for exp in data.get("exports") or ()),
    )


def _parse_relationship(data: dict[str, Any]) -> Relationship:
    source = _first_present(data, "from", "source")
    target = _first_present(data, "to", "target")
    if source is None or target is None:
        raise ValueError(f"關係缺少 'from' 或 'to' 欄位: {data!r}")

    weight = float(data.get("weight", 1) or 0)
    if weight <= 0:
        logging.debug(f"關係 {source}-{target} 的權重 {weight} 不為正數，改用 1。")
        weight = 1.0

    return Relationship(
        source=str(source),
        target=str(target),
        kind=_coerce_enum(RelationshipKind, _first_present(data, "kind", "type"), RelationshipKind.USES),
        weight=weight,
        description=_optional_text(data.get("description")),
    )


def parse_architecture(payload: dict[str, Any]) -> ArchitectureModel:
    """
    將架構模型的原始字典轉換為 ArchitectureModel。

    Raises:
        ValueError: 頂層格式不正確，或組件/關係缺少必要欄位。
    """
    if not isinstance(payload, dict):
        raise ValueError("架構模型格式不正確：頂層必須是物件。")

    components = tuple(_parse_component(item) for item in payload.get("components") or [])
    relationships = tuple(_parse_relationship(item) for item in payload.get("relationships") or [])

    logging.info(f"已解析架構模型：{len(components)} 個組件，{len(relationships)} 條關係。")
    return ArchitectureModel(
        components=components,
        relationships=relationships,
        metadata=dict(payload.get("metadata") or {}),
    )


def load_architecture(model_path: Path) -> ArchitectureModel:
    """依副檔名以 JSON 或 YAML 載入架構模型。"""
    with open(model_path, encoding="utf-8") as f:
        if model_path.suffix.lower() in (".yaml", ".yml"):
            payload = yaml.safe_load(f)
        else:
            payload = json.load(f)
    return parse_architecture(payload)
