# src/archview/models/architecture_models.py
"""
架構模型：由外部靜態分析器產出的組件 (ComponentNode) 與關係 (Relationship)。

本套件只消費這些資料，不負責命名、複雜度評分或關係探索。
"""

# 1. 標準庫導入
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
# (無)


class ComponentKind(str, Enum):
    CLASS = "class"
    FUNCTION = "function"
    MODULE = "module"
    SERVICE = "service"
    COMPONENT = "component"
    CONFIG = "config"


class Layer(str, Enum):
    PRESENTATION = "presentation"
    BUSINESS = "business"
    DATA = "data"
    INFRASTRUCTURE = "infrastructure"
    EXTERNAL = "external"


class RelationshipKind(str, Enum):
    IMPORTS = "imports"
    CALLS = "calls"
    EXTENDS = "extends"
    IMPLEMENTS = "implements"
    USES = "uses"
    CONFIGURES = "configures"


@dataclass(frozen=True)
class ComponentNode:
    """
    一個架構單元 (類別、函式、模組等)。

    kind 與 layer 在可辨識時為列舉成員，否則保留原始字串；
    未知值不會被拒絕，而是在視覺編碼時落回預設樣式。
    """

    id: str
    name: str
    kind: ComponentKind | str
    layer: Layer | str
    file: str
    line_count: int = 0
    complexity_score: float = 0.0
    description: str | None = None
    dependencies: tuple[str, ...] = ()
    exports: tuple[str, ...] = ()


@dataclass(frozen=True)
class Relationship:
    """兩個組件之間有方向、有類型的邊。source/target 即 from/to。"""

    source: str
    target: str
    kind: RelationshipKind | str
    weight: float = 1.0
    description: str | None = None

    @property
    def id(self) -> str:
        return f"{self.source}-{self.target}"


@dataclass(frozen=True)
class ArchitectureModel:
    """組件與關係的集合，附帶原樣傳遞的中繼資料。"""

    components: tuple[ComponentNode, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)
