from __future__ import annotations

import pytest
from archview.models import ComponentKind, ComponentNode, Layer, PathKind, PathRecord, Relationship, RelationshipKind


def make_component(
    component_id: str,
    file: str,
    *,
    name: str | None = None,
    kind: ComponentKind | str = ComponentKind.MODULE,
    layer: Layer | str = Layer.BUSINESS,
    line_count: int = 0,
    complexity_score: float = 0.0,
    description: str | None = None,
) -> ComponentNode:
    return ComponentNode(
        id=component_id,
        name=name or component_id,
        kind=kind,
        layer=layer,
        file=file,
        line_count=line_count,
        complexity_score=complexity_score,
        description=description,
    )


def make_relationship(
    source: str,
    target: str,
    kind: RelationshipKind | str = RelationshipKind.IMPORTS,
    weight: float = 1.0,
) -> Relationship:
    return Relationship(source=source, target=target, kind=kind, weight=weight)


def file_record(path: str, size: int | None = None) -> PathRecord:
    return PathRecord(path=path, kind=PathKind.FILE, size=size)


def dir_record(path: str) -> PathRecord:
    return PathRecord(path=path, kind=PathKind.DIRECTORY)


@pytest.fixture
def mixed_components() -> list[ComponentNode]:
    return [
        make_component(
            "app",
            "src/App.tsx",
            name="App",
            kind=ComponentKind.COMPONENT,
            layer=Layer.PRESENTATION,
            line_count=120,
            complexity_score=6,
            description="Root UI component",
        ),
        make_component(
            "api",
            "src/services/api.ts",
            name="ApiClient",
            kind=ComponentKind.SERVICE,
            layer=Layer.BUSINESS,
            line_count=240,
            complexity_score=12,
        ),
        make_component("models", "src/db/models.py", kind=ComponentKind.MODULE, layer=Layer.DATA, line_count=60),
        make_component("settings", "config/settings.yaml", kind=ComponentKind.CONFIG, layer=Layer.INFRASTRUCTURE),
        make_component("legacy", "lib/legacy.js", kind=ComponentKind.FUNCTION, layer=Layer.EXTERNAL),
        make_component("native", "native/core.cpp", kind=ComponentKind.CLASS, layer=Layer.INFRASTRUCTURE),
        make_component("Makefile", "Makefile", kind=ComponentKind.CONFIG, layer=Layer.INFRASTRUCTURE),
    ]


@pytest.fixture
def mixed_relationships() -> list[Relationship]:
    return [
        make_relationship("app", "api", RelationshipKind.CALLS, weight=2),
        make_relationship("api", "models", RelationshipKind.USES),
        make_relationship("api", "settings", RelationshipKind.CONFIGURES, weight=0.5),
        make_relationship("app", "legacy", RelationshipKind.IMPORTS),
        make_relationship("native", "Makefile", RelationshipKind.CONFIGURES),
    ]
