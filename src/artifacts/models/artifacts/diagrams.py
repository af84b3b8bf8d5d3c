"""Serialized diagram document."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class NodeRecord(BaseModel):
    id: str
    kind: Literal["layer", "module", "folder", "template"]
    item_id: str
    name: str
    path: str
    label: str | None = None
    style: dict[str, object] = Field(default_factory=dict)


class EdgeRecord(BaseModel):
    id: str
    kind: Literal["containment", "dependency", "generalization"]
    source: str
    target: str
    label: str | None = None
    style: dict[str, object] = Field(default_factory=dict)


class DiagramRecord(BaseModel):
    id: str
    kind: Literal["class", "package"]
    name: str
    owner_id: str | None = None
    layout: str | None = None
    nodes: list[NodeRecord] = Field(default_factory=list)
    edges: list[EdgeRecord] = Field(default_factory=list)


class DiagramsArtifact(BaseModel):
    """Every diagram drawn in one run, in creation order."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    title: str
    diagrams: list[DiagramRecord] = Field(default_factory=list)


__all__ = ["DiagramRecord", "DiagramsArtifact", "EdgeRecord", "NodeRecord"]
