"""Hierarchy records: one row per Helix-indexed template."""

from __future__ import annotations

from pydantic import BaseModel, Field


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class HierarchyRecord(BaseModel):
    """A template together with the module and layer it belongs to."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    template_id: str
    template_path: str
    module_id: str
    module_name: str
    layer_id: str
    layer: str


__all__ = ["HierarchyRecord"]
