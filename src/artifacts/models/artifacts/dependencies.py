"""Dependency records for template inheritance between Helix modules.

Each record is one resolved base-template reference, validated against the
Helix layering rules at the time it was resolved.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class DependencyRecord(BaseModel):
    """A template depending on one of its base templates."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    source_id: str
    source_path: str
    source_module_id: str
    source_layer: str
    target_id: str
    target_path: str
    target_module_id: str
    target_layer: str
    cross_module: bool
    is_valid: bool
    message: str | None = None


__all__ = ["DependencyRecord"]
