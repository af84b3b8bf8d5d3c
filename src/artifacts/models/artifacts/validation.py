"""Layering validation report models."""

from __future__ import annotations

from pydantic import BaseModel, Field


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class ValidationErrorEntry(BaseModel):
    """A dependency that violates the Helix layering rules."""

    layer_index: int
    module_name: str
    dependent_path: str
    dependency_path: str
    message: str


class LayerValidationErrors(BaseModel):
    """Violations whose dependent template lives in one layer."""

    layer: str
    layer_id: str
    layer_index: int
    errors: list[ValidationErrorEntry] = Field(default_factory=list)


class ValidationReport(BaseModel):
    """Violations grouped by the dependent's layer, in layer order."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    errors_detected: bool = False
    layers: list[LayerValidationErrors] = Field(default_factory=list)

    def iter_errors(self) -> list[ValidationErrorEntry]:
        return [error for layer in self.layers for error in layer.errors]

    @property
    def error_count(self) -> int:
        return sum(len(layer.errors) for layer in self.layers)


__all__ = ["LayerValidationErrors", "ValidationErrorEntry", "ValidationReport"]
