"""Solution statistics models.

Module statistics are the only stored counters; every layer, Helix and
solution total is derived from them, so the totals are additive by
construction.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class ModuleStatistics(BaseModel):
    """Counters for one module; intra-module edges are not counted."""

    module_id: str
    module_name: str
    total_templates: int = 0
    total_dependencies: int = 0
    total_dependents: int = 0


class LayerStatistics(BaseModel):
    layer: str
    layer_id: str
    modules: list[ModuleStatistics] = Field(default_factory=list)

    @computed_field
    @property
    def total_modules(self) -> int:
        return len(self.modules)

    @computed_field
    @property
    def total_templates(self) -> int:
        return sum(module.total_templates for module in self.modules)

    @computed_field
    @property
    def total_module_dependencies(self) -> int:
        return sum(module.total_dependencies for module in self.modules)

    @computed_field
    @property
    def total_module_dependents(self) -> int:
        return sum(module.total_dependents for module in self.modules)


class HelixStatistics(BaseModel):
    """Per-layer statistics; an absent layer is ``None``."""

    foundation: LayerStatistics | None = None
    feature: LayerStatistics | None = None
    project: LayerStatistics | None = None

    def present_layers(self) -> list[LayerStatistics]:
        return [
            layer
            for layer in (self.foundation, self.feature, self.project)
            if layer is not None
        ]

    def module(self, module_id: str) -> ModuleStatistics | None:
        for layer in self.present_layers():
            for module in layer.modules:
                if module.module_id == module_id:
                    return module
        return None

    @computed_field
    @property
    def total_modules(self) -> int:
        return sum(layer.total_modules for layer in self.present_layers())

    @computed_field
    @property
    def total_templates(self) -> int:
        return sum(layer.total_templates for layer in self.present_layers())

    @computed_field
    @property
    def total_module_dependencies(self) -> int:
        return sum(layer.total_module_dependencies for layer in self.present_layers())

    @computed_field
    @property
    def total_module_dependents(self) -> int:
        return sum(layer.total_module_dependents for layer in self.present_layers())


class SolutionStatistics(BaseModel):
    """Raw catalog counts plus the Helix block."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    total_templates: int = 0
    total_template_folders: int = 0
    total_template_fields: int = 0
    total_template_inheritance: int = 0
    helix: HelixStatistics | None = None

    @computed_field
    @property
    def total_module_dependencies(self) -> int:
        return self.helix.total_module_dependencies if self.helix else 0

    @computed_field
    @property
    def total_module_dependents(self) -> int:
        return self.helix.total_module_dependents if self.helix else 0


__all__ = [
    "HelixStatistics",
    "LayerStatistics",
    "ModuleStatistics",
    "SolutionStatistics",
]
