"""Layering validation report."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.artifacts.validation import (
    LayerValidationErrors,
    ValidationErrorEntry,
    ValidationReport,
)

if TYPE_CHECKING:
    from graph.dependencies import DependencyMap
    from graph.hierarchy import HelixLayer, HierarchyIndex

logger = logging.getLogger(__name__)


def _layer_errors(
    layer: HelixLayer, dependencies: DependencyMap
) -> LayerValidationErrors:
    errors: list[ValidationErrorEntry] = []
    for module in layer.modules:
        for template_id in module.template_ids:
            for dependency in dependencies.dependencies_of(template_id):
                if dependency.is_valid:
                    continue
                errors.append(
                    ValidationErrorEntry(
                        layer_index=layer.layer.index,
                        module_name=module.name,
                        dependent_path=dependency.source_path,
                        dependency_path=dependency.target_path,
                        message=dependency.message or "",
                    )
                )
    return LayerValidationErrors(
        layer=layer.display_name,
        layer_id=layer.id,
        layer_index=layer.layer.index,
        errors=errors,
    )


def build_validation_report(
    index: HierarchyIndex, dependencies: DependencyMap
) -> ValidationReport:
    """Collect every invalid dependency, grouped by the dependent's layer.

    Every present layer gets a group, possibly empty. Violations are data:
    building the report never raises for them.
    """
    layers = [_layer_errors(layer, dependencies) for layer in index.layers]
    report = ValidationReport(
        errors_detected=any(layer.errors for layer in layers),
        layers=layers,
    )
    if report.errors_detected:
        logger.warning("Detected %d Helix layering violations", report.error_count)
    return report


__all__ = ["build_validation_report"]
