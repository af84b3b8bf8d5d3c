"""Statistics aggregation over the catalog and the Helix hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.statistics import (
    HelixStatistics,
    LayerStatistics,
    ModuleStatistics,
    SolutionStatistics,
)
from rules.layers import Layer

if TYPE_CHECKING:
    from catalog.catalog import ItemCatalog
    from graph.dependencies import DependencyMap
    from graph.hierarchy import HelixLayer, HelixModule, HierarchyIndex


def module_statistics(
    module: HelixModule, dependencies: DependencyMap
) -> ModuleStatistics:
    """Count a module's templates and its edges to other modules."""
    total_dependencies = 0
    total_dependents = 0
    for template_id in module.template_ids:
        total_dependencies += sum(
            1
            for dependency in dependencies.dependencies_of(template_id)
            if dependency.target.module_id != module.id
        )
        total_dependents += sum(
            1
            for dependency in dependencies.dependents_of(template_id)
            if dependency.source.module_id != module.id
        )
    return ModuleStatistics(
        module_id=module.id,
        module_name=module.name,
        total_templates=len(module.template_ids),
        total_dependencies=total_dependencies,
        total_dependents=total_dependents,
    )


def layer_statistics(
    layer: HelixLayer, dependencies: DependencyMap
) -> LayerStatistics:
    return LayerStatistics(
        layer=layer.display_name,
        layer_id=layer.id,
        modules=[module_statistics(module, dependencies) for module in layer.modules],
    )


def helix_statistics(
    index: HierarchyIndex, dependencies: DependencyMap
) -> HelixStatistics:
    by_kind: dict[Layer, LayerStatistics] = {
        layer.layer: layer_statistics(layer, dependencies) for layer in index.layers
    }
    return HelixStatistics(
        foundation=by_kind.get(Layer.FOUNDATION),
        feature=by_kind.get(Layer.FEATURE),
        project=by_kind.get(Layer.PROJECT),
    )


def compute_statistics(
    catalog: ItemCatalog,
    index: HierarchyIndex,
    dependencies: DependencyMap,
) -> SolutionStatistics:
    """Raw catalog counts plus Helix statistics.

    The raw counts cover every item in the catalog, whether or not it sits
    under a configured module. Inheritance counts every declared base
    reference, resolvable or not.
    """
    total_templates = 0
    total_fields = 0
    total_inheritance = 0
    for template in catalog.iter_templates():
        total_templates += 1
        total_fields += len(template.fields)
        total_inheritance += len(template.base_template_ids)

    return SolutionStatistics(
        total_templates=total_templates,
        total_template_folders=sum(1 for _ in catalog.iter_folders()),
        total_template_fields=total_fields,
        total_template_inheritance=total_inheritance,
        helix=helix_statistics(index, dependencies) if index.layers else None,
    )


__all__ = [
    "compute_statistics",
    "helix_statistics",
    "layer_statistics",
    "module_statistics",
]
