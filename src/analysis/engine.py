"""Analysis engine: one complete run over a catalog snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from analysis.report import build_validation_report
from analysis.statistics import compute_statistics
from graph.dependencies import resolve_dependencies
from graph.hierarchy import build_hierarchy_index
from uml.assembler import assemble_helix_diagrams
from uml.catalog_views import build_catalog_views
from uml.model import DiagramDocument

if TYPE_CHECKING:
    from artifacts.models.artifacts.statistics import SolutionStatistics
    from artifacts.models.artifacts.validation import ValidationReport
    from catalog.catalog import ItemCatalog
    from graph.dependencies import DependencyMap
    from graph.hierarchy import HierarchyIndex
    from rules.config import LayerMapConfig, LayoutOptions
    from uml.model import DiagramModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one run derives from a snapshot."""

    catalog: ItemCatalog
    document: DiagramModel
    index: HierarchyIndex
    dependencies: DependencyMap
    report: ValidationReport
    statistics: SolutionStatistics


def run_analysis(
    catalog: ItemCatalog,
    layer_map: LayerMapConfig,
    *,
    layout: LayoutOptions | None = None,
    model: DiagramModel | None = None,
    title: str | None = None,
) -> AnalysisResult:
    """Index, resolve, validate, draw and count.

    Args:
        catalog: The item provider for the snapshot.
        layer_map: Helix layer and module roots. Unconfigured layers are
            skipped.
        layout: Layout directions per diagram family.
        model: Diagram model to draw onto. Defaults to a new
            ``DiagramDocument`` titled ``title``.
        title: Title for the default diagram document.

    Returns:
        The populated diagram model together with the index, dependency
        maps, validation report and statistics.
    """
    if model is None:
        model = DiagramDocument(title=title or "Untitled")

    index = build_hierarchy_index(catalog, layer_map)
    dependencies = resolve_dependencies(index, catalog)
    report = build_validation_report(index, dependencies)

    build_catalog_views(model, catalog, layout)
    assemble_helix_diagrams(model, catalog, index, dependencies, layout)

    statistics = compute_statistics(catalog, index, dependencies)
    logger.info(
        "Analyzed %d templates: %d module dependencies, %d layering violations",
        statistics.total_templates,
        statistics.total_module_dependencies,
        report.error_count,
    )
    return AnalysisResult(
        catalog=catalog,
        document=model,
        index=index,
        dependencies=dependencies,
        report=report,
        statistics=statistics,
    )


__all__ = ["AnalysisResult", "run_analysis"]
