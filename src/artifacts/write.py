from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from analysis.engine import run_analysis
from artifacts.generators import (
    DependenciesGenerator,
    DiagramsGenerator,
    HierarchyGenerator,
    ReportGenerator,
)
from catalog.loader import load_catalog
from contract.artifacts import ARTIFACT_SPECS
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from analysis.engine import AnalysisResult
    from rules.config import HelixMapConfig, LayerMapConfig

logger = logging.getLogger(__name__)


def resolve_catalog_path(
    root: Path, config: HelixMapConfig, catalog_path: Path | None = None
) -> Path:
    """Return the catalog file to read: explicit path first, then config."""
    if catalog_path is not None:
        return Path(catalog_path)
    return Path(root) / config.catalog


def analyze_project(
    *,
    root: Path,
    config: HelixMapConfig | None = None,
    catalog_path: Path | None = None,
) -> tuple[AnalysisResult, HelixMapConfig]:
    """Load the catalog for a project and run the analysis over it.

    Layers configured in ``helixmap.toml`` take precedence over layer roots
    embedded in the catalog file.
    """
    if config is None:
        config = load_config(root)

    snapshot = load_catalog(resolve_catalog_path(root, config, catalog_path))

    layer_map: LayerMapConfig = config.layers
    if not layer_map.is_configured() and snapshot.layers is not None:
        logger.info("Using layer roots embedded in the catalog file")
        layer_map = snapshot.layers
    if not layer_map.is_configured():
        logger.warning("No Helix layers are configured; only catalog views are drawn")

    title = config.documentation.title
    if title == "Untitled" and snapshot.title:
        title = snapshot.title

    result = run_analysis(
        snapshot.catalog,
        layer_map,
        layout=config.layout,
        title=title,
    )
    return result, config


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: HelixMapConfig | None = None,
    catalog_path: Path | None = None,
) -> dict[str, object]:
    """Generate deterministic artifacts for a template catalog.

    Args:
        root: Project root holding ``helixmap.toml`` and the catalog
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from ``root`` when omitted
        catalog_path: Optional catalog file overriding the configured one

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    result, config = analyze_project(root=root, config=config, catalog_path=catalog_path)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    HierarchyGenerator().generate(result, out_dir)
    _, deps_summary = DependenciesGenerator().generate(result, out_dir)
    _, diagrams_summary = DiagramsGenerator().generate(result, out_dir)
    ReportGenerator().generate(
        result,
        out_dir,
        documentation=config.documentation,
        diagram_count=diagrams_summary["diagram_count"],
    )

    logger.info("Wrote %d artifacts to %s", len(ARTIFACT_SPECS), out_dir)

    return {
        "template_count": len(result.index.entries),
        "dependency_count": deps_summary["dependency_count"],
        "edge_count": deps_summary["edge_count"],
        "diagram_count": diagrams_summary["diagram_count"],
        "validation_error_count": result.report.error_count,
        "artifacts": [str(out_dir / spec.filename) for spec in ARTIFACT_SPECS.values()],
    }
