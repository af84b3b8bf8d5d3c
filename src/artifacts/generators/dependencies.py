"""Dependency artifact generator."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.dependencies import DependencyRecord
from artifacts.utils import _write_edgelist, _write_jsonl
from contract.artifacts import DEPENDENCIES_EDGELIST, DEPENDENCIES_JSONL

if TYPE_CHECKING:
    from analysis.engine import AnalysisResult
    from graph.dependencies import Dependency
    from graph.hierarchy import HierarchyIndex


def _layer_name(index: HierarchyIndex, layer_id: str) -> str:
    layer = index.layer_by_id(layer_id)
    return layer.display_name if layer else layer_id


def _to_record(index: HierarchyIndex, dependency: Dependency) -> DependencyRecord:
    return DependencyRecord(
        source_id=dependency.source.template_id,
        source_path=dependency.source_path,
        source_module_id=dependency.source.module_id,
        source_layer=_layer_name(index, dependency.source.layer_id),
        target_id=dependency.target.template_id,
        target_path=dependency.target_path,
        target_module_id=dependency.target.module_id,
        target_layer=_layer_name(index, dependency.target.layer_id),
        cross_module=dependency.is_cross_module,
        is_valid=dependency.is_valid,
        message=dependency.message,
    )


class DependenciesGenerator:
    """Generator for resolved template dependencies."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "dependencies"

    def generate(
        self,
        result: AnalysisResult,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Generate dependencies.jsonl and dependencies.edgelist.

        The jsonl holds every dependency in resolution order. The edgelist
        holds the unique cross-module template pairs, sorted.
        """
        out_dir.mkdir(parents=True, exist_ok=True)

        dependencies = result.dependencies.all_dependencies()
        records = [_to_record(result.index, dep) for dep in dependencies]
        _write_jsonl(out_dir / DEPENDENCIES_JSONL, records)

        cross_module_edges = sorted(
            {
                (dep.source_path, dep.target_path)
                for dep in dependencies
                if dep.is_cross_module
            }
        )
        _write_edgelist(out_dir / DEPENDENCIES_EDGELIST, cross_module_edges)

        return [record.model_dump() for record in records], {
            "dependency_count": len(records),
            "edge_count": len(cross_module_edges),
            "invalid_count": sum(1 for record in records if not record.is_valid),
        }


__all__ = ["DEPENDENCIES_EDGELIST", "DEPENDENCIES_JSONL", "DependenciesGenerator"]
