"""Hierarchy artifact generator."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.hierarchy import HierarchyRecord
from artifacts.utils import _write_jsonl
from contract.artifacts import HIERARCHY_JSONL

if TYPE_CHECKING:
    from analysis.engine import AnalysisResult


class HierarchyGenerator:
    """Generator for the template to module to layer mapping."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "hierarchy"

    def generate(
        self,
        result: AnalysisResult,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Generate hierarchy.jsonl in layer, module, template order."""
        out_dir.mkdir(parents=True, exist_ok=True)

        records: list[HierarchyRecord] = []
        for layer in result.index.layers:
            for module in layer.modules:
                for template_id in module.template_ids:
                    template = result.catalog.resolve(template_id)
                    records.append(
                        HierarchyRecord(
                            template_id=template_id,
                            template_path=template.path if template else template_id,
                            module_id=module.id,
                            module_name=module.name,
                            layer_id=layer.id,
                            layer=layer.display_name,
                        )
                    )

        _write_jsonl(out_dir / HIERARCHY_JSONL, records)
        return [record.model_dump() for record in records], {
            "record_count": len(records)
        }


__all__ = ["HIERARCHY_JSONL", "HierarchyGenerator"]
