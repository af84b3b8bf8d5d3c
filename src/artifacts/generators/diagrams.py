"""Diagram document generator."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.diagrams import DiagramsArtifact
from artifacts.utils import _write_json
from contract.artifacts import DIAGRAMS_JSON

if TYPE_CHECKING:
    from analysis.engine import AnalysisResult


class DiagramsGenerator:
    """Generator for the serialized diagram document."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "diagrams"

    def generate(
        self,
        result: AnalysisResult,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Generate diagrams.json from a serializable diagram model."""
        out_dir.mkdir(parents=True, exist_ok=True)

        to_dict = getattr(result.document, "to_dict", None)
        if to_dict is None:
            msg = f"{type(result.document).__name__} cannot be serialized to diagrams.json"
            raise TypeError(msg)

        artifact = DiagramsArtifact.model_validate(to_dict())
        _write_json(out_dir / DIAGRAMS_JSON, artifact)

        return [], {
            "diagram_count": len(artifact.diagrams),
            "node_count": sum(len(diagram.nodes) for diagram in artifact.diagrams),
            "edge_count": sum(len(diagram.edges) for diagram in artifact.diagrams),
        }


__all__ = ["DIAGRAMS_JSON", "DiagramsGenerator"]
