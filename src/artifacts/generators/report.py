"""Validation report, statistics and generation metadata generator."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.metadata import GenerationMetadata
from artifacts.utils import _write_json
from contract.artifacts import METADATA_JSON, STATISTICS_JSON, VALIDATION_REPORT_JSON

if TYPE_CHECKING:
    from analysis.engine import AnalysisResult
    from rules.config import DocumentationConfig


def build_metadata(
    result: AnalysisResult,
    documentation: DocumentationConfig | None = None,
    *,
    diagram_count: int = 0,
) -> GenerationMetadata:
    """Combine documentation details with the run's validation summary."""
    details = documentation.model_dump() if documentation is not None else {}
    return GenerationMetadata(
        **details,
        validation_errors_detected=result.report.errors_detected,
        validation_error_count=result.report.error_count,
        diagram_count=diagram_count,
    )


class ReportGenerator:
    """Generator for the run's report artifacts."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "report"

    def generate(
        self,
        result: AnalysisResult,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Generate validation_report.json, statistics.json and metadata.json."""
        documentation: DocumentationConfig | None = kwargs.get("documentation")
        diagram_count: int = kwargs.get("diagram_count", 0)

        out_dir.mkdir(parents=True, exist_ok=True)

        metadata = build_metadata(
            result, documentation, diagram_count=diagram_count
        )
        _write_json(out_dir / VALIDATION_REPORT_JSON, result.report)
        _write_json(out_dir / STATISTICS_JSON, result.statistics)
        _write_json(out_dir / METADATA_JSON, metadata)

        return [], metadata.model_dump()


__all__ = [
    "METADATA_JSON",
    "STATISTICS_JSON",
    "VALIDATION_REPORT_JSON",
    "ReportGenerator",
    "build_metadata",
]
