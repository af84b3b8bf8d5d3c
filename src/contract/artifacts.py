"""Artifact contract definitions.

Filenames, formats and the schema version shared by the artifact writers and
the artifact validator.
"""

from __future__ import annotations

from dataclasses import dataclass

ARTIFACT_SCHEMA_VERSION = 1

HIERARCHY_JSONL = "hierarchy.jsonl"
DEPENDENCIES_JSONL = "dependencies.jsonl"
DEPENDENCIES_EDGELIST = "dependencies.edgelist"
DIAGRAMS_JSON = "diagrams.json"
VALIDATION_REPORT_JSON = "validation_report.json"
STATISTICS_JSON = "statistics.json"
METADATA_JSON = "metadata.json"


@dataclass(frozen=True)
class ArtifactSpec:
    """Filename and format of one contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "hierarchy": ArtifactSpec(
        filename=HIERARCHY_JSONL,
        format="jsonl",
        required_fields_note="HierarchyRecord fields required by contract.",
    ),
    "dependencies": ArtifactSpec(
        filename=DEPENDENCIES_JSONL,
        format="jsonl",
        required_fields_note="DependencyRecord fields required by contract.",
    ),
    "dependencies_edgelist": ArtifactSpec(
        filename=DEPENDENCIES_EDGELIST,
        format="edgelist",
        required_fields_note="Cross-module template path pairs (source, target).",
    ),
    "diagrams": ArtifactSpec(
        filename=DIAGRAMS_JSON,
        format="json",
        required_fields_note="DiagramsArtifact fields required by contract.",
    ),
    "validation_report": ArtifactSpec(
        filename=VALIDATION_REPORT_JSON,
        format="json",
        required_fields_note="ValidationReport fields required by contract.",
    ),
    "statistics": ArtifactSpec(
        filename=STATISTICS_JSON,
        format="json",
        required_fields_note="SolutionStatistics fields required by contract.",
    ),
    "metadata": ArtifactSpec(
        filename=METADATA_JSON,
        format="json",
        required_fields_note="GenerationMetadata fields required by contract.",
    ),
}
