"""Artifact contract surface for helixmap.

Filenames and schema version are importable eagerly; models and the
validator load lazily so that importing the contract does not pull in the
artifact models.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    DEPENDENCIES_EDGELIST,
    DEPENDENCIES_JSONL,
    DIAGRAMS_JSON,
    HIERARCHY_JSONL,
    METADATA_JSON,
    STATISTICS_JSON,
    VALIDATION_REPORT_JSON,
    ArtifactSpec,
)

_MODEL_NAMES = {
    "DependencyRecord",
    "DiagramsArtifact",
    "GenerationMetadata",
    "HierarchyRecord",
    "SolutionStatistics",
    "ValidationReport",
}


def __getattr__(name: str) -> object:
    if name in _MODEL_NAMES:
        from contract import models

        return getattr(models, name)

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "DEPENDENCIES_EDGELIST",
    "DEPENDENCIES_JSONL",
    "DIAGRAMS_JSON",
    "HIERARCHY_JSONL",
    "METADATA_JSON",
    "STATISTICS_JSON",
    "VALIDATION_REPORT_JSON",
    "ArtifactSpec",
    "DependencyRecord",
    "DiagramsArtifact",
    "GenerationMetadata",
    "HierarchyRecord",
    "SolutionStatistics",
    "ValidationMessage",
    "ValidationReport",
    "ValidationResult",
    "validate_artifacts",
]
