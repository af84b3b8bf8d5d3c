"""Generation metadata for the documentation site."""

from __future__ import annotations

from pydantic import BaseModel, Field


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class GenerationMetadata(BaseModel):
    """Documentation details and a summary of the run.

    Holds no timestamps so that repeated runs over the same input produce
    identical bytes.
    """

    schema_version: int = Field(default_factory=_artifact_schema_version)
    title: str = "Untitled"
    project_name: str = ""
    environment_name: str = ""
    commit_author: str = ""
    commit_hash: str = ""
    commit_link: str = ""
    deploy_link: str = ""
    validation_errors_detected: bool = False
    validation_error_count: int = 0
    diagram_count: int = 0


__all__ = ["GenerationMetadata"]
