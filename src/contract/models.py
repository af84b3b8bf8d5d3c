"""Artifact models exposed alongside the artifact contract."""

from artifacts.models.artifacts.dependencies import DependencyRecord
from artifacts.models.artifacts.diagrams import DiagramsArtifact
from artifacts.models.artifacts.hierarchy import HierarchyRecord
from artifacts.models.artifacts.metadata import GenerationMetadata
from artifacts.models.artifacts.statistics import SolutionStatistics
from artifacts.models.artifacts.validation import ValidationReport

__all__ = [
    "DependencyRecord",
    "DiagramsArtifact",
    "GenerationMetadata",
    "HierarchyRecord",
    "SolutionStatistics",
    "ValidationReport",
]
