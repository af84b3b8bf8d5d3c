"""Model namespace for helixmap artifact schemas."""

from artifacts.models.artifacts.dependencies import DependencyRecord
from artifacts.models.artifacts.diagrams import (
    DiagramRecord,
    DiagramsArtifact,
    EdgeRecord,
    NodeRecord,
)
from artifacts.models.artifacts.hierarchy import HierarchyRecord
from artifacts.models.artifacts.metadata import GenerationMetadata
from artifacts.models.artifacts.statistics import (
    HelixStatistics,
    LayerStatistics,
    ModuleStatistics,
    SolutionStatistics,
)
from artifacts.models.artifacts.validation import (
    LayerValidationErrors,
    ValidationErrorEntry,
    ValidationReport,
)

__all__ = [
    "DependencyRecord",
    "DiagramRecord",
    "DiagramsArtifact",
    "EdgeRecord",
    "GenerationMetadata",
    "HelixStatistics",
    "HierarchyRecord",
    "LayerStatistics",
    "LayerValidationErrors",
    "ModuleStatistics",
    "NodeRecord",
    "SolutionStatistics",
    "ValidationErrorEntry",
    "ValidationReport",
]
