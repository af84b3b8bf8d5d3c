"""Artifact generators for helixmap."""

from artifacts.generators.dependencies import DependenciesGenerator
from artifacts.generators.diagrams import DiagramsGenerator
from artifacts.generators.hierarchy import HierarchyGenerator
from artifacts.generators.report import ReportGenerator

__all__ = [
    "DependenciesGenerator",
    "DiagramsGenerator",
    "HierarchyGenerator",
    "ReportGenerator",
]
