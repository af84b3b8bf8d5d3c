"""Diagram model and the assemblers that draw onto it."""

from uml.assembler import HelixDiagramAssembler, assemble_helix_diagrams
from uml.cache import EdgeKey, EdgeState, ViewCache
from uml.catalog_views import build_catalog_views
from uml.model import (
    DiagramDocument,
    DiagramKind,
    DiagramModel,
    DuplicateElementError,
    EdgeKind,
    NodeKind,
)

__all__ = [
    "DiagramDocument",
    "DiagramKind",
    "DiagramModel",
    "DuplicateElementError",
    "EdgeKey",
    "EdgeKind",
    "EdgeState",
    "HelixDiagramAssembler",
    "NodeKind",
    "ViewCache",
    "assemble_helix_diagrams",
    "build_catalog_views",
]
