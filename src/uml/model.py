"""Diagram model collaborator.

``DiagramModel`` is the surface the assemblers draw through. ``DiagramDocument``
is the bundled in-memory implementation: it keeps diagrams, nodes and edges as
plain records, refuses duplicate elements within a diagram, and serializes to
a deterministic dict. Rendering and geometric layout are left to whatever
consumes the serialized document; ``layout`` only records the direction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping


class DiagramKind(str, Enum):
    CLASS = "class"
    PACKAGE = "package"


class NodeKind(str, Enum):
    LAYER = "layer"
    MODULE = "module"
    FOLDER = "folder"
    TEMPLATE = "template"


class EdgeKind(str, Enum):
    CONTAINMENT = "containment"
    DEPENDENCY = "dependency"
    GENERALIZATION = "generalization"


@dataclass(frozen=True)
class DiagramHandle:
    id: str


@dataclass(frozen=True)
class NodeHandle:
    diagram_id: str
    id: str
    item_id: str


@dataclass(frozen=True)
class EdgeHandle:
    diagram_id: str
    id: str


class DuplicateElementError(Exception):
    """Raised when an element would be created twice in one diagram."""


class DiagramModel(Protocol):
    def create_diagram(
        self, kind: DiagramKind, name: str, owner_id: str | None
    ) -> DiagramHandle: ...

    def create_node(
        self,
        kind: NodeKind,
        item_id: str,
        container: DiagramHandle,
        *,
        name: str,
        path: str,
    ) -> NodeHandle: ...

    def create_edge(
        self,
        kind: EdgeKind,
        source: NodeHandle,
        target: NodeHandle,
        container: DiagramHandle,
    ) -> EdgeHandle: ...

    def set_label(self, handle: NodeHandle | EdgeHandle, text: str) -> None: ...

    def set_style(
        self, handle: NodeHandle | EdgeHandle, hints: Mapping[str, object]
    ) -> None: ...

    def layout(self, container: DiagramHandle, direction: str) -> None: ...


@dataclass
class Node:
    id: str
    kind: NodeKind
    item_id: str
    name: str
    path: str
    label: str | None = None
    style: dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "item_id": self.item_id,
            "name": self.name,
            "path": self.path,
            "label": self.label,
            "style": dict(self.style),
        }


@dataclass
class Edge:
    id: str
    kind: EdgeKind
    source: str
    target: str
    label: str | None = None
    style: dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "source": self.source,
            "target": self.target,
            "label": self.label,
            "style": dict(self.style),
        }


@dataclass
class Diagram:
    id: str
    kind: DiagramKind
    name: str
    owner_id: str | None
    layout_direction: str | None = None
    nodes: dict[str, Node] = field(default_factory=dict)
    edges: dict[str, Edge] = field(default_factory=dict)
    _item_nodes: dict[str, str] = field(default_factory=dict, repr=False)
    _edge_keys: set[tuple[EdgeKind, str, str]] = field(
        default_factory=set, repr=False
    )

    def node_for(self, item_id: str) -> Node | None:
        node_id = self._item_nodes.get(item_id)
        return self.nodes[node_id] if node_id is not None else None

    def edges_of_kind(self, kind: EdgeKind) -> list[Edge]:
        return [edge for edge in self.edges.values() if edge.kind is kind]

    def item_edges(self, kind: EdgeKind) -> list[tuple[str, str]]:
        """Return ``(source item, target item)`` pairs for edges of a kind."""
        return [
            (self.nodes[edge.source].item_id, self.nodes[edge.target].item_id)
            for edge in self.edges_of_kind(kind)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "owner_id": self.owner_id,
            "layout": self.layout_direction,
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "edges": [edge.to_dict() for edge in self.edges.values()],
        }


class DiagramDocument:
    """In-memory ``DiagramModel`` with deterministic element IDs."""

    def __init__(self, title: str = "Untitled") -> None:
        self.title = title
        self._diagrams: dict[str, Diagram] = {}

    @property
    def diagrams(self) -> list[Diagram]:
        return list(self._diagrams.values())

    def find_diagram(self, name: str, owner_id: str | None = None) -> Diagram | None:
        for diagram in self._diagrams.values():
            if diagram.name == name and (
                owner_id is None or diagram.owner_id == owner_id
            ):
                return diagram
        return None

    def _diagram(self, container: DiagramHandle) -> Diagram:
        try:
            return self._diagrams[container.id]
        except KeyError:
            msg = f"Unknown diagram {container.id!r}"
            raise KeyError(msg) from None

    def _element(self, handle: NodeHandle | EdgeHandle) -> Node | Edge:
        diagram = self._diagrams[handle.diagram_id]
        if isinstance(handle, NodeHandle):
            return diagram.nodes[handle.id]
        return diagram.edges[handle.id]

    def create_diagram(
        self, kind: DiagramKind, name: str, owner_id: str | None
    ) -> DiagramHandle:
        diagram_id = f"d{len(self._diagrams) + 1}"
        self._diagrams[diagram_id] = Diagram(
            id=diagram_id, kind=kind, name=name, owner_id=owner_id
        )
        return DiagramHandle(diagram_id)

    def create_node(
        self,
        kind: NodeKind,
        item_id: str,
        container: DiagramHandle,
        *,
        name: str,
        path: str,
    ) -> NodeHandle:
        diagram = self._diagram(container)
        if item_id in diagram._item_nodes:
            msg = f"Item {item_id!r} already has a node in diagram {diagram.name!r}"
            raise DuplicateElementError(msg)

        node_id = f"{diagram.id}:n{len(diagram.nodes) + 1}"
        diagram.nodes[node_id] = Node(
            id=node_id, kind=kind, item_id=item_id, name=name, path=path
        )
        diagram._item_nodes[item_id] = node_id
        return NodeHandle(diagram_id=diagram.id, id=node_id, item_id=item_id)

    def create_edge(
        self,
        kind: EdgeKind,
        source: NodeHandle,
        target: NodeHandle,
        container: DiagramHandle,
    ) -> EdgeHandle:
        diagram = self._diagram(container)
        for handle in (source, target):
            if handle.diagram_id != diagram.id or handle.id not in diagram.nodes:
                msg = f"Node {handle.id!r} does not belong to diagram {diagram.name!r}"
                raise ValueError(msg)

        key = (kind, source.id, target.id)
        if key in diagram._edge_keys:
            msg = (
                f"{kind.value} edge {source.item_id!r} -> {target.item_id!r} "
                f"already exists in diagram {diagram.name!r}"
            )
            raise DuplicateElementError(msg)

        edge_id = f"{diagram.id}:e{len(diagram.edges) + 1}"
        diagram.edges[edge_id] = Edge(
            id=edge_id, kind=kind, source=source.id, target=target.id
        )
        diagram._edge_keys.add(key)
        return EdgeHandle(diagram_id=diagram.id, id=edge_id)

    def set_label(self, handle: NodeHandle | EdgeHandle, text: str) -> None:
        self._element(handle).label = text

    def set_style(
        self, handle: NodeHandle | EdgeHandle, hints: Mapping[str, object]
    ) -> None:
        self._element(handle).style.update(hints)

    def layout(self, container: DiagramHandle, direction: str) -> None:
        self._diagram(container).layout_direction = direction

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "diagrams": [diagram.to_dict() for diagram in self._diagrams.values()],
        }


__all__ = [
    "Diagram",
    "DiagramDocument",
    "DiagramHandle",
    "DiagramKind",
    "DiagramModel",
    "DuplicateElementError",
    "Edge",
    "EdgeHandle",
    "EdgeKind",
    "Node",
    "NodeHandle",
    "NodeKind",
]
