"""View-scoped caches that keep diagram elements unique within one view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from uml.model import EdgeHandle, NodeHandle


class EdgeKey(NamedTuple):
    """Endpoints of a visual edge, at the granularity of the view."""

    source_id: str
    target_id: str


@dataclass
class EdgeState:
    handle: EdgeHandle
    descriptions: list[str] = field(default_factory=list)
    is_valid: bool = True


@dataclass
class ViewCache:
    """Elements already created in one view.

    One instance per view. Sharing an instance between views would make the
    second view skip elements it never drew.
    """

    nodes: dict[str, NodeHandle] = field(default_factory=dict)
    edges: dict[EdgeKey, EdgeState] = field(default_factory=dict)

    def node(self, item_id: str) -> NodeHandle | None:
        return self.nodes.get(item_id)

    def edge(self, key: EdgeKey) -> EdgeState | None:
        return self.edges.get(key)


__all__ = ["EdgeKey", "EdgeState", "ViewCache"]
