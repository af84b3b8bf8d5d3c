"""Helix diagram assembly.

For every module of every present layer four views are drawn (module
dependencies, module dependents, template dependencies, template dependents),
followed by two views per layer (layer dependencies, layer dependents).

Each view owns a fresh ``ViewCache``. A node is created the first time its
item enters the view, together with the containment edge to its parent node.
Dependencies projecting onto the same visual edge are merged into that edge:
the label accumulates every contributing description in encounter order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rules.config import LayoutOptions
from uml.cache import EdgeKey, EdgeState, ViewCache
from uml.model import DiagramKind, EdgeKind, NodeKind
from utils import join_descriptions

if TYPE_CHECKING:
    from collections.abc import Mapping

    from catalog.catalog import ItemCatalog
    from graph.dependencies import Dependency, DependencyMap
    from graph.hierarchy import HelixLayer, HelixModule, HierarchyEntry, HierarchyIndex
    from uml.model import DiagramHandle, DiagramModel, NodeHandle

logger = logging.getLogger(__name__)

INVALID_LINE_COLOR = "#F00000"
HIDDEN_STEREOTYPE: Mapping[str, object] = {"stereotype_display": "none"}


def validity_style(is_valid: bool) -> dict[str, object]:
    """Style hints for a dependency edge."""
    if is_valid:
        return {"valid": True}
    return {"valid": False, "line_color": INVALID_LINE_COLOR}


@dataclass
class View:
    """One diagram being drawn, with the cache that keeps it a simple graph."""

    model: DiagramModel
    diagram: DiagramHandle
    cache: ViewCache

    def ensure_node(
        self,
        kind: NodeKind,
        item_id: str,
        *,
        name: str,
        path: str,
        parent_id: str | None = None,
        style: Mapping[str, object] | None = None,
    ) -> NodeHandle:
        """Return the item's node, creating it and its containment edge once."""
        existing = self.cache.node(item_id)
        if existing is not None:
            return existing

        handle = self.model.create_node(
            kind, item_id, self.diagram, name=name, path=path
        )
        if style:
            self.model.set_style(handle, style)
        self.cache.nodes[item_id] = handle

        if parent_id is not None:
            parent = self.cache.nodes[parent_id]
            self.model.create_edge(EdgeKind.CONTAINMENT, handle, parent, self.diagram)
        return handle

    def add_dependency(
        self,
        key: EdgeKey,
        source: NodeHandle,
        target: NodeHandle,
        dependency: Dependency,
    ) -> EdgeState:
        """Draw the dependency edge for ``key`` or merge into the existing one."""
        description = dependency.description
        state = self.cache.edge(key)

        if state is None:
            handle = self.model.create_edge(
                EdgeKind.DEPENDENCY, source, target, self.diagram
            )
            state = EdgeState(
                handle=handle,
                descriptions=[description],
                is_valid=dependency.is_valid,
            )
            self.cache.edges[key] = state
            self.model.set_label(handle, description)
            self.model.set_style(handle, validity_style(dependency.is_valid))
            return state

        state.descriptions.append(description)
        self.model.set_label(state.handle, join_descriptions(state.descriptions))
        if state.is_valid and not dependency.is_valid:
            state.is_valid = False
            self.model.set_style(state.handle, validity_style(False))
        return state


class HelixDiagramAssembler:
    """Draws the per-module and per-layer Helix views onto a diagram model."""

    def __init__(
        self,
        model: DiagramModel,
        catalog: ItemCatalog,
        index: HierarchyIndex,
        dependencies: DependencyMap,
        layout: LayoutOptions | None = None,
    ) -> None:
        self.model = model
        self.catalog = catalog
        self.index = index
        self.dependencies = dependencies
        self.layout = layout or LayoutOptions()

    def assemble(self) -> list[DiagramHandle]:
        diagrams: list[DiagramHandle] = []
        for layer in self.index.layers:
            for module in layer.modules:
                diagrams.append(self.build_module_view(module, inbound=False))
                diagrams.append(self.build_module_view(module, inbound=True))
                diagrams.append(self.build_template_view(module, inbound=False))
                diagrams.append(self.build_template_view(module, inbound=True))
            diagrams.append(self.build_layer_view(layer, inbound=False))
            diagrams.append(self.build_layer_view(layer, inbound=True))

        logger.info("Assembled %d Helix diagrams", len(diagrams))
        return diagrams

    # -- element helpers -------------------------------------------------

    def _open_view(self, name: str, owner_id: str) -> View:
        diagram = self.model.create_diagram(DiagramKind.CLASS, name, owner_id)
        return View(model=self.model, diagram=diagram, cache=ViewCache())

    def _layer(self, layer_id: str) -> HelixLayer:
        layer = self.index.layer_by_id(layer_id)
        if layer is None:
            msg = f"Unknown layer {layer_id!r}"
            raise KeyError(msg)
        return layer

    def _module(self, module_id: str) -> HelixModule:
        module = self.index.module_by_id(module_id)
        if module is None:
            msg = f"Unknown module {module_id!r}"
            raise KeyError(msg)
        return module

    def _layer_node(self, view: View, layer: HelixLayer) -> NodeHandle:
        return view.ensure_node(
            NodeKind.LAYER, layer.id, name=layer.name, path=layer.path
        )

    def _module_node(self, view: View, module: HelixModule) -> NodeHandle:
        self._layer_node(view, self._layer(module.layer_id))
        return view.ensure_node(
            NodeKind.MODULE,
            module.id,
            name=module.name,
            path=module.path,
            parent_id=module.layer_id,
        )

    def _template_node(
        self,
        view: View,
        entry: HierarchyEntry,
        style: Mapping[str, object] | None = None,
    ) -> NodeHandle:
        self._module_node(view, self._module(entry.module_id))
        item = self.catalog.resolve(entry.template_id)
        name = item.name if item else entry.template_id
        path = item.path if item else entry.template_id
        return view.ensure_node(
            NodeKind.TEMPLATE,
            entry.template_id,
            name=name,
            path=path,
            parent_id=entry.module_id,
            style=style,
        )

    def _edges_of(self, template_id: str, *, inbound: bool) -> tuple[Dependency, ...]:
        if inbound:
            return self.dependencies.dependents_of(template_id)
        return self.dependencies.dependencies_of(template_id)

    # -- views -------------------------------------------------------------

    def build_module_view(self, module: HelixModule, *, inbound: bool) -> DiagramHandle:
        """Module-level dependencies (or dependents) of one module."""
        suffix = "Dependents" if inbound else "Dependencies"
        view = self._open_view(f"{module.name} {suffix} Diagram", module.id)
        anchor = self._module_node(view, module)

        for template_id in module.template_ids:
            for dependency in self._edges_of(template_id, inbound=inbound):
                if not dependency.is_cross_module:
                    continue
                far_entry = dependency.source if inbound else dependency.target
                far = self._module_node(view, self._module(far_entry.module_id))
                key = EdgeKey(dependency.source.module_id, dependency.target.module_id)
                source, target = (far, anchor) if inbound else (anchor, far)
                view.add_dependency(key, source, target, dependency)

        self.model.layout(view.diagram, self.layout.module_diagram)
        return view.diagram

    def build_template_view(
        self, module: HelixModule, *, inbound: bool
    ) -> DiagramHandle:
        """Template-level dependencies (or dependents) of one module."""
        suffix = "Dependents" if inbound else "Dependencies"
        view = self._open_view(f"{module.name} Templates {suffix} Diagram", module.id)
        self._module_node(view, module)

        anchor_style = HIDDEN_STEREOTYPE if inbound else None
        far_style = None if inbound else HIDDEN_STEREOTYPE

        for template_id in module.template_ids:
            entry = self.index.entries[template_id]
            anchor = self._template_node(view, entry, style=anchor_style)

            for dependency in self._edges_of(template_id, inbound=inbound):
                if not dependency.is_cross_module:
                    continue
                far_entry = dependency.source if inbound else dependency.target
                far = self._template_node(view, far_entry, style=far_style)
                key = EdgeKey(
                    dependency.source.template_id, dependency.target.template_id
                )
                source, target = (far, anchor) if inbound else (anchor, far)
                view.add_dependency(key, source, target, dependency)

        self.model.layout(view.diagram, self.layout.templates_diagram)
        return view.diagram

    def build_layer_view(self, layer: HelixLayer, *, inbound: bool) -> DiagramHandle:
        """Layer-level dependencies (or dependents) of one layer."""
        suffix = "Dependents" if inbound else "Dependencies"
        view = self._open_view(f"{layer.name} Layer {suffix} Diagram", layer.id)
        anchor = self._layer_node(view, layer)

        for module in layer.modules:
            for template_id in module.template_ids:
                for dependency in self._edges_of(template_id, inbound=inbound):
                    if not dependency.is_cross_layer:
                        continue
                    far_entry = dependency.source if inbound else dependency.target
                    far = self._layer_node(view, self._layer(far_entry.layer_id))
                    key = EdgeKey(
                        dependency.source.layer_id, dependency.target.layer_id
                    )
                    source, target = (far, anchor) if inbound else (anchor, far)
                    view.add_dependency(key, source, target, dependency)

        self.model.layout(view.diagram, self.layout.layer_diagram)
        return view.diagram


def assemble_helix_diagrams(
    model: DiagramModel,
    catalog: ItemCatalog,
    index: HierarchyIndex,
    dependencies: DependencyMap,
    layout: LayoutOptions | None = None,
) -> list[DiagramHandle]:
    """Draw every Helix view for the indexed layers onto ``model``."""
    assembler = HelixDiagramAssembler(model, catalog, index, dependencies, layout)
    return assembler.assemble()


__all__ = [
    "HIDDEN_STEREOTYPE",
    "INVALID_LINE_COLOR",
    "HelixDiagramAssembler",
    "View",
    "assemble_helix_diagrams",
    "validity_style",
]
