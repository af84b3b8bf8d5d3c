"""Whole-catalog views: template inheritance and folder structure."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rules.config import LayoutOptions
from uml.cache import EdgeKey, EdgeState, ViewCache
from uml.model import DiagramKind, EdgeKind, NodeKind

if TYPE_CHECKING:
    from catalog.catalog import ItemCatalog
    from catalog.models import TemplateField
    from uml.model import DiagramHandle, DiagramModel

logger = logging.getLogger(__name__)

TEMPLATES_DIAGRAM = "Templates Diagram"
TEMPLATE_FOLDERS_DIAGRAM = "Template Folders Diagram"


def _field_properties(field: TemplateField) -> list[str]:
    properties = [
        f"{key}={value!r}"
        for key, value in (
            ("title", field.title),
            ("section", field.section),
            ("source", field.source),
            ("standard_value", field.standard_value),
        )
        if value is not None
    ]
    if field.shared:
        properties.append("shared")
    if field.unversioned:
        properties.append("unversioned")
    return properties


def field_summary(fields: tuple[TemplateField, ...]) -> str:
    """One ``name: type {properties}`` line per field, in declaration order.

    Properties are listed only when set.

    Examples:
        >>> from catalog.models import TemplateField
        >>> field_summary((TemplateField(name="Title", field_type="Single-Line Text"),))
        'Title: Single-Line Text'
        >>> field_summary((TemplateField(name="Intro", section="Content", shared=True),))
        "Intro {section='Content', shared}"
    """
    lines = []
    for field in fields:
        line = f"{field.name}: {field.field_type}" if field.field_type else field.name
        properties = _field_properties(field)
        if properties:
            line = f"{line} {{{', '.join(properties)}}}"
        lines.append(line)
    return "\n".join(lines)


def build_templates_diagram(
    model: DiagramModel, catalog: ItemCatalog, direction: str
) -> DiagramHandle:
    """Every template, with a generalization edge to each resolvable base."""
    diagram = model.create_diagram(DiagramKind.CLASS, TEMPLATES_DIAGRAM, None)
    cache = ViewCache()

    for template in catalog.iter_templates():
        node = model.create_node(
            NodeKind.TEMPLATE,
            template.id,
            diagram,
            name=template.name,
            path=template.path,
        )
        if template.fields:
            model.set_label(node, field_summary(template.fields))
        cache.nodes[template.id] = node

    for template in catalog.iter_templates():
        for base_id in template.base_template_ids:
            base = cache.node(base_id)
            if base is None:
                logger.warning(
                    "Base template %r of %r is not in the catalog",
                    base_id,
                    template.path,
                )
                continue
            key = EdgeKey(template.id, base_id)
            if cache.edge(key) is not None:
                continue
            handle = model.create_edge(
                EdgeKind.GENERALIZATION, cache.nodes[template.id], base, diagram
            )
            cache.edges[key] = EdgeState(handle=handle)

    model.layout(diagram, direction)
    return diagram


def build_template_folders_diagram(
    model: DiagramModel, catalog: ItemCatalog, direction: str
) -> DiagramHandle:
    """Every folder, contained in its parent folder."""
    diagram = model.create_diagram(DiagramKind.PACKAGE, TEMPLATE_FOLDERS_DIAGRAM, None)
    cache = ViewCache()

    # Parents are yielded before their children.
    for folder in catalog.iter_folders():
        node = model.create_node(
            NodeKind.FOLDER, folder.id, diagram, name=folder.name, path=folder.path
        )
        cache.nodes[folder.id] = node

        parent = catalog.parent_of(folder.id)
        if parent is not None:
            model.create_edge(
                EdgeKind.CONTAINMENT, node, cache.nodes[parent.id], diagram
            )

    model.layout(diagram, direction)
    return diagram


def build_catalog_views(
    model: DiagramModel,
    catalog: ItemCatalog,
    layout: LayoutOptions | None = None,
) -> list[DiagramHandle]:
    layout = layout or LayoutOptions()
    return [
        build_templates_diagram(model, catalog, layout.templates_diagram),
        build_template_folders_diagram(
            model, catalog, layout.template_folders_diagram
        ),
    ]


__all__ = [
    "TEMPLATES_DIAGRAM",
    "TEMPLATE_FOLDERS_DIAGRAM",
    "build_catalog_views",
    "build_template_folders_diagram",
    "build_templates_diagram",
    "field_summary",
]
