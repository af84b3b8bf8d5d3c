"""Hierarchy indexing: map every module template onto its module and layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from catalog.models import Folder, Template
from rules.layers import Layer

if TYPE_CHECKING:
    from collections.abc import Mapping

    from catalog.catalog import ItemCatalog
    from catalog.models import Item
    from rules.config import LayerDef, LayerMapConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HierarchyEntry:
    template_id: str
    module_id: str
    layer_id: str


@dataclass(frozen=True)
class HelixModule:
    id: str
    name: str
    path: str
    layer_id: str
    template_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class HelixLayer:
    layer: Layer
    id: str
    name: str
    path: str
    modules: tuple[HelixModule, ...] = ()

    @property
    def display_name(self) -> str:
        return self.layer.display_name


@dataclass(frozen=True)
class HierarchyIndex:
    """Flat and per-layer lookups over the indexed templates.

    ``layers`` holds only present layers, in Foundation, Feature, Project
    order. ``entries`` is keyed by template ID and is read-only.
    """

    layers: tuple[HelixLayer, ...] = ()
    entries: Mapping[str, HierarchyEntry] = field(default_factory=dict)
    _layers_by_id: Mapping[str, HelixLayer] = field(
        init=False, repr=False, compare=False
    )
    _modules_by_id: Mapping[str, HelixModule] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))
        object.__setattr__(
            self,
            "_layers_by_id",
            MappingProxyType({layer.id: layer for layer in self.layers}),
        )
        object.__setattr__(
            self,
            "_modules_by_id",
            MappingProxyType({module.id: module for module in self.iter_modules()}),
        )

    def entry(self, template_id: str) -> HierarchyEntry | None:
        return self.entries.get(template_id)

    def layer_by_id(self, layer_id: str) -> HelixLayer | None:
        return self._layers_by_id.get(layer_id)

    def module_by_id(self, module_id: str) -> HelixModule | None:
        return self._modules_by_id.get(module_id)

    def iter_modules(self) -> list[HelixModule]:
        return [module for layer in self.layers for module in layer.modules]

    @property
    def entries_by_layer(self) -> dict[str, list[HierarchyEntry]]:
        grouped: dict[str, list[HierarchyEntry]] = {
            layer.id: [] for layer in self.layers
        }
        for layer in self.layers:
            for module in layer.modules:
                grouped[layer.id].extend(
                    self.entries[template_id] for template_id in module.template_ids
                )
        return grouped


def collect_templates(item: Item) -> list[Template]:
    """Collect every template under an item, depth-first in child order."""
    if isinstance(item, Template):
        return [item]
    if isinstance(item, Folder):
        templates: list[Template] = []
        for child in item.children:
            templates.extend(collect_templates(child))
        return templates
    msg = f"Unsupported catalog item: {item!r}"
    raise TypeError(msg)


def _layer_defs(layer_map: LayerMapConfig) -> list[tuple[Layer, LayerDef]]:
    return [
        (Layer.FOUNDATION, layer_map.foundation),
        (Layer.FEATURE, layer_map.feature),
        (Layer.PROJECT, layer_map.project),
    ]


def build_hierarchy_index(
    catalog: ItemCatalog, layer_map: LayerMapConfig
) -> HierarchyIndex:
    """Index every template reachable from a configured module root.

    A template reachable from two module roots belongs to the module processed
    last (layers in Foundation, Feature, Project order; modules in configured
    order). Module template lists are derived from the final index, so such a
    template is listed under exactly one module.
    """
    entries: dict[str, HierarchyEntry] = {}
    collected: list[tuple[Layer, Item, list[tuple[Item, list[str]]]]] = []
    seen_modules: set[str] = set()
    seen_layer_roots: dict[str, Layer] = {}

    for layer_kind, layer_def in _layer_defs(layer_map):
        if not layer_def.root:
            continue
        layer_root = catalog.resolve(layer_def.root)
        if layer_root is None:
            logger.warning(
                "%s layer root %r was not found in the catalog; skipping the layer",
                layer_kind.display_name,
                layer_def.root,
            )
            continue
        if layer_root.id in seen_layer_roots:
            logger.warning(
                "%s layer root %r is already the %s layer root; skipping the layer",
                layer_kind.display_name,
                layer_root.id,
                seen_layer_roots[layer_root.id].display_name,
            )
            continue
        seen_layer_roots[layer_root.id] = layer_kind

        modules: list[tuple[Item, list[str]]] = []
        for module_id in layer_def.modules:
            if module_id in seen_modules:
                logger.warning(
                    "Module %r is configured more than once; skipping the repeat "
                    "in the %s layer",
                    module_id,
                    layer_kind.display_name,
                )
                continue
            module_root = catalog.resolve(module_id)
            if module_root is None:
                logger.warning(
                    "%s module root %r was not found in the catalog; skipping it",
                    layer_kind.display_name,
                    module_id,
                )
                continue
            seen_modules.add(module_id)

            template_ids: list[str] = []
            for template in collect_templates(module_root):
                previous = entries.get(template.id)
                if previous is not None and previous.module_id != module_root.id:
                    logger.warning(
                        "Template %r is reachable from modules %r and %r; "
                        "assigning it to %r",
                        template.path,
                        previous.module_id,
                        module_root.id,
                        module_root.id,
                    )
                entries[template.id] = HierarchyEntry(
                    template_id=template.id,
                    module_id=module_root.id,
                    layer_id=layer_root.id,
                )
                template_ids.append(template.id)
            modules.append((module_root, template_ids))

        collected.append((layer_kind, layer_root, modules))

    layers: list[HelixLayer] = []
    for layer_kind, layer_root, modules in collected:
        helix_modules = []
        for module_root, template_ids in modules:
            owned = tuple(
                dict.fromkeys(
                    template_id
                    for template_id in template_ids
                    if entries[template_id].module_id == module_root.id
                )
            )
            helix_modules.append(
                HelixModule(
                    id=module_root.id,
                    name=module_root.name,
                    path=module_root.path,
                    layer_id=layer_root.id,
                    template_ids=owned,
                )
            )
        layers.append(
            HelixLayer(
                layer=layer_kind,
                id=layer_root.id,
                name=layer_root.name,
                path=layer_root.path,
                modules=tuple(helix_modules),
            )
        )

    logger.info(
        "Indexed %d templates across %d layers",
        len(entries),
        len(layers),
    )
    return HierarchyIndex(layers=tuple(layers), entries=entries)


__all__ = [
    "HelixLayer",
    "HelixModule",
    "HierarchyEntry",
    "HierarchyIndex",
    "build_hierarchy_index",
    "collect_templates",
]
