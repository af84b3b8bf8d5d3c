"""Template dependency resolution over the hierarchy index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from rules.layers import check_dependency
from utils import describe_dependency

if TYPE_CHECKING:
    from collections.abc import Mapping

    from catalog.catalog import ItemCatalog
    from graph.hierarchy import HelixLayer, HierarchyEntry, HierarchyIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dependency:
    """A template depending on one of its base templates.

    Both endpoints are indexed templates. Validity is decided once, when the
    dependency is resolved.
    """

    source: HierarchyEntry
    target: HierarchyEntry
    source_path: str
    target_path: str
    is_valid: bool = True
    message: str | None = None

    @property
    def is_cross_module(self) -> bool:
        return self.source.module_id != self.target.module_id

    @property
    def is_cross_layer(self) -> bool:
        return self.source.layer_id != self.target.layer_id

    @property
    def description(self) -> str:
        return describe_dependency(self.source_path, self.target_path)


@dataclass(frozen=True)
class DependencyMap:
    """Outbound and inbound dependencies for every indexed template.

    Both mappings are read-only views keyed by template ID.
    """

    dependencies: Mapping[str, tuple[Dependency, ...]] = field(default_factory=dict)
    dependents: Mapping[str, tuple[Dependency, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "dependencies", MappingProxyType(dict(self.dependencies))
        )
        object.__setattr__(self, "dependents", MappingProxyType(dict(self.dependents)))

    def dependencies_of(self, template_id: str) -> tuple[Dependency, ...]:
        return self.dependencies.get(template_id, ())

    def dependents_of(self, template_id: str) -> tuple[Dependency, ...]:
        return self.dependents.get(template_id, ())

    def all_dependencies(self) -> list[Dependency]:
        return [dep for deps in self.dependencies.values() for dep in deps]


def _layer_of(index: HierarchyIndex, entry: HierarchyEntry) -> HelixLayer:
    layer = index.layer_by_id(entry.layer_id)
    if layer is None:
        msg = f"Hierarchy entry {entry!r} points at an unknown layer"
        raise RuntimeError(msg)
    return layer


def resolve_dependencies(index: HierarchyIndex, catalog: ItemCatalog) -> DependencyMap:
    """Resolve base-template references of every indexed template.

    References to templates outside the configured modules are dropped with a
    warning. Dependents are the exact inverse, in encounter order.
    """
    dependencies: dict[str, tuple[Dependency, ...]] = {}
    dependents: dict[str, list[Dependency]] = {
        template_id: [] for template_id in index.entries
    }
    dropped = 0

    for module in index.iter_modules():
        for template_id in module.template_ids:
            source = index.entries[template_id]
            source_item = catalog.resolve(template_id)
            source_path = source_item.path if source_item else template_id
            source_layer = _layer_of(index, source)

            resolved: list[Dependency] = []
            for base_id in catalog.get_base_template_ids(template_id):
                target = index.entry(base_id)
                if target is None:
                    dropped += 1
                    logger.warning(
                        "Base template %r of %r does not belong to a configured "
                        "module and is excluded from its dependencies",
                        base_id,
                        source_path,
                    )
                    continue

                target_item = catalog.resolve(base_id)
                verdict = check_dependency(
                    source_layer.layer,
                    source.module_id,
                    _layer_of(index, target).layer,
                    target.module_id,
                )
                dependency = Dependency(
                    source=source,
                    target=target,
                    source_path=source_path,
                    target_path=target_item.path if target_item else base_id,
                    is_valid=verdict.is_valid,
                    message=verdict.message,
                )
                resolved.append(dependency)
                dependents[base_id].append(dependency)

            dependencies[template_id] = tuple(resolved)

    if dropped:
        logger.info("Dropped %d dangling base template references", dropped)

    return DependencyMap(
        dependencies=dependencies,
        dependents={key: tuple(value) for key, value in dependents.items()},
    )


__all__ = ["Dependency", "DependencyMap", "resolve_dependencies"]
