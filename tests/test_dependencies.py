from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from graph.dependencies import resolve_dependencies
from graph.hierarchy import build_hierarchy_index

if TYPE_CHECKING:
    from catalog.loader import CatalogSnapshot
    from graph.dependencies import DependencyMap
    from graph.hierarchy import HierarchyIndex
    from rules.config import HelixMapConfig

A = "/sitecore/templates/Foundation/ModFoo/A"
B = "/sitecore/templates/Feature/ModBar/B"
C = "/sitecore/templates/Project/ModBaz/C"
D = "/sitecore/templates/Feature/ModQux/D"


def _resolve(
    snapshot: CatalogSnapshot, config: HelixMapConfig
) -> tuple[HierarchyIndex, DependencyMap]:
    index = build_hierarchy_index(snapshot.catalog, config.layers)
    return index, resolve_dependencies(index, snapshot.catalog)


def test_dependencies_follow_declared_base_order(
    mini_snapshot: CatalogSnapshot, mini_config: HelixMapConfig
) -> None:
    index, deps = _resolve(mini_snapshot, mini_config)

    for template_id in index.entries:
        resolvable = [
            base_id
            for base_id in mini_snapshot.catalog.get_base_template_ids(template_id)
            if index.entry(base_id) is not None
        ]
        targets = [d.target.template_id for d in deps.dependencies_of(template_id)]
        assert targets == resolvable


def test_dangling_references_are_dropped_with_warning(
    mini_snapshot: CatalogSnapshot,
    mini_config: HelixMapConfig,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="graph.dependencies"):
        _, deps = _resolve(mini_snapshot, mini_config)

    assert deps.dependencies_of("tpl-a") == ()
    assert "'tpl-std'" in caplog.text
    assert A in caplog.text


def test_dependents_are_the_exact_inverse(
    mini_snapshot: CatalogSnapshot, mini_config: HelixMapConfig
) -> None:
    index, deps = _resolve(mini_snapshot, mini_config)

    forward = {
        (dep.source.template_id, dep.target.template_id)
        for template_id in index.entries
        for dep in deps.dependencies_of(template_id)
    }
    backward = {
        (dep.source.template_id, dep.target.template_id)
        for template_id in index.entries
        for dep in deps.dependents_of(template_id)
    }
    assert forward == backward
    for template_id in index.entries:
        for dep in deps.dependents_of(template_id):
            assert dep.target.template_id == template_id
    assert [d.source.template_id for d in deps.dependents_of("tpl-a")] == [
        "tpl-s",
        "tpl-b",
        "tpl-b2",
    ]


def test_every_indexed_template_has_entries(
    mini_snapshot: CatalogSnapshot, mini_config: HelixMapConfig
) -> None:
    index, deps = _resolve(mini_snapshot, mini_config)

    assert set(deps.dependencies) == set(index.entries)
    assert set(deps.dependents) == set(index.entries)
    assert deps.dependents_of("tpl-d") == ()
    assert deps.dependencies_of("not-indexed") == ()


def test_end_to_end_validity(
    mini_snapshot: CatalogSnapshot, mini_config: HelixMapConfig
) -> None:
    _, deps = _resolve(mini_snapshot, mini_config)

    (b_to_a,) = deps.dependencies_of("tpl-b")
    assert (b_to_a.target.template_id, b_to_a.is_valid) == ("tpl-a", True)

    (c_to_b,) = deps.dependencies_of("tpl-c")
    assert (c_to_b.target.template_id, c_to_b.is_valid) == ("tpl-b", True)

    (d_to_c,) = deps.dependencies_of("tpl-d")
    assert d_to_c.is_valid is False
    assert d_to_c.message == "Feature cannot depend on Project"
    assert d_to_c.source_path == D
    assert d_to_c.target_path == C
    assert d_to_c.description == f"`{D}` -> `{C}`"


def test_intra_module_dependencies_are_kept(
    mini_snapshot: CatalogSnapshot, mini_config: HelixMapConfig
) -> None:
    _, deps = _resolve(mini_snapshot, mini_config)

    b2_deps = deps.dependencies_of("tpl-b2")
    assert [(d.target.template_id, d.is_cross_module) for d in b2_deps] == [
        ("tpl-a", True),
        ("tpl-b", False),
    ]
    assert all(d.is_valid for d in b2_deps)
    assert b2_deps[0].is_cross_layer is True
    assert b2_deps[1].is_cross_layer is False
    assert B in {d.target_path for d in b2_deps}


def test_dependency_map_is_read_only(
    mini_snapshot: CatalogSnapshot, mini_config: HelixMapConfig
) -> None:
    _, deps = _resolve(mini_snapshot, mini_config)

    with pytest.raises(TypeError):
        deps.dependencies["tpl-x"] = ()  # type: ignore[index]
    with pytest.raises(TypeError):
        deps.dependents["tpl-x"] = ()  # type: ignore[index]
