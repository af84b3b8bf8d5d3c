from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from catalog.catalog import CatalogError, ItemCatalog
from catalog.loader import load_catalog, parse_catalog
from catalog.models import Folder, Template

if TYPE_CHECKING:
    from pathlib import Path

    from catalog.loader import CatalogSnapshot


def test_paths_are_derived_from_parent_and_name(mini_snapshot: CatalogSnapshot) -> None:
    catalog = mini_snapshot.catalog

    template = catalog.resolve("tpl-a")
    assert isinstance(template, Template)
    assert template.path == "/sitecore/templates/Foundation/ModFoo/A"
    assert template.base_template_ids == ("tpl-std",)
    assert [field.name for field in template.fields] == ["Title", "Body"]


def test_catalog_lookups(mini_snapshot: CatalogSnapshot) -> None:
    catalog = mini_snapshot.catalog

    parent = catalog.parent_of("tpl-b")
    assert isinstance(parent, Folder)
    assert parent.id == "mod-bar"
    assert catalog.parent_of("templates") is None

    assert [child.id for child in catalog.get_children("mod-bar")] == ["tpl-b", "tpl-b2"]
    assert catalog.get_children("tpl-b") == []
    assert catalog.get_base_template_ids("tpl-b2") == ["tpl-a", "tpl-b"]
    assert catalog.get_base_template_ids("mod-bar") == []
    assert catalog.resolve("nope") is None
    assert "tpl-c" in catalog


def test_iter_items_is_depth_first_parents_first(mini_snapshot: CatalogSnapshot) -> None:
    ids = [item.id for item in mini_snapshot.catalog.iter_items()]

    assert ids[:4] == ["templates", "foundation", "mod-foo", "tpl-a"]
    assert ids.index("feature") < ids.index("mod-bar") < ids.index("tpl-b")
    assert len(ids) == len(mini_snapshot.catalog)


def test_bare_list_catalog_and_name_from_path() -> None:
    snapshot = parse_catalog(
        [{"kind": "template", "id": "t1", "name": "", "path": "/templates/Page"}]
    )

    template = snapshot.catalog.resolve("t1")
    assert template is not None
    assert template.name == "Page"
    assert snapshot.layers is None


def test_duplicate_ids_raise_catalog_error() -> None:
    data = {
        "items": [
            {"kind": "template", "id": "dup", "name": "One"},
            {"kind": "template", "id": "dup", "name": "Two"},
        ]
    }

    with pytest.raises(CatalogError, match="Duplicate item ID 'dup'"):
        parse_catalog(data)


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(CatalogError, match="Invalid catalog"):
        parse_catalog({"items": [{"kind": "widget", "id": "x", "name": "X"}]})


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(CatalogError):
        parse_catalog(
            {"items": [{"kind": "template", "id": "x", "name": "X", "color": "red"}]}
        )


def test_legacy_export_with_embedded_layers() -> None:
    data = {
        "Items": [
            {
                "ReferenceID": "root",
                "Name": "templates",
                "Path": "/sitecore/templates",
                "IsTemplate": False,
                "Children": [
                    {
                        "ReferenceID": "mod",
                        "Name": "Navigation",
                        "IsTemplate": False,
                        "Children": [
                            {
                                "ReferenceID": "t-nav",
                                "Name": "Menu",
                                "IsTemplate": True,
                                "BaseTemplates": ["t-base"],
                                "Fields": [
                                    {
                                        "ReferenceID": "f1",
                                        "Name": "Links",
                                        "FieldType": "Treelist",
                                        "Shared": "true",
                                        "Unversioned": 0,
                                    }
                                ],
                            }
                        ],
                    }
                ],
            }
        ],
        "DocumentationConfiguration": {
            "DocumentationTitle": "Legacy Docs",
            "FeatureLayerRoot": {"ReferenceID": "root"},
            "FeatureModuleFolders": [{"ReferenceID": "mod"}],
        },
    }

    snapshot = parse_catalog(data)

    template = snapshot.catalog.resolve("t-nav")
    assert isinstance(template, Template)
    assert template.path == "/sitecore/templates/Navigation/Menu"
    assert template.base_template_ids == ("t-base",)
    field = template.fields[0]
    assert (field.id, field.field_type, field.shared, field.unversioned) == (
        "f1",
        "Treelist",
        True,
        False,
    )
    assert snapshot.title == "Legacy Docs"
    assert snapshot.layers is not None
    assert snapshot.layers.feature.root == "root"
    assert snapshot.layers.feature.modules == ["mod"]
    assert snapshot.layers.foundation.root is None


def test_load_catalog_reports_unreadable_files(tmp_path: Path) -> None:
    with pytest.raises(CatalogError, match="Failed to read catalog"):
        load_catalog(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError, match="Invalid JSON"):
        load_catalog(broken)


def test_item_catalog_accepts_models_directly() -> None:
    catalog = ItemCatalog(
        [
            Folder(
                id="f",
                name="F",
                path="/F",
                children=(Template(id="t", name="T", path="/F/T"),),
            )
        ]
    )

    assert [t.id for t in catalog.iter_templates()] == ["t"]
    assert [f.id for f in catalog.iter_folders()] == ["f"]
