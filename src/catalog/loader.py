"""Catalog snapshot loading.

Two on-disk shapes are accepted:

- the canonical shape: ``{"items": [...]}`` (or a bare list of items) where
  each item carries ``kind`` (``"folder"`` or ``"template"``) and snake_case
  keys;
- the legacy PascalCase export: ``{"Items": [...], "DocumentationConfiguration":
  {...}}`` where items carry ``ReferenceID``, ``IsTemplate``, ``Children``,
  ``BaseTemplates`` and ``Fields``.

Missing ``path`` values are derived from the parent path and the item name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from catalog.catalog import CatalogError, ItemCatalog
from catalog.models import CatalogDocument
from rules.config import LayerMapConfig

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_LEGACY_FIELD_KEYS = {
    "ReferenceID": "id",
    "Name": "name",
    "FieldType": "field_type",
    "Title": "title",
    "SectionName": "section",
    "Source": "source",
    "StandardValue": "standard_value",
    "Shared": "shared",
    "Unversioned": "unversioned",
}

_LEGACY_LAYER_KEYS = {
    "foundation": ("FoundationLayerRoot", "FoundationModuleFolders"),
    "feature": ("FeatureLayerRoot", "FeatureModuleFolders"),
    "project": ("ProjectLayerRoot", "ProjectModuleFolders"),
}


@dataclass(frozen=True)
class CatalogSnapshot:
    """A loaded catalog plus any layer configuration embedded in the file."""

    catalog: ItemCatalog
    layers: LayerMapConfig | None = None
    title: str | None = None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def _as_optional_str(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return orjson.dumps(value).decode("utf-8")


def _legacy_field(raw: dict[str, Any]) -> dict[str, Any]:
    field = {
        new_key: raw[old_key]
        for old_key, new_key in _LEGACY_FIELD_KEYS.items()
        if old_key in raw
    }
    for key in ("title", "section", "source", "standard_value"):
        if key in field:
            field[key] = _as_optional_str(field[key])
    for key in ("shared", "unversioned"):
        if key in field:
            field[key] = _as_bool(field[key])
    if "field_type" in field and field["field_type"] is None:
        field["field_type"] = ""
    return field


def _legacy_item(raw: dict[str, Any]) -> dict[str, Any]:
    is_template = _as_bool(raw.get("IsTemplate", False))
    item: dict[str, Any] = {
        "kind": "template" if is_template else "folder",
        "id": raw.get("ReferenceID"),
        "name": raw.get("Name"),
        "path": raw.get("Path"),
    }
    if is_template:
        item["base_template_ids"] = list(raw.get("BaseTemplates") or [])
        item["fields"] = [_legacy_field(f) for f in raw.get("Fields") or []]
    else:
        item["children"] = [_legacy_item(child) for child in raw.get("Children") or []]
    return item


def _legacy_layers(raw_config: Any) -> LayerMapConfig | None:
    if not isinstance(raw_config, dict):
        return None

    def _ref(value: Any) -> str | None:
        if isinstance(value, dict):
            return value.get("ReferenceID")
        return value if isinstance(value, str) else None

    layers: dict[str, dict[str, Any]] = {}
    for layer_name, (root_key, modules_key) in _LEGACY_LAYER_KEYS.items():
        root = _ref(raw_config.get(root_key))
        modules = [
            ref
            for ref in (_ref(entry) for entry in raw_config.get(modules_key) or [])
            if ref
        ]
        layers[layer_name] = {"root": root, "modules": modules}

    if not any(layer["root"] for layer in layers.values()):
        return None
    return LayerMapConfig.model_validate(layers)


def _fill_paths(items: list[Any], parent_path: str) -> None:
    for item in items:
        if not isinstance(item, dict):
            continue
        if not item.get("path") and item.get("name"):
            item["path"] = f"{parent_path}/{item['name']}"
        children = item.get("children")
        if isinstance(children, list):
            _fill_paths(children, str(item.get("path") or parent_path))


def parse_catalog(data: Any) -> CatalogSnapshot:
    """Build a catalog snapshot from already-decoded JSON data."""
    layers: LayerMapConfig | None = None
    title: str | None = None

    if isinstance(data, list):
        raw_items = data
    elif isinstance(data, dict) and "Items" in data:
        raw_items = [_legacy_item(item) for item in data.get("Items") or []]
        raw_config = data.get("DocumentationConfiguration")
        layers = _legacy_layers(raw_config)
        if isinstance(raw_config, dict):
            title = raw_config.get("DocumentationTitle") or None
    elif isinstance(data, dict):
        raw_items = data.get("items") or []
    else:
        msg = "Catalog must be a JSON object or a list of items"
        raise CatalogError(msg)

    if not isinstance(raw_items, list):
        msg = "Catalog items must be a list"
        raise CatalogError(msg)

    _fill_paths(raw_items, "")

    try:
        document = CatalogDocument.model_validate({"items": raw_items})
    except ValidationError as exc:
        msg = f"Invalid catalog: {exc}"
        raise CatalogError(msg) from exc

    catalog = ItemCatalog(document.items)
    logger.debug("Loaded catalog with %d items", len(catalog))
    return CatalogSnapshot(catalog=catalog, layers=layers, title=title)


def load_catalog(path: Path) -> CatalogSnapshot:
    """Load a catalog snapshot from a JSON file."""
    try:
        data = orjson.loads(path.read_bytes())
    except OSError as exc:
        msg = f"Failed to read catalog {path}: {exc}"
        raise CatalogError(msg) from exc
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in catalog {path}: {exc}"
        raise CatalogError(msg) from exc

    return parse_catalog(data)


__all__ = ["CatalogSnapshot", "load_catalog", "parse_catalog"]
