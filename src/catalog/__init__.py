"""Template catalog: item models, provider and snapshot loading."""

from catalog.catalog import CatalogError, ItemCatalog
from catalog.loader import CatalogSnapshot, load_catalog, parse_catalog
from catalog.models import CatalogDocument, Folder, Item, Template, TemplateField

__all__ = [
    "CatalogDocument",
    "CatalogError",
    "CatalogSnapshot",
    "Folder",
    "Item",
    "ItemCatalog",
    "Template",
    "TemplateField",
    "load_catalog",
    "parse_catalog",
]
