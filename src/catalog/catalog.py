"""Read-only item provider over a loaded catalog snapshot."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog.models import Folder, Template

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from catalog.models import Item


class CatalogError(Exception):
    """Raised when a catalog snapshot cannot be read or is inconsistent."""


class ItemCatalog:
    """Immutable index over a tree of folders and templates.

    Items are indexed once at construction. Item IDs must be globally unique;
    a duplicate ID raises ``CatalogError`` because every downstream lookup is
    keyed by ID.
    """

    def __init__(self, roots: Iterable[Item]) -> None:
        self._roots: tuple[Item, ...] = tuple(roots)
        self._items: dict[str, Item] = {}
        self._parents: dict[str, str | None] = {}
        self._order: list[str] = []

        stack: list[tuple[Item, str | None]] = [
            (item, None) for item in reversed(self._roots)
        ]
        while stack:
            item, parent_id = stack.pop()
            if item.id in self._items:
                msg = f"Duplicate item ID {item.id!r} at {item.path!r}"
                raise CatalogError(msg)
            self._items[item.id] = item
            self._parents[item.id] = parent_id
            self._order.append(item.id)
            if isinstance(item, Folder):
                stack.extend((child, item.id) for child in reversed(item.children))

    @property
    def roots(self) -> tuple[Item, ...]:
        return self._roots

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def resolve(self, item_id: str) -> Item | None:
        """Return the item with the given ID, or None."""
        return self._items.get(item_id)

    def parent_of(self, item_id: str) -> Folder | None:
        parent_id = self._parents.get(item_id)
        if parent_id is None:
            return None
        parent = self._items[parent_id]
        return parent if isinstance(parent, Folder) else None

    def get_children(self, folder_id: str) -> list[Item]:
        """Return the direct children of a folder; templates have none."""
        item = self._items.get(folder_id)
        if isinstance(item, Folder):
            return list(item.children)
        return []

    def get_base_template_ids(self, template_id: str) -> list[str]:
        """Return the declared base template IDs in declaration order."""
        item = self._items.get(template_id)
        if isinstance(item, Template):
            return list(item.base_template_ids)
        return []

    def iter_items(self) -> Iterator[Item]:
        """Yield every item depth-first, parents before children."""
        for item_id in self._order:
            yield self._items[item_id]

    def iter_templates(self) -> Iterator[Template]:
        for item in self.iter_items():
            if isinstance(item, Template):
                yield item

    def iter_folders(self) -> Iterator[Folder]:
        for item in self.iter_items():
            if isinstance(item, Folder):
                yield item


__all__ = ["CatalogError", "ItemCatalog"]
