"""Item models for the template catalog.

A catalog is a tree of folders and templates. Items are a tagged union on
``kind`` so every traversal site dispatches on the concrete model type.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TemplateField(BaseModel):
    """A field declared on a template. Opaque to the dependency analysis."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str | None = None
    name: str
    field_type: str = ""
    title: str | None = None
    section: str | None = None
    source: str | None = None
    standard_value: str | None = None
    shared: bool = False
    unversioned: bool = False


class _CatalogItem(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str
    path: str

    @model_validator(mode="before")
    @classmethod
    def fill_name_from_path(cls, data: Any) -> Any:
        """Default ``name`` to the last segment of ``path``."""
        if isinstance(data, dict) and not data.get("name") and data.get("path"):
            data = dict(data)
            data["name"] = str(data["path"]).rstrip("/").rsplit("/", 1)[-1]
        return data


class Template(_CatalogItem):
    """A typed record schema; inheritance is declared via base templates."""

    kind: Literal["template"] = "template"
    base_template_ids: tuple[str, ...] = Field(default_factory=tuple)
    fields: tuple[TemplateField, ...] = Field(default_factory=tuple)


class Folder(_CatalogItem):
    """A grouping node in the catalog tree."""

    kind: Literal["folder"] = "folder"
    children: tuple[Item, ...] = Field(default_factory=tuple)


Item = Annotated[Union[Folder, Template], Field(discriminator="kind")]

Folder.model_rebuild()


class CatalogDocument(BaseModel):
    """Top-level shape of a catalog snapshot file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    items: tuple[Item, ...] = Field(default_factory=tuple)


__all__ = ["CatalogDocument", "Folder", "Item", "Template", "TemplateField"]
