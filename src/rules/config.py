from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "helixmap.toml"

LayoutDirection = Literal["LR", "RL", "TB", "BT", ""]


class LayerDef(BaseModel):
    """Folder IDs that make up one Helix layer."""

    model_config = ConfigDict(extra="forbid")

    root: str | None = Field(
        default=None,
        description="ID of the layer root folder (unset = layer absent)",
    )
    modules: list[str] = Field(
        default_factory=list,
        description="IDs of the module root folders, in processing order",
    )

    @field_validator("root", mode="before")
    @classmethod
    def blank_root_is_absent(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class LayerMapConfig(BaseModel):
    """Mapping of the three Helix layers onto catalog folders."""

    model_config = ConfigDict(extra="forbid")

    foundation: LayerDef = Field(default_factory=LayerDef)
    feature: LayerDef = Field(default_factory=LayerDef)
    project: LayerDef = Field(default_factory=LayerDef)

    def is_configured(self) -> bool:
        return any(
            layer.root for layer in (self.foundation, self.feature, self.project)
        )


class LayoutOptions(BaseModel):
    """Layout direction requested for each family of diagrams."""

    model_config = ConfigDict(extra="forbid")

    templates_diagram: LayoutDirection = "LR"
    template_folders_diagram: LayoutDirection = "LR"
    module_diagram: LayoutDirection = "LR"
    layer_diagram: LayoutDirection = "LR"


class DocumentationConfig(BaseModel):
    """Descriptive metadata carried into the generation metadata artifact."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(default="Untitled", description="Documentation title")
    project_name: str = ""
    environment_name: str = ""
    commit_author: str = ""
    commit_hash: str = ""
    commit_link: str = ""
    deploy_link: str = ""


class HelixMapConfig(BaseModel):
    """Configuration for helixmap analysis and artifact generation."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".helixmap",
        description="Output directory for generated artifacts",
    )
    catalog: str = Field(
        default="templates.json",
        description="Catalog snapshot path, relative to the project root",
    )
    documentation: DocumentationConfig = Field(default_factory=DocumentationConfig)
    layout: LayoutOptions = Field(default_factory=LayoutOptions)
    layers: LayerMapConfig = Field(
        default_factory=LayerMapConfig,
        description="Helix layer and module roots",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the project root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> HelixMapConfig:
    """Load configuration from helixmap.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return HelixMapConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return HelixMapConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
