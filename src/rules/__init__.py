"""Configuration and Helix layering rules."""

from rules.config import (
    ConfigError,
    HelixMapConfig,
    LayerMapConfig,
    LayoutOptions,
    load_config,
)
from rules.layers import (
    HELIX_ALLOWED_DEPS,
    DependencyVerdict,
    Layer,
    check_dependency,
    is_violation,
)

__all__ = [
    "HELIX_ALLOWED_DEPS",
    "ConfigError",
    "DependencyVerdict",
    "HelixMapConfig",
    "Layer",
    "LayerMapConfig",
    "LayoutOptions",
    "check_dependency",
    "is_violation",
    "load_config",
]
