"""Helix layer classification and dependency rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Layer(str, Enum):
    """The three fixed Helix layers, in processing order."""

    FOUNDATION = "foundation"
    FEATURE = "feature"
    PROJECT = "project"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def index(self) -> int:
        return list(Layer).index(self)


# Cross-module dependencies each layer may take. Foundation modules may
# depend on each other; Feature and Project modules may not.
HELIX_ALLOWED_DEPS: dict[Layer, frozenset[Layer]] = {
    Layer.FOUNDATION: frozenset({Layer.FOUNDATION}),
    Layer.FEATURE: frozenset({Layer.FOUNDATION}),
    Layer.PROJECT: frozenset({Layer.FEATURE, Layer.FOUNDATION}),
}


@dataclass(frozen=True)
class DependencyVerdict:
    is_valid: bool
    message: str | None = None


VALID = DependencyVerdict(is_valid=True)


def is_violation(
    from_layer: Layer,
    to_layer: Layer,
    allowed_deps: dict[Layer, frozenset[Layer]] = HELIX_ALLOWED_DEPS,
) -> bool:
    """Check if a cross-module dependency from one layer to another is a violation."""
    return to_layer not in allowed_deps.get(from_layer, frozenset())


def check_dependency(
    source_layer: Layer,
    source_module_id: str,
    target_layer: Layer,
    target_module_id: str,
) -> DependencyVerdict:
    """Classify one template dependency against the Helix layering rules.

    Dependencies inside a single module are always valid and never reach
    the layer table.
    """
    if source_module_id == target_module_id:
        return VALID

    if not is_violation(source_layer, target_layer):
        return VALID

    if source_layer is target_layer:
        message = (
            f"{source_layer.display_name} cannot depend on another "
            f"{target_layer.display_name} module"
        )
    else:
        message = (
            f"{source_layer.display_name} cannot depend on "
            f"{target_layer.display_name}"
        )
    return DependencyVerdict(is_valid=False, message=message)
