from __future__ import annotations

import itertools

import pytest

from rules.layers import (
    HELIX_ALLOWED_DEPS,
    DependencyVerdict,
    Layer,
    check_dependency,
    is_violation,
)

FOUNDATION = Layer.FOUNDATION
FEATURE = Layer.FEATURE
PROJECT = Layer.PROJECT


@pytest.mark.parametrize(
    ("source", "target"), list(itertools.product(Layer, repeat=2))
)
def test_same_module_is_always_valid(source: Layer, target: Layer) -> None:
    assert check_dependency(source, "m", target, "m") == DependencyVerdict(True)


@pytest.mark.parametrize(
    ("source", "target", "message"),
    [
        (FOUNDATION, FOUNDATION, None),
        (FEATURE, FOUNDATION, None),
        (PROJECT, FOUNDATION, None),
        (PROJECT, FEATURE, None),
        (FEATURE, FEATURE, "Feature cannot depend on another Feature module"),
        (PROJECT, PROJECT, "Project cannot depend on another Project module"),
        (FEATURE, PROJECT, "Feature cannot depend on Project"),
        (FOUNDATION, FEATURE, "Foundation cannot depend on Feature"),
        (FOUNDATION, PROJECT, "Foundation cannot depend on Project"),
    ],
)
def test_cross_module_rule_table(
    source: Layer, target: Layer, message: str | None
) -> None:
    verdict = check_dependency(source, "m1", target, "m2")

    assert verdict.is_valid is (message is None)
    assert verdict.message == message


def test_check_dependency_is_idempotent() -> None:
    first = check_dependency(FEATURE, "a", PROJECT, "b")
    second = check_dependency(FEATURE, "a", PROJECT, "b")

    assert first == second


def test_is_violation_uses_allowed_table() -> None:
    assert not is_violation(PROJECT, FEATURE)
    assert is_violation(FEATURE, FEATURE)
    assert not is_violation(FEATURE, FEATURE, {FEATURE: frozenset({FEATURE})})
    assert is_violation(FEATURE, FOUNDATION, {})


def test_allowed_table_covers_every_layer() -> None:
    assert set(HELIX_ALLOWED_DEPS) == set(Layer)
    assert [layer.index for layer in Layer] == [0, 1, 2]
    assert PROJECT.display_name == "Project"
