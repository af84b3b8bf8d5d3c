"""Shared utilities for helixmap."""

from __future__ import annotations

DESCRIPTION_SEPARATOR = "  \n"


def describe_dependency(source_path: str, target_path: str) -> str:
    """Render a dependency as a human-readable documentation entry.

    Examples:
        >>> describe_dependency("/t/Feature/News/Article", "/t/Foundation/Seo/Meta")
        '`/t/Feature/News/Article` -> `/t/Foundation/Seo/Meta`'
    """
    return f"`{source_path}` -> `{target_path}`"


def join_descriptions(descriptions: list[str]) -> str:
    """Join documentation entries in encounter order, one per markdown line."""
    return DESCRIPTION_SEPARATOR.join(descriptions)
