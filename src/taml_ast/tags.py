#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/taml_ast/tags.py
"""Tag registry for TAML elements.

The registry is a closed set of 37 tag identifiers: 8 standard colors,
8 bright colors, 16 background colors and 5 text styles. Node constructors
do not check tags against the registry; callers that need validation use
:func:`is_valid_tag` (or :class:`taml_ast.visitors.ValidationVisitor` for a
whole tree).

Examples
--------
    >>> from taml_ast.tags import is_valid_tag, get_tag_category
    >>> is_valid_tag("brightRed")
    True
    >>> is_valid_tag("purple")
    False
    >>> get_tag_category("bgBlue")
    'background'

"""

from __future__ import annotations

from typing import Any, Optional

from taml_ast.constants import (
    BACKGROUND_COLORS,
    BRIGHT_COLORS,
    STANDARD_COLORS,
    TEXT_STYLES,
    TagCategory,
)

VALID_TAGS: frozenset[str] = frozenset((*STANDARD_COLORS, *BRIGHT_COLORS, *BACKGROUND_COLORS, *TEXT_STYLES))

_STANDARD_SET = frozenset(STANDARD_COLORS)
_BRIGHT_SET = frozenset(BRIGHT_COLORS)
_BACKGROUND_SET = frozenset(BACKGROUND_COLORS)
_STYLE_SET = frozenset(TEXT_STYLES)

# Order matters only for readability; the categories are disjoint
_TAG_CATEGORY_MAP: list[tuple[frozenset[str], TagCategory]] = [
    (_STANDARD_SET, "standard"),
    (_BRIGHT_SET, "bright"),
    (_BACKGROUND_SET, "background"),
    (_STYLE_SET, "style"),
]


def _is_member(tag: Any, members: frozenset[str]) -> bool:
    return isinstance(tag, str) and tag in members


def is_valid_tag(tag: Any) -> bool:
    """Check whether a value is one of the 37 registered TAML tags.

    Parameters
    ----------
    tag : Any
        Candidate tag identifier

    Returns
    -------
    bool
        True if ``tag`` is a registered tag name (case-sensitive)

    """
    return _is_member(tag, VALID_TAGS)


def is_standard_color(tag: Any) -> bool:
    """Check whether a tag is one of the 8 standard foreground colors."""
    return _is_member(tag, _STANDARD_SET)


def is_bright_color(tag: Any) -> bool:
    """Check whether a tag is one of the 8 bright foreground colors."""
    return _is_member(tag, _BRIGHT_SET)


def is_background_color(tag: Any) -> bool:
    """Check whether a tag is one of the 16 background colors."""
    return _is_member(tag, _BACKGROUND_SET)


def is_text_style(tag: Any) -> bool:
    """Check whether a tag is one of the 5 text styles."""
    return _is_member(tag, _STYLE_SET)


def get_tag_category(tag: Any) -> Optional[TagCategory]:
    """Return the registry category of a tag.

    Parameters
    ----------
    tag : Any
        Candidate tag identifier

    Returns
    -------
    TagCategory or None
        ``"standard"``, ``"bright"``, ``"background"`` or ``"style"``;
        None when the tag is not registered

    """
    if not isinstance(tag, str):
        return None
    for members, category in _TAG_CATEGORY_MAP:
        if tag in members:
            return category
    return None


__all__ = [
    "VALID_TAGS",
    "get_tag_category",
    "is_background_color",
    "is_bright_color",
    "is_standard_color",
    "is_text_style",
    "is_valid_tag",
]
