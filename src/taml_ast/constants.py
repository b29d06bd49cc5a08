#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the taml_ast library.

This module centralizes the tag tables of the TAML (Terminal ANSI Markup
Language) tag registry, the Literal types shared across the package, and the
default configuration values.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Tag Registry - The 37 valid element tags grouped by category
3. Tree Behavior Defaults - Defaults for mutation and traversal options
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

NodeType = Literal["document", "element", "text"]

TamlTag = Literal[
    # Standard colors
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    # Bright colors
    "brightBlack",
    "brightRed",
    "brightGreen",
    "brightYellow",
    "brightBlue",
    "brightMagenta",
    "brightCyan",
    "brightWhite",
    # Background colors
    "bgBlack",
    "bgRed",
    "bgGreen",
    "bgYellow",
    "bgBlue",
    "bgMagenta",
    "bgCyan",
    "bgWhite",
    "bgBrightBlack",
    "bgBrightRed",
    "bgBrightGreen",
    "bgBrightYellow",
    "bgBrightBlue",
    "bgBrightMagenta",
    "bgBrightCyan",
    "bgBrightWhite",
    # Text styles
    "bold",
    "dim",
    "italic",
    "underline",
    "strikethrough",
]

TagCategory = Literal["standard", "bright", "background", "style"]

# What happens when a node that already has a parent is attached elsewhere
ReattachPolicy = Literal["detach", "error", "overwrite"]

# =============================================================================
# Tag Registry
# =============================================================================

STANDARD_COLORS: tuple[str, ...] = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)

BRIGHT_COLORS: tuple[str, ...] = (
    "brightBlack",
    "brightRed",
    "brightGreen",
    "brightYellow",
    "brightBlue",
    "brightMagenta",
    "brightCyan",
    "brightWhite",
)

BACKGROUND_COLORS: tuple[str, ...] = (
    "bgBlack",
    "bgRed",
    "bgGreen",
    "bgYellow",
    "bgBlue",
    "bgMagenta",
    "bgCyan",
    "bgWhite",
    "bgBrightBlack",
    "bgBrightRed",
    "bgBrightGreen",
    "bgBrightYellow",
    "bgBrightBlue",
    "bgBrightMagenta",
    "bgBrightCyan",
    "bgBrightWhite",
)

TEXT_STYLES: tuple[str, ...] = (
    "bold",
    "dim",
    "italic",
    "underline",
    "strikethrough",
)

# =============================================================================
# Tree Behavior Defaults
# =============================================================================

DEFAULT_REATTACH_POLICY: ReattachPolicy = "detach"
DEFAULT_SNAPSHOT_CHILDREN = False

REATTACH_POLICIES: frozenset[str] = frozenset({"detach", "error", "overwrite"})
