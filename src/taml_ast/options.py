#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options controlling tree mutation and traversal.

Options are immutable. Derive a variant with ``create_updated``:

    >>> from taml_ast.options import DEFAULT_TREE_OPTIONS
    >>> strict = DEFAULT_TREE_OPTIONS.create_updated(reattach_policy="error")
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from taml_ast.constants import (
    DEFAULT_REATTACH_POLICY,
    DEFAULT_SNAPSHOT_CHILDREN,
    REATTACH_POLICIES,
    ReattachPolicy,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class TreeOptions(CloneFrozenMixin):
    """Options for mutation primitives and traversals.

    Parameters
    ----------
    reattach_policy : {"detach", "error", "overwrite"}, default "detach"
        What to do when a node that already has a parent is attached to a
        container. ``"detach"`` removes it from its previous owner first,
        ``"error"`` raises :class:`~taml_ast.exceptions.ReattachError`, and
        ``"overwrite"`` only rewrites the back-reference, leaving the node in
        both children lists.
    snapshot_children : bool, default False
        Copy each container's children before descending into them, so that
        traversals tolerate callbacks that mutate the tree. By default the
        children lists are read live.

    """

    reattach_policy: ReattachPolicy = field(
        default=DEFAULT_REATTACH_POLICY,
        metadata={
            "help": "Handling of nodes attached while they still have a parent: detach, error or overwrite",
            "choices": sorted(REATTACH_POLICIES),
        },
    )
    snapshot_children: bool = field(
        default=DEFAULT_SNAPSHOT_CHILDREN,
        metadata={"help": "Copy children lists before descending during traversal"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If ``reattach_policy`` is not a known policy.

        """
        if self.reattach_policy not in REATTACH_POLICIES:
            raise ValueError(
                f"reattach_policy must be one of {sorted(REATTACH_POLICIES)}, got {self.reattach_policy!r}"
            )


DEFAULT_TREE_OPTIONS = TreeOptions()


def resolve_options(options: TreeOptions | None) -> TreeOptions:
    """Return ``options`` or the defaults when None."""
    return DEFAULT_TREE_OPTIONS if options is None else options


__all__ = [
    "CloneFrozenMixin",
    "DEFAULT_TREE_OPTIONS",
    "TreeOptions",
    "resolve_options",
]
