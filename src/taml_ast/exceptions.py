#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the taml_ast library.

Most tree operations are total: lookups that fail to find their target
return None or do nothing. The exceptions below are reserved for genuine
faults in the tree or in the caller's dispatch table.

Exception Hierarchy
-------------------
- TamlAstError (base exception)

  - StructuralError (tree invariants violated, e.g. root is not a Document)
    - ReattachError (attaching a node that already has a parent)

  - DispatchError (transformer has no callback for the node's kind)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from taml_ast.nodes import Node


class TamlAstError(Exception):
    """Base exception class for all taml_ast-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class StructuralError(TamlAstError):
    """Exception raised when a tree violates its structural invariants.

    Raised when root resolution ends on a node that is not a Document, when
    an attachment would nest a Document or create a cycle, and by strict
    tree validation.

    Parameters
    ----------
    message : str
        Description of the structural problem
    node : Node, optional
        The node at which the problem was detected
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    node : Node or None
        The offending node

    """

    def __init__(
        self,
        message: str,
        node: Optional["Node"] = None,
        original_error: Exception | None = None,
    ):
        """Initialize the structural error with the offending node."""
        super().__init__(message, original_error=original_error)
        self.node = node


class ReattachError(StructuralError):
    """Exception raised when attaching a node that already has a parent.

    Only raised when the active ``TreeOptions.reattach_policy`` is ``"error"``.

    Attributes
    ----------
    current_parent : Node or None
        The container that currently owns the node

    """

    def __init__(self, node: "Node", current_parent: Optional["Node"] = None, message: str | None = None):
        """Initialize the reattach error with the node and its current owner."""
        if message is None:
            owner = current_parent.node_type if current_parent is not None else "unknown"
            message = (
                f"{node.node_type} node is already attached to a {owner} node; "
                f"remove it first or use reattach_policy='detach'"
            )
        super().__init__(message, node=node)
        self.current_parent = current_parent


class DispatchError(TamlAstError):
    """Exception raised when a transformer has no callback for a node kind.

    Parameters
    ----------
    node_type : str
        Kind of the node that could not be dispatched
    message : str, optional
        Custom error message
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    node_type : str
        The unhandled node kind

    """

    def __init__(self, node_type: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the dispatch error with the unhandled node kind."""
        if message is None:
            message = f"No transformer method found for node type: {node_type}"
        super().__init__(message, original_error=original_error)
        self.node_type = node_type


__all__ = [
    "DispatchError",
    "ReattachError",
    "StructuralError",
    "TamlAstError",
]
