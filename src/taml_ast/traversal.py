#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/taml_ast/traversal.py
"""Tree traversal and query utilities for TAML ASTs.

Every function here visits nodes depth-first in pre-order: a node before its
children, children in list order. Query results always follow that order.

Mutation hazard
---------------
Traversals read each container's children list live, at the moment they
descend into it. Removing or reparenting nodes inside a subtree that is
still being walked gives an unspecified visiting order. Pass
``TreeOptions(snapshot_children=True)`` to copy each children list before
descending when callbacks need to mutate the tree.

Examples
--------
    >>> from taml_ast.traversal import get_all_text, count_nodes
    >>> get_all_text(doc)
    'Hello World!'
    >>> count_nodes(doc)
    NodeCounts(document=1, element=2, text=3)

"""

from __future__ import annotations

import inspect
from dataclasses import asdict, dataclass
from typing import Any, Awaitable, Callable, Iterator, Optional, Union

from taml_ast.nodes import (
    Document,
    Element,
    Node,
    Text,
    get_node_children,
)
from taml_ast.options import TreeOptions, resolve_options

NodePredicate = Callable[[Node], bool]
AsyncNodeCallback = Callable[[Node], Union[Awaitable[Any], Any]]


@dataclass
class NodeCounts:
    """Per-kind node totals for a subtree."""

    document: int = 0
    element: int = 0
    text: int = 0

    @property
    def total(self) -> int:
        """Total number of nodes counted."""
        return self.document + self.element + self.text

    def add(self, node: Node) -> None:
        """Count one node under its kind."""
        setattr(self, node.node_type, getattr(self, node.node_type) + 1)

    def to_dict(self) -> dict[str, int]:
        """Return the counts as a plain dict keyed by node kind."""
        return asdict(self)


def _children_for_descent(node: Node, options: TreeOptions) -> list[Node]:
    children = get_node_children(node)
    return list(children) if options.snapshot_children else children


def iter_nodes(node: Node, *, options: TreeOptions | None = None) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in pre-order.

    A container's children are read after the container itself has been
    yielded, so work done by the consumer on a node is visible when its
    children are reached. Stopping iteration early stops the traversal.

    Parameters
    ----------
    node : Node
        Subtree root
    options : TreeOptions, optional
        ``snapshot_children`` copies children lists before descending

    Yields
    ------
    Node
        Nodes in pre-order

    """
    resolved = resolve_options(options)
    yield node
    # one open child iterator per container on the current path
    stack: list[Iterator[Node]] = [iter(_children_for_descent(node, resolved))]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue
        yield child
        stack.append(iter(_children_for_descent(child, resolved)))


def walk(node: Node, callback: Callable[[Node], Any], *, options: TreeOptions | None = None) -> None:
    """Call ``callback`` on every node of the subtree, depth-first pre-order.

    Parameters
    ----------
    node : Node
        Subtree root (included)
    callback : callable
        Called once per node; the return value is ignored
    options : TreeOptions, optional
        Traversal options

    """
    for current in iter_nodes(node, options=options):
        callback(current)


async def walk_async(node: Node, callback: AsyncNodeCallback, *, options: TreeOptions | None = None) -> None:
    """Asynchronously call ``callback`` on every node, in pre-order.

    Each callback result is awaited before the next node is visited, so the
    traversal is one sequential chain: node N+1 is never started before the
    callback for node N has completed. Plain functions are accepted too;
    non-awaitable results are ignored.

    Parameters
    ----------
    node : Node
        Subtree root (included)
    callback : callable
        Coroutine function (or plain function) taking a node
    options : TreeOptions, optional
        Traversal options

    """
    for current in iter_nodes(node, options=options):
        result = callback(current)
        if inspect.isawaitable(result):
            await result


def find_all(root: Node, predicate: NodePredicate) -> list[Node]:
    """Find all nodes matching ``predicate``, in traversal order."""
    return [node for node in iter_nodes(root) if predicate(node)]


def filter_nodes(root: Node, predicate: NodePredicate) -> list[Node]:
    """Alias for :func:`find_all`."""
    return find_all(root, predicate)


def find_first(root: Node, predicate: NodePredicate) -> Optional[Node]:
    """Find the first node matching ``predicate``, or None.

    The traversal stops at the first match; later nodes are never passed to
    the predicate.
    """
    for node in iter_nodes(root):
        if predicate(node):
            return node
    return None


def get_all_text(root: Node) -> str:
    """Concatenate the content of all Text nodes, without separators."""
    return "".join(node.content for node in iter_nodes(root) if isinstance(node, Text))


def get_elements_with_tag(root: Node, tag_name: str) -> list[Element]:
    """Get all elements whose tag is ``tag_name``."""
    return [node for node in iter_nodes(root) if isinstance(node, Element) and node.tag_name == tag_name]


def get_text_nodes(root: Node) -> list[Text]:
    """Get all Text nodes."""
    return [node for node in iter_nodes(root) if isinstance(node, Text)]


def get_element_nodes(root: Node) -> list[Element]:
    """Get all Element nodes."""
    return [node for node in iter_nodes(root) if isinstance(node, Element)]


def contains(ancestor: Node, descendant: Node) -> bool:
    """Check whether ``descendant`` is ``ancestor`` or lies beneath it.

    Containment is reflexive: every node contains itself.
    """
    return find_first(ancestor, lambda node: node is descendant) is not None


def get_common_ancestor(node1: Node, node2: Node) -> Optional[Node]:
    """Get the nearest node that is an ancestor-or-self of both nodes.

    Returns None for nodes of disconnected trees; callers must not assume
    every pair has a common ancestor.
    """
    chain1: set[Node] = set()
    current: Optional[Node] = node1
    while current is not None:
        chain1.add(current)
        current = current.parent

    current = node2
    while current is not None:
        if current in chain1:
            return current
        current = current.parent

    return None


def _parent_children(node: Node) -> Optional[list[Node]]:
    parent = node.parent
    if parent is None or not isinstance(parent, (Document, Element)):
        return None
    return parent.children


def _sibling_index(node: Node) -> tuple[Optional[list[Node]], int]:
    siblings = _parent_children(node)
    if siblings is None:
        return None, -1
    for index, child in enumerate(siblings):
        if child is node:
            return siblings, index
    return siblings, -1


def get_siblings(node: Node) -> list[Node]:
    """Get the other children of ``node``'s parent (empty for root or detached)."""
    siblings = _parent_children(node)
    if siblings is None:
        return []
    return [child for child in siblings if child is not node]


def get_previous_sibling(node: Node) -> Optional[Node]:
    """Get the sibling immediately before ``node``, if any."""
    siblings, index = _sibling_index(node)
    if siblings is None or index <= 0:
        return None
    return siblings[index - 1]


def get_next_sibling(node: Node) -> Optional[Node]:
    """Get the sibling immediately after ``node``, if any."""
    siblings, index = _sibling_index(node)
    if siblings is None or index < 0 or index >= len(siblings) - 1:
        return None
    return siblings[index + 1]


def is_empty(node: Node) -> bool:
    """Check whether a node carries no visible text.

    A Text node is empty when its content is empty or whitespace only. A
    container is empty when it has no children or all of its children are
    empty.
    """
    return all(current.content.strip() == "" for current in iter_nodes(node) if isinstance(current, Text))


def count_nodes(root: Node) -> NodeCounts:
    """Count the nodes of a subtree by kind."""
    counts = NodeCounts()
    for node in iter_nodes(root):
        counts.add(node)
    return counts


def _iter_with_depth(root: Node) -> Iterator[tuple[Node, int]]:
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        children = get_node_children(node)
        stack.extend((child, depth + 1) for child in reversed(children))


def get_max_depth(root: Node) -> int:
    """Get the longest distance from ``root`` down to a leaf (root = 0)."""
    return max(depth for _, depth in _iter_with_depth(root))


def flatten(root: Node) -> list[Node]:
    """Flatten the subtree into a pre-order list."""
    return list(iter_nodes(root))


def create_depth_map(root: Node) -> dict[Node, int]:
    """Map every node of the subtree to its depth relative to ``root``.

    Keys are the node objects themselves (nodes hash by identity).
    """
    return dict(_iter_with_depth(root))


__all__ = [
    "NodeCounts",
    "contains",
    "count_nodes",
    "create_depth_map",
    "filter_nodes",
    "find_all",
    "find_first",
    "flatten",
    "get_all_text",
    "get_common_ancestor",
    "get_element_nodes",
    "get_elements_with_tag",
    "get_max_depth",
    "get_next_sibling",
    "get_previous_sibling",
    "get_siblings",
    "get_text_nodes",
    "is_empty",
    "iter_nodes",
    "walk",
    "walk_async",
]
