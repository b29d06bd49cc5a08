#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/taml_ast/nodes.py
"""AST node classes for TAML documents.

This module defines the three node kinds of a TAML syntax tree together with
the factory functions and mutation primitives that keep parent links and
child ordering consistent.

Node Hierarchy
--------------
All nodes inherit from the base Node class and carry a source span
(``start``/``end`` offsets into the original text) and a ``parent``
back-reference.

    - Document: the root container; exactly one per tree, never a child
    - Element: a styling tag (see :mod:`taml_ast.tags`) wrapping children
    - Text: a leaf holding literal string content

Ownership
---------
A container exclusively owns its ``children`` list. ``parent`` is a
non-owning back-reference that always names the container whose children
list currently holds the node, or is None for a detached node. Nodes compare
and hash by identity, so ``list.index``, ``in`` and dict lookups never
confuse two structurally equal nodes; use :func:`nodes_equal` for structural
comparison.

Examples
--------
    >>> from taml_ast.nodes import create_document, create_element, create_text
    >>> doc = create_document([
    ...     create_element("red", [create_text("Hello "), create_element("bold", [create_text("World")])]),
    ... ])
    >>> doc.children[0].parent is doc
    True

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, Optional, TypeGuard, Union

from taml_ast.constants import NodeType
from taml_ast.exceptions import ReattachError, StructuralError
from taml_ast.options import TreeOptions, resolve_options

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    """Human-oriented location of a node in its source text.

    Parameters
    ----------
    start : int
        Start offset in source text (0-based)
    end : int
        End offset in source text (0-based, exclusive)
    line : int
        Line number of ``start`` (1-based)
    column : int
        Column number of ``start`` (1-based)

    """

    start: int
    end: int
    line: int
    column: int


class Node(ABC):
    """Base class for all TAML AST nodes.

    Attributes
    ----------
    node_type : {"document", "element", "text"}
        Kind discriminator, fixed per subclass
    start : int
        Start offset in source text
    end : int
        End offset in source text
    parent : Document, Element or None
        Back-reference to the owning container

    """

    node_type: ClassVar[NodeType]
    start: int
    end: int
    parent: Optional[ParentNode]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Dispatch this node to the matching ``visit_*`` method of a transformer.

        Parameters
        ----------
        visitor : Any
            An object with ``visit_document``/``visit_element``/``visit_text``

        Returns
        -------
        Any
            Result of the dispatched method

        Raises
        ------
        DispatchError
            If the visitor has no method for this node kind

        """
        pass


@dataclass(eq=False)
class Document(Node):
    """Root document node containing all top-level nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level nodes; each is attached to the document on construction
    start : int, default = 0
        Start offset in source text
    end : int, default = 0
        End offset in source text

    """

    node_type: ClassVar[NodeType] = "document"

    children: list[Node] = field(default_factory=list)
    start: int = 0
    end: int = 0
    parent: Optional[ParentNode] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        _attach_initial_children(self, self.children, None)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        from taml_ast.visitors import transform

        return transform(self, visitor)


@dataclass(eq=False)
class Element(Node):
    """Element node representing a TAML tag with children.

    Parameters
    ----------
    tag_name : str
        Tag identifier; expected to be a member of the tag registry but not
        checked here
    children : list of Node, default = empty list
        Child nodes; each is attached to the element on construction
    start : int, default = 0
        Start offset in source text
    end : int, default = 0
        End offset in source text

    """

    node_type: ClassVar[NodeType] = "element"

    tag_name: str
    children: list[Node] = field(default_factory=list)
    start: int = 0
    end: int = 0
    parent: Optional[ParentNode] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        _attach_initial_children(self, self.children, None)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_element``."""
        from taml_ast.visitors import transform

        return transform(self, visitor)


@dataclass(eq=False)
class Text(Node):
    """Text node containing plain text content.

    Parameters
    ----------
    content : str
        Literal text
    start : int, default = 0
        Start offset in source text
    end : int or None, default = None
        End offset in source text; defaults to ``start + len(content)``

    """

    node_type: ClassVar[NodeType] = "text"

    content: str
    start: int = 0
    end: Optional[int] = None  # type: ignore[assignment]
    parent: Optional[ParentNode] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.end is None:
            self.end = self.start + len(self.content)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        from taml_ast.visitors import transform

        return transform(self, visitor)


ParentNode = Union[Document, Element]


# ============================================================================
# Type guards
# ============================================================================


def is_document_node(node: Any) -> TypeGuard[Document]:
    """Check if a node is a Document."""
    return isinstance(node, Document)


def is_element_node(node: Any) -> TypeGuard[Element]:
    """Check if a node is an Element."""
    return isinstance(node, Element)


def is_text_node(node: Any) -> TypeGuard[Text]:
    """Check if a node is a Text."""
    return isinstance(node, Text)


def is_container_node(node: Any) -> TypeGuard[ParentNode]:
    """Check if a node can hold children (Document or Element)."""
    return isinstance(node, (Document, Element))


def get_node_children(node: Node) -> list[Node]:
    """Get the children of a node.

    For containers this is the live children list, not a copy; for Text it
    is a fresh empty list.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        Children in order

    """
    if isinstance(node, (Document, Element)):
        return node.children
    return []


# ============================================================================
# Factories
# ============================================================================


def create_document(
    children: Optional[Iterable[Node]] = None,
    start: int = 0,
    end: int = 0,
    *,
    options: TreeOptions | None = None,
) -> Document:
    """Create a document node with the given children attached.

    Parameters
    ----------
    children : iterable of Node, optional
        Initial top-level nodes, attached in order
    start, end : int, default = 0
        Source span
    options : TreeOptions, optional
        Controls how already-attached children are handled

    Returns
    -------
    Document
        The new, parentless document

    """
    document = Document(start=start, end=end)
    _attach_initial_children(document, list(children or ()), options)
    return document


def create_element(
    tag_name: str,
    children: Optional[Iterable[Node]] = None,
    start: int = 0,
    end: int = 0,
    *,
    options: TreeOptions | None = None,
) -> Element:
    """Create an element node with the given children attached.

    The tag is not validated against the registry; use
    :func:`taml_ast.tags.is_valid_tag` when that matters.

    Parameters
    ----------
    tag_name : str
        Tag identifier
    children : iterable of Node, optional
        Initial children, attached in order
    start, end : int, default = 0
        Source span
    options : TreeOptions, optional
        Controls how already-attached children are handled

    Returns
    -------
    Element
        The new, detached element

    """
    element = Element(tag_name=tag_name, start=start, end=end)
    _attach_initial_children(element, list(children or ()), options)
    return element


def create_text(content: str, start: int = 0, end: Optional[int] = None) -> Text:
    """Create a text node.

    Parameters
    ----------
    content : str
        Literal text
    start : int, default = 0
        Start offset in source text
    end : int, optional
        End offset in source text. Defaults to ``start + len(content)``, so
        ``create_text("abc", 5).end`` is 8. Older TAML tree builders set the
        default end to ``len(content)`` regardless of ``start`` (3 here);
        parsers that relied on that should pass ``end`` explicitly.

    Returns
    -------
    Text
        The new, detached text node

    """
    return Text(content=content, start=start, end=end)


# ============================================================================
# Mutation primitives
# ============================================================================


def _index_of(children: list[Node], target: Node) -> Optional[int]:
    for index, child in enumerate(children):
        if child is target:
            return index
    return None


def _prepare_attach(parent: ParentNode, child: Node, options: TreeOptions) -> None:
    """Validate an attachment and resolve any existing parent of ``child``."""
    if isinstance(child, Document):
        raise StructuralError("Document nodes cannot be attached as children", node=child)

    ancestor: Optional[Node] = parent
    while ancestor is not None:
        if ancestor is child:
            raise StructuralError(
                f"Cannot attach {child.node_type} node beneath itself", node=child
            )
        ancestor = ancestor.parent

    current = child.parent
    if current is None:
        return

    policy = options.reattach_policy
    if policy == "error":
        raise ReattachError(child, current)
    if policy == "detach":
        logger.debug("Detaching %s node from its %s parent before reattaching", child.node_type, current.node_type)
        remove_child(child)
    else:
        logger.warning(
            "Overwriting parent of %s node that is still listed in another %s; tree invariants no longer hold",
            child.node_type,
            current.node_type,
        )


def _attach_initial_children(parent: ParentNode, children: list[Node], options: TreeOptions | None) -> None:
    # children may be another container's live list, which detaching mutates
    pending = list(children)
    parent.children = []
    for child in pending:
        append_child(parent, child, options=options)


def append_child(parent: ParentNode, child: Node, *, options: TreeOptions | None = None) -> None:
    """Attach ``child`` at the end of ``parent``'s children.

    Parameters
    ----------
    parent : Document or Element
        Container receiving the child
    child : Node
        Node to attach; its back-reference is set to ``parent``
    options : TreeOptions, optional
        ``reattach_policy`` decides what happens when ``child`` already has
        a parent (default: it is detached from that parent first)

    Raises
    ------
    StructuralError
        If ``child`` is a Document or an ancestor of ``parent``
    ReattachError
        If ``child`` is attached and the policy is ``"error"``

    """
    _prepare_attach(parent, child, resolve_options(options))
    child.parent = parent
    parent.children.append(child)


def insert_child(parent: ParentNode, index: int, child: Node, *, options: TreeOptions | None = None) -> None:
    """Attach ``child`` at ``index`` in ``parent``'s children.

    ``index`` follows ``list.insert`` semantics (negative and out-of-range
    values are clamped). When the policy detaches ``child`` from this same
    parent first, the index applies to the list after removal.
    """
    _prepare_attach(parent, child, resolve_options(options))
    child.parent = parent
    parent.children.insert(index, child)


def remove_child(child: Node) -> None:
    """Detach ``child`` from its parent.

    Does nothing when ``child`` has no parent or is not actually listed in
    its parent's children. Otherwise removes the first identity match and
    clears the back-reference.
    """
    parent = child.parent
    if parent is None or not isinstance(parent, (Document, Element)):
        return

    index = _index_of(parent.children, child)
    if index is None:
        return

    del parent.children[index]
    child.parent = None


def replace_child(
    parent: ParentNode,
    old_child: Node,
    new_child: Node,
    *,
    options: TreeOptions | None = None,
) -> None:
    """Substitute ``new_child`` for ``old_child`` at the same position.

    Does nothing when ``old_child`` is not in ``parent``'s children. The old
    child is detached; the new child is attached under the reattach policy.
    """
    if _index_of(parent.children, old_child) is None or new_child is old_child:
        return

    _prepare_attach(parent, new_child, resolve_options(options))

    # detaching new_child from this same parent may have shifted old_child
    index = _index_of(parent.children, old_child)
    if index is None:
        return

    old_child.parent = None
    new_child.parent = parent
    parent.children[index] = new_child


def clone_node(node: Node) -> Node:
    """Create a deep, identity-distinct copy of a node.

    The clone has no parent; its descendants are parented to the clone.

    Examples
    --------
    >>> cloned = clone_node(element)
    >>> cloned is element, nodes_equal(cloned, element)
    (False, True)

    """
    root = _copy_without_children(node)
    pending: list[tuple[Node, Node]] = [(node, root)]
    while pending:
        source, target = pending.pop()
        for child in get_node_children(source):
            child_copy = _copy_without_children(child)
            # fresh copies cannot already be attached or form a cycle
            child_copy.parent = target  # type: ignore[assignment]
            target.children.append(child_copy)  # type: ignore[attr-defined]
            pending.append((child, child_copy))
    return root


def _copy_without_children(node: Node) -> Node:
    if isinstance(node, Text):
        return Text(content=node.content, start=node.start, end=node.end)
    if isinstance(node, Element):
        return Element(tag_name=node.tag_name, start=node.start, end=node.end)
    if isinstance(node, Document):
        return Document(start=node.start, end=node.end)
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def nodes_equal(a: Node, b: Node) -> bool:
    """Compare two subtrees structurally.

    Kind, span, tag name, text content and children (recursively, in order)
    must match. Identity and parents are ignored.
    """
    pending: list[tuple[Node, Node]] = [(a, b)]
    while pending:
        x, y = pending.pop()
        if type(x) is not type(y) or x.start != y.start or x.end != y.end:
            return False
        if isinstance(x, Text) and x.content != y.content:  # type: ignore[attr-defined]
            return False
        if isinstance(x, Element) and x.tag_name != y.tag_name:  # type: ignore[attr-defined]
            return False

        x_children = get_node_children(x)
        y_children = get_node_children(y)
        if len(x_children) != len(y_children):
            return False
        pending.extend(zip(x_children, y_children))
    return True


# ============================================================================
# Ancestry
# ============================================================================


def get_root(node: Node) -> Document:
    """Get the root document of the tree containing ``node``.

    Raises
    ------
    StructuralError
        If the topmost node reached is not a Document (a detached subtree)

    """
    current = node
    while current.parent is not None:
        current = current.parent

    if not isinstance(current, Document):
        raise StructuralError("Root node is not a document node", node=current)

    return current


def get_ancestors(node: Node) -> list[ParentNode]:
    """Get all ancestors of a node, from its parent up to the root."""
    ancestors: list[ParentNode] = []
    current = node.parent
    while current is not None:
        ancestors.append(current)
        current = current.parent
    return ancestors


def get_depth(node: Node) -> int:
    """Get the distance from ``node`` to its root (root = 0)."""
    depth = 0
    current = node.parent
    while current is not None:
        depth += 1
        current = current.parent
    return depth


def get_position(node: Node, source: str) -> Position:
    """Resolve a node's start offset into a line and column of ``source``.

    Offsets are clamped to the source length, since spans are not validated
    against the text they came from.

    Parameters
    ----------
    node : Node
        Node whose span to resolve
    source : str
        Text the tree was parsed from

    Returns
    -------
    Position
        Span plus 1-based line and column of ``node.start``

    """
    offset = max(0, min(node.start, len(source)))
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return Position(start=node.start, end=node.end, line=line, column=column)


__all__ = [
    "Document",
    "Element",
    "Node",
    "ParentNode",
    "Position",
    "Text",
    "append_child",
    "clone_node",
    "create_document",
    "create_element",
    "create_text",
    "get_ancestors",
    "get_depth",
    "get_node_children",
    "get_position",
    "get_root",
    "insert_child",
    "is_container_node",
    "is_document_node",
    "is_element_node",
    "is_text_node",
    "nodes_equal",
    "remove_child",
    "replace_child",
]
