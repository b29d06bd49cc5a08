#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/taml_ast/visitors.py
"""Visitor and transformer dispatch for TAML ASTs.

This module provides two dispatch styles over the three node kinds:

- Visitors walk a whole subtree. :func:`visit` calls ``enter_node``, then the
  kind-specific hook (``visit_document``, ``visit_element`` or
  ``visit_text``), then descends into the children, then calls
  ``exit_node``. Every hook is optional. :func:`visit_async` does the same
  with each hook awaited in turn.
- Transformers are one-shot. :func:`transform` calls exactly the hook that
  matches the node's kind and returns its result, without descending into
  children. A transformer that wants a bottom-up reduction calls
  :func:`transform` on the children itself. A missing hook is an error.

Hooks may be supplied as keyword callables or by subclassing:

    >>> from taml_ast.visitors import Visitor, visit
    >>> seen = []
    >>> visit(doc, Visitor(visit_text=lambda node: seen.append(node.content)))

    >>> class MarkupWriter(Transformer):
    ...     def visit_document(self, node):
    ...         return "".join(transform(child, self) for child in node.children)
    ...     def visit_element(self, node):
    ...         inner = "".join(transform(child, self) for child in node.children)
    ...         return f"<{node.tag_name}>{inner}</{node.tag_name}>"
    ...     def visit_text(self, node):
    ...         return node.content
    >>> transform(doc, MarkupWriter())
    '<red>Hello <bold>World</bold>!</red>'

"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from taml_ast.exceptions import DispatchError, StructuralError
from taml_ast.nodes import Document, Element, Node, Text, get_node_children
from taml_ast.options import TreeOptions, resolve_options
from taml_ast.tags import is_valid_tag
from taml_ast.traversal import NodeCounts

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Node kind -> name of its kind-specific hook
_KIND_HOOKS: dict[str, str] = {
    "document": "visit_document",
    "element": "visit_element",
    "text": "visit_text",
}

VISITOR_HOOKS: tuple[str, ...] = ("visit_document", "visit_element", "visit_text", "enter_node", "exit_node")
TRANSFORMER_HOOKS: tuple[str, ...] = ("visit_document", "visit_element", "visit_text")


class _HookSet:
    """Holds optional hooks given as keyword callables."""

    _hook_names: tuple[str, ...] = VISITOR_HOOKS

    def __init__(self, **hooks: Callable[..., Any]):
        """Attach keyword hooks as instance attributes.

        Raises
        ------
        TypeError
            If a keyword is not a known hook name or its value is not callable

        """
        for name, hook in hooks.items():
            if name not in self._hook_names:
                raise TypeError(
                    f"{type(self).__name__} got an unexpected hook {name!r}; expected one of {list(self._hook_names)}"
                )
            if not callable(hook):
                raise TypeError(f"Hook {name!r} must be callable, got {type(hook).__name__}")
            setattr(self, name, hook)


class Visitor(_HookSet):
    """Synchronous visitor with optional hooks.

    Hooks: ``visit_document(node)``, ``visit_element(node)``,
    ``visit_text(node)``, ``enter_node(node)`` and ``exit_node(node)``.
    Visitors act through side effects; hook return values are ignored.
    """


class AsyncVisitor(_HookSet):
    """Asynchronous visitor; same hooks as :class:`Visitor`, each awaited."""


class Transformer(_HookSet, Generic[T]):
    """One-shot transformer with ``visit_document``, ``visit_element`` and ``visit_text``.

    Each hook returns a value of type ``T``. A transformer should implement
    every kind it may be handed; :func:`transform` raises
    :class:`~taml_ast.exceptions.DispatchError` for missing kinds.
    """

    _hook_names = TRANSFORMER_HOOKS


def _get_hook(visitor: Any, name: Optional[str]) -> Optional[Callable[[Node], Any]]:
    if name is None:
        return None
    return getattr(visitor, name, None)


def _descend(node: Node, options: TreeOptions) -> Iterator[Node]:
    children = get_node_children(node)
    return iter(list(children) if options.snapshot_children else children)


def _iter_enter_exit(node: Node, options: TreeOptions) -> Iterator[tuple[bool, Node]]:
    """Yield ``(True, node)`` on entry and ``(False, node)`` on exit, depth-first.

    Children are read after the entry event has been handled, so hooks that
    add children to the node being entered see them visited.
    """
    yield True, node
    stack: list[tuple[Node, Iterator[Node]]] = [(node, _descend(node, options))]
    while stack:
        parent, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            yield False, parent
            continue
        yield True, child
        stack.append((child, _descend(child, options)))


def visit(node: Node, visitor: Any, *, options: TreeOptions | None = None) -> None:
    """Visit a node and its descendants with a visitor.

    Order per node: ``enter_node``, kind hook, the children's subtrees (in
    order), ``exit_node``. Missing hooks are skipped.

    Parameters
    ----------
    node : Node
        Subtree root
    visitor : Visitor or any object with hook methods
        The visitor
    options : TreeOptions, optional
        ``snapshot_children`` copies children before descending

    """
    for entering, current in _iter_enter_exit(node, resolve_options(options)):
        if entering:
            for name in ("enter_node", _KIND_HOOKS.get(current.node_type)):
                hook = _get_hook(visitor, name)
                if hook is not None:
                    hook(current)
        else:
            exit_hook = _get_hook(visitor, "exit_node")
            if exit_hook is not None:
                exit_hook(current)


async def _call_async(hook: Optional[Callable[[Node], Any]], node: Node) -> None:
    if hook is None:
        return
    result = hook(node)
    if inspect.isawaitable(result):
        await result


async def visit_async(node: Node, visitor: Any, *, options: TreeOptions | None = None) -> None:
    """Visit a node and its descendants, awaiting every hook.

    Same order as :func:`visit`. The traversal is strictly sequential: no
    hook starts before the previous one has completed, and siblings are
    never visited concurrently.
    """
    for entering, current in _iter_enter_exit(node, resolve_options(options)):
        if entering:
            await _call_async(_get_hook(visitor, "enter_node"), current)
            await _call_async(_get_hook(visitor, _KIND_HOOKS.get(current.node_type)), current)
        else:
            await _call_async(_get_hook(visitor, "exit_node"), current)


def transform(node: Node, transformer: Any) -> Any:
    """Apply the transformer hook matching the node's kind.

    Does not recurse; the hook decides whether and how to transform the
    children.

    Parameters
    ----------
    node : Node
        Node to transform
    transformer : Transformer or any object with ``visit_*`` methods
        The transformer

    Returns
    -------
    Any
        Whatever the hook returns

    Raises
    ------
    DispatchError
        If the transformer has no hook for the node's kind

    """
    hook = _get_hook(transformer, _KIND_HOOKS.get(node.node_type))
    if hook is None:
        raise DispatchError(node.node_type)
    return hook(node)


# ============================================================================
# Ready-made visitors
# ============================================================================


class TypedVisitor(Visitor):
    """Visitor calling ``callback`` only for nodes that pass ``node_test``.

    Parameters
    ----------
    node_test : callable
        Predicate, typically a type guard such as ``is_text_node``
    callback : callable
        Called with each matching node, in pre-order

    """

    def __init__(self, node_test: Callable[[Node], bool], callback: Callable[[Node], Any]):
        """Initialize with the filter predicate and callback."""
        super().__init__()
        self.node_test = node_test
        self.callback = callback

    def enter_node(self, node: Node) -> None:
        """Forward matching nodes to the callback."""
        if self.node_test(node):
            self.callback(node)


class CollectorVisitor(Visitor):
    """Visitor that collects nodes passing ``node_test`` into ``nodes``."""

    def __init__(self, node_test: Callable[[Node], bool]):
        """Initialize with the filter predicate and an empty result list."""
        super().__init__()
        self.node_test = node_test
        self.nodes: list[Node] = []

    def enter_node(self, node: Node) -> None:
        """Collect the node if it matches."""
        if self.node_test(node):
            self.nodes.append(node)


class CounterVisitor(Visitor):
    """Visitor that counts nodes per kind into ``counts``."""

    def __init__(self) -> None:
        """Initialize with zeroed counts."""
        super().__init__()
        self.counts = NodeCounts()

    def visit_document(self, node: Document) -> None:
        self.counts.document += 1

    def visit_element(self, node: Element) -> None:
        self.counts.element += 1

    def visit_text(self, node: Text) -> None:
        self.counts.text += 1


def create_typed_visitor(node_test: Callable[[Node], bool], callback: Callable[[Node], Any]) -> TypedVisitor:
    """Create a visitor that only forwards nodes passing ``node_test``."""
    return TypedVisitor(node_test, callback)


def create_collector_visitor(node_test: Callable[[Node], bool]) -> CollectorVisitor:
    """Create a visitor that collects matching nodes into its ``nodes`` list."""
    return CollectorVisitor(node_test)


def create_counter_visitor() -> CounterVisitor:
    """Create a visitor that counts nodes per kind into its ``counts`` record."""
    return CounterVisitor()


# ============================================================================
# Validation
# ============================================================================


class ValidationVisitor(Visitor):
    """Visitor that checks a tree against the TAML structural invariants.

    Checks performed:
    - Element tags are members of the tag registry
    - Every child's ``parent`` is the container listing it
    - No node is listed more than once in the tree
    - Document nodes only appear as the root

    Parameters
    ----------
    strict : bool, default = True
        Raise :class:`~taml_ast.exceptions.StructuralError` on the first
        problem. When False, problems are logged and accumulated in
        ``errors``.

    Examples
    --------
    >>> validator = ValidationVisitor(strict=False)
    >>> visit(doc, validator)
    >>> validator.errors
    []

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        super().__init__()
        self.strict = strict
        self.errors: list[str] = []
        self._seen: set[Node] = set()
        self._root: Optional[Node] = None

    def _add_error(self, message: str, node: Node) -> None:
        self.errors.append(message)
        if self.strict:
            raise StructuralError(message, node=node)
        logger.warning("Tree validation: %s", message)

    def enter_node(self, node: Node) -> None:
        if self._root is None:
            self._root = node
        elif isinstance(node, Document):
            self._add_error("Document node nested inside another node", node)

        if node in self._seen:
            self._add_error(f"{node.node_type} node appears more than once in the tree", node)
        self._seen.add(node)

        for index, child in enumerate(get_node_children(node)):
            if child.parent is not node:
                self._add_error(
                    f"Child {index} ({child.node_type}) of {node.node_type} node has a mismatched parent reference",
                    child,
                )

    def visit_element(self, node: Element) -> None:
        if not is_valid_tag(node.tag_name):
            self._add_error(f"Invalid tag name: {node.tag_name!r}", node)


def validate_tree(root: Node, strict: bool = True) -> list[str]:
    """Validate the subtree under ``root``.

    Parameters
    ----------
    root : Node
        Subtree root, normally a Document
    strict : bool, default = True
        Raise on the first problem instead of collecting

    Returns
    -------
    list of str
        Problems found (always empty in strict mode, which raises instead)

    Raises
    ------
    StructuralError
        In strict mode, on the first problem found

    """
    validator = ValidationVisitor(strict=strict)
    visit(root, validator)
    return validator.errors


__all__ = [
    "AsyncVisitor",
    "CollectorVisitor",
    "CounterVisitor",
    "Transformer",
    "TRANSFORMER_HOOKS",
    "TypedVisitor",
    "ValidationVisitor",
    "Visitor",
    "VISITOR_HOOKS",
    "create_collector_visitor",
    "create_counter_visitor",
    "create_typed_visitor",
    "transform",
    "validate_tree",
    "visit",
    "visit_async",
]
