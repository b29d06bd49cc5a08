"""taml_ast - Abstract Syntax Tree for TAML (Terminal ANSI Markup Language).

TAML marks up terminal text with color and style tags, for example
``<red>Hello <bold>World</bold>!</red>``. This package is the syntax tree
that parsers produce and renderers consume. It does not parse or render
itself.

The package consists of several components:

- tags: the closed registry of 37 tags and category predicates
- nodes: Document/Element/Text nodes, factories and mutation primitives
- traversal: pre-order walkers (sync and async) and tree queries
- visitors: visitor and transformer dispatch plus ready-made visitors
- options: immutable options for mutation and traversal behavior

Examples
--------
Build a tree and query it:

    >>> from taml_ast import create_document, create_element, create_text, get_all_text
    >>> doc = create_document([
    ...     create_element("red", [
    ...         create_text("Hello "),
    ...         create_element("bold", [create_text("World")]),
    ...         create_text("!"),
    ...     ])
    ... ])
    >>> get_all_text(doc)
    'Hello World!'

See Also
--------
taml_ast.visitors : visitor and transformer dispatch
taml_ast.traversal : traversal and query utilities

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "taml_ast requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from taml_ast.constants import (
    BACKGROUND_COLORS,
    BRIGHT_COLORS,
    STANDARD_COLORS,
    TEXT_STYLES,
    NodeType,
    ReattachPolicy,
    TagCategory,
    TamlTag,
)
from taml_ast.exceptions import DispatchError, ReattachError, StructuralError, TamlAstError
from taml_ast.nodes import (
    Document,
    Element,
    Node,
    ParentNode,
    Position,
    Text,
    append_child,
    clone_node,
    create_document,
    create_element,
    create_text,
    get_ancestors,
    get_depth,
    get_node_children,
    get_position,
    get_root,
    insert_child,
    is_container_node,
    is_document_node,
    is_element_node,
    is_text_node,
    nodes_equal,
    remove_child,
    replace_child,
)
from taml_ast.options import DEFAULT_TREE_OPTIONS, TreeOptions
from taml_ast.tags import (
    VALID_TAGS,
    get_tag_category,
    is_background_color,
    is_bright_color,
    is_standard_color,
    is_text_style,
    is_valid_tag,
)
from taml_ast.traversal import (
    NodeCounts,
    contains,
    count_nodes,
    create_depth_map,
    filter_nodes,
    find_all,
    find_first,
    flatten,
    get_all_text,
    get_common_ancestor,
    get_element_nodes,
    get_elements_with_tag,
    get_max_depth,
    get_next_sibling,
    get_previous_sibling,
    get_siblings,
    get_text_nodes,
    is_empty,
    iter_nodes,
    walk,
    walk_async,
)
from taml_ast.visitors import (
    AsyncVisitor,
    CollectorVisitor,
    CounterVisitor,
    Transformer,
    TypedVisitor,
    ValidationVisitor,
    Visitor,
    create_collector_visitor,
    create_counter_visitor,
    create_typed_visitor,
    transform,
    validate_tree,
    visit,
    visit_async,
)

__all__ = [
    "__version__",
    # Tag registry
    "BACKGROUND_COLORS",
    "BRIGHT_COLORS",
    "STANDARD_COLORS",
    "TEXT_STYLES",
    "VALID_TAGS",
    "NodeType",
    "ReattachPolicy",
    "TagCategory",
    "TamlTag",
    "get_tag_category",
    "is_background_color",
    "is_bright_color",
    "is_standard_color",
    "is_text_style",
    "is_valid_tag",
    # Exceptions
    "DispatchError",
    "ReattachError",
    "StructuralError",
    "TamlAstError",
    # Options
    "DEFAULT_TREE_OPTIONS",
    "TreeOptions",
    # Nodes
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
    # Traversal
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
    # Visitors
    "AsyncVisitor",
    "CollectorVisitor",
    "CounterVisitor",
    "Transformer",
    "TypedVisitor",
    "ValidationVisitor",
    "Visitor",
    "create_collector_visitor",
    "create_counter_visitor",
    "create_typed_visitor",
    "transform",
    "validate_tree",
    "visit",
    "visit_async",
]
