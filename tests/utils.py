"""Test utilities for the taml_ast test suite.

Tree builders and Hypothesis strategies shared across unit, property and
integration tests.
"""

from __future__ import annotations

from typing import Any, Union

from hypothesis import strategies as st

from taml_ast import (
    VALID_TAGS,
    Document,
    Element,
    Node,
    create_document,
    create_element,
    create_text,
)

SORTED_TAGS = sorted(VALID_TAGS)

# ("text", content) | ("element", tag, [shape, ...])
NodeShape = Union[tuple[str, str], tuple[str, str, list[Any]]]


def build_hello_world() -> tuple[Document, dict[str, Node]]:
    """Build ``<red>Hello <bold>World</bold>!</red>`` inside a document.

    Returns
    -------
    tuple
        The document and a dict of its named parts: ``red``, ``hello``,
        ``bold``, ``world`` and ``bang``.

    """
    hello = create_text("Hello ", 5, 11)
    world = create_text("World", 17, 22)
    bold = create_element("bold", [world], 11, 29)
    bang = create_text("!", 29, 30)
    red = create_element("red", [hello, bold, bang], 0, 36)
    doc = create_document([red], 0, 36)
    return doc, {"red": red, "hello": hello, "bold": bold, "world": world, "bang": bang}


def build_from_shape(shape: NodeShape) -> Node:
    """Build a node from a nested tuple shape."""
    if shape[0] == "text":
        return create_text(shape[1])
    return create_element(shape[1], [build_from_shape(child) for child in shape[2]])


def preorder_reference(node: Node) -> list[Node]:
    """Independent pre-order flattening used as an oracle."""
    result = [node]
    if isinstance(node, (Document, Element)):
        for child in node.children:
            result.extend(preorder_reference(child))
    return result


def all_nodes_by_kind(root: Node, kind: type) -> list[Node]:
    return [node for node in preorder_reference(root) if isinstance(node, kind)]


text_shapes = st.builds(lambda content: ("text", content), st.text(max_size=6))

node_shapes = st.recursive(
    text_shapes,
    lambda children: st.builds(
        lambda tag, kids: ("element", tag, kids),
        st.sampled_from(SORTED_TAGS),
        st.lists(children, max_size=4),
    ),
    max_leaves=25,
)


@st.composite
def documents(draw: Any) -> Document:
    """Hypothesis strategy producing fully linked documents."""
    shapes = draw(st.lists(node_shapes, max_size=5))
    return create_document([build_from_shape(shape) for shape in shapes])


__all__ = [
    "SORTED_TAGS",
    "all_nodes_by_kind",
    "build_from_shape",
    "build_hello_world",
    "documents",
    "node_shapes",
    "preorder_reference",
]
