#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for traversal and query utilities."""

import asyncio

import pytest

from taml_ast import (
    AsyncVisitor,
    Element,
    NodeCounts,
    Text,
    TreeOptions,
    Visitor,
    append_child,
    clone_node,
    contains,
    count_nodes,
    create_counter_visitor,
    create_depth_map,
    create_document,
    create_element,
    create_text,
    filter_nodes,
    find_all,
    find_first,
    flatten,
    get_all_text,
    get_common_ancestor,
    get_depth,
    get_element_nodes,
    get_elements_with_tag,
    get_max_depth,
    get_next_sibling,
    get_previous_sibling,
    get_siblings,
    get_text_nodes,
    is_empty,
    is_text_node,
    iter_nodes,
    nodes_equal,
    remove_child,
    validate_tree,
    visit,
    visit_async,
    walk,
    walk_async,
)


def _label(node):
    if isinstance(node, Text):
        return f"text:{node.content}"
    if isinstance(node, Element):
        return f"element:{node.tag_name}"
    return node.node_type


@pytest.mark.unit
class TestWalk:
    """Tests for walk and iter_nodes."""

    def test_preorder(self, hello_doc):
        visited = []
        walk(hello_doc, lambda node: visited.append(_label(node)))
        assert visited == [
            "document",
            "element:red",
            "text:Hello ",
            "element:bold",
            "text:World",
            "text:!",
        ]

    def test_walk_leaf(self):
        text = create_text("solo")
        visited = []
        walk(text, visited.append)
        assert visited == [text]

    def test_iter_nodes_is_lazy(self, hello_doc):
        iterator = iter_nodes(hello_doc)
        assert next(iterator) is hello_doc
        assert _label(next(iterator)) == "element:red"

    def test_children_read_live_after_callback(self):
        """Test that children appended by the callback are visited."""
        doc = create_document([create_element("red")])

        def grow(node):
            if isinstance(node, Element) and not node.children:
                append_child(node, create_text("grown"))

        visited = []
        walk(doc, lambda node: (grow(node), visited.append(_label(node))))
        assert visited == ["document", "element:red", "text:grown"]

    def test_snapshot_children_tolerates_removal(self):
        a, b, c = create_text("a"), create_text("b"), create_text("c")
        doc = create_document([a, b, c])

        visited = []

        def remove_self(node):
            visited.append(_label(node))
            if isinstance(node, Text):
                remove_child(node)

        walk(doc, remove_self, options=TreeOptions(snapshot_children=True))

        assert visited == ["document", "text:a", "text:b", "text:c"]
        assert doc.children == []


@pytest.mark.unit
class TestWalkAsync:
    """Tests for walk_async."""

    def test_same_order_as_walk(self, hello_doc):
        sync_order = []
        walk(hello_doc, sync_order.append)

        async_order = []

        async def record(node):
            await asyncio.sleep(0)
            async_order.append(node)

        asyncio.run(walk_async(hello_doc, record))
        assert async_order == sync_order

    def test_callbacks_never_overlap(self, hello_doc):
        """Test that each callback completes before the next one starts."""
        events = []
        active = []

        async def record(node):
            assert not active
            active.append(node)
            events.append(("start", _label(node)))
            await asyncio.sleep(0.001)
            events.append(("end", _label(node)))
            active.remove(node)

        asyncio.run(walk_async(hello_doc, record))

        assert len(events) == 12
        for index in range(0, len(events), 2):
            assert events[index][0] == "start"
            assert events[index + 1] == ("end", events[index][1])

    def test_accepts_plain_callback(self, hello_doc):
        seen = []
        asyncio.run(walk_async(hello_doc, seen.append))
        assert len(seen) == 6


@pytest.mark.unit
class TestFind:
    """Tests for find_all, filter_nodes and find_first."""

    def test_find_all_in_order(self, hello_doc):
        texts = find_all(hello_doc, is_text_node)
        assert [t.content for t in texts] == ["Hello ", "World", "!"]

    def test_find_all_no_match(self, hello_doc):
        assert find_all(hello_doc, lambda node: False) == []

    def test_filter_nodes_alias(self, hello_doc):
        assert filter_nodes(hello_doc, is_text_node) == find_all(hello_doc, is_text_node)

    def test_find_first(self, hello_tree):
        doc, parts = hello_tree
        assert find_first(doc, is_text_node) is parts["hello"]

    def test_find_first_none(self, hello_doc):
        assert find_first(hello_doc, lambda node: False) is None

    def test_find_first_short_circuits(self, hello_doc):
        calls = []

        def predicate(node):
            calls.append(node)
            return isinstance(node, Element)

        find_first(hello_doc, predicate)
        assert len(calls) == 2


@pytest.mark.unit
class TestTextQueries:
    """Tests for text and element extraction."""

    def test_get_all_text(self, hello_doc):
        assert get_all_text(hello_doc) == "Hello World!"

    def test_get_all_text_no_separator(self):
        doc = create_document([create_text("a"), create_element("red", [create_text("b")]), create_text("c")])
        assert get_all_text(doc) == "abc"

    def test_get_all_text_empty(self):
        assert get_all_text(create_document()) == ""

    def test_get_elements_with_tag(self, hello_tree):
        doc, parts = hello_tree
        bolds = get_elements_with_tag(doc, "bold")
        assert len(bolds) == 1
        assert bolds[0] is parts["bold"]
        assert get_elements_with_tag(doc, "blue") == []

    def test_get_text_and_element_nodes(self, hello_tree):
        doc, parts = hello_tree
        assert get_text_nodes(doc) == [parts["hello"], parts["world"], parts["bang"]]
        assert get_element_nodes(doc) == [parts["red"], parts["bold"]]


@pytest.mark.unit
class TestStructureQueries:
    """Tests for containment, common ancestors and siblings."""

    def test_contains(self, hello_tree):
        doc, parts = hello_tree
        assert contains(doc, parts["world"])
        assert contains(parts["red"], parts["world"])
        assert contains(parts["world"], parts["world"])
        assert not contains(parts["world"], parts["red"])
        assert not contains(parts["bold"], parts["hello"])

    def test_common_ancestor_siblings(self, hello_tree):
        _, parts = hello_tree
        assert get_common_ancestor(parts["hello"], parts["bang"]) is parts["red"]

    def test_common_ancestor_different_depths(self, hello_tree):
        _, parts = hello_tree
        assert get_common_ancestor(parts["world"], parts["bang"]) is parts["red"]
        assert get_common_ancestor(parts["world"], parts["bold"]) is parts["bold"]

    def test_common_ancestor_self(self, hello_tree):
        _, parts = hello_tree
        assert get_common_ancestor(parts["world"], parts["world"]) is parts["world"]

    def test_common_ancestor_disconnected(self, hello_tree):
        _, parts = hello_tree
        assert get_common_ancestor(parts["world"], create_text("elsewhere")) is None

    def test_siblings(self, hello_tree):
        _, parts = hello_tree
        assert get_siblings(parts["bold"]) == [parts["hello"], parts["bang"]]
        assert get_siblings(parts["world"]) == []

    def test_siblings_of_root_and_detached(self, hello_doc):
        assert get_siblings(hello_doc) == []
        assert get_siblings(create_text("x")) == []
        assert get_previous_sibling(hello_doc) is None
        assert get_next_sibling(create_text("x")) is None

    def test_previous_and_next(self, hello_tree):
        _, parts = hello_tree
        assert get_previous_sibling(parts["bold"]) is parts["hello"]
        assert get_next_sibling(parts["bold"]) is parts["bang"]
        assert get_previous_sibling(parts["hello"]) is None
        assert get_next_sibling(parts["bang"]) is None

    def test_sibling_lookup_with_stale_parent(self):
        parent = create_element("red", [create_text("a")])
        stale = create_text("stale")
        stale.parent = parent
        assert get_previous_sibling(stale) is None
        assert get_next_sibling(stale) is None


@pytest.mark.unit
class TestIsEmpty:
    """Tests for is_empty."""

    @pytest.mark.parametrize("content,expected", [("", True), ("   \n\t", True), (" x ", False)])
    def test_text(self, content, expected):
        assert is_empty(create_text(content)) is expected

    def test_empty_containers(self):
        assert is_empty(create_document())
        assert is_empty(create_element("red"))
        assert is_empty(create_element("red", [create_text(" "), create_element("bold", [create_text("")])]))

    def test_non_empty_container(self, hello_doc):
        assert not is_empty(hello_doc)


@pytest.mark.unit
class TestMetrics:
    """Tests for count_nodes, get_max_depth, flatten and create_depth_map."""

    def test_count_nodes(self, hello_doc):
        counts = count_nodes(hello_doc)
        assert counts == NodeCounts(document=1, element=2, text=3)
        assert counts.total == 6
        assert counts.to_dict() == {"document": 1, "element": 2, "text": 3}

    def test_count_nodes_leaf(self):
        assert count_nodes(create_text("x")) == NodeCounts(text=1)

    def test_max_depth(self, hello_doc):
        assert get_max_depth(hello_doc) == 3

    def test_max_depth_single_node(self):
        assert get_max_depth(create_document()) == 0
        assert get_max_depth(create_text("x")) == 0

    def test_flatten(self, hello_tree):
        doc, parts = hello_tree
        assert flatten(doc) == [doc, parts["red"], parts["hello"], parts["bold"], parts["world"], parts["bang"]]

    def test_depth_map(self, hello_tree):
        doc, parts = hello_tree
        depth_map = create_depth_map(doc)
        assert len(depth_map) == 6
        assert depth_map[doc] == 0
        assert depth_map[parts["red"]] == 1
        assert depth_map[parts["world"]] == 3
        assert all(depth_map[node] == get_depth(node) for node in flatten(doc))

    def test_depth_map_is_relative_to_subtree(self, hello_tree):
        _, parts = hello_tree
        depth_map = create_depth_map(parts["bold"])
        assert depth_map == {parts["bold"]: 0, parts["world"]: 1}

    def test_deep_tree_metrics(self):
        doc, leaf = _deep_document(DEEP_LEVELS)
        assert get_max_depth(doc) == DEEP_LEVELS + 1
        assert create_depth_map(doc)[leaf] == DEEP_LEVELS + 1


DEEP_LEVELS = 1200


def _deep_document(levels):
    leaf = create_text("deep")
    node = leaf
    for _ in range(levels):
        node = create_element("dim", [node])
    return create_document([node]), leaf


@pytest.mark.unit
class TestDeepTrees:
    """Tests that trees deeper than the interpreter's recursion limit are fully supported."""

    @pytest.fixture
    def deep(self):
        return _deep_document(DEEP_LEVELS)

    def test_queries(self, deep):
        doc, leaf = deep
        nodes = flatten(doc)
        assert len(nodes) == DEEP_LEVELS + 2
        assert nodes[-1] is leaf
        assert count_nodes(doc) == NodeCounts(document=1, element=DEEP_LEVELS, text=1)
        assert get_all_text(doc) == "deep"
        assert find_first(doc, is_text_node) is leaf
        assert contains(doc, leaf)
        assert get_depth(leaf) == DEEP_LEVELS + 1

    def test_is_empty(self, deep):
        doc, leaf = deep
        assert not is_empty(doc)
        leaf.content = "  "
        assert is_empty(doc)

    def test_walk_and_walk_async(self, deep):
        doc, leaf = deep
        walked = []
        walk(doc, walked.append)

        awaited = []

        async def record(node):
            awaited.append(node)

        asyncio.run(walk_async(doc, record))
        assert walked == awaited
        assert walked[-1] is leaf

    def test_visit_enter_exit_order(self, deep):
        doc, leaf = deep
        events = []
        visit(
            doc,
            Visitor(
                enter_node=lambda node: events.append(("enter", node)),
                exit_node=lambda node: events.append(("exit", node)),
            ),
        )
        assert len(events) == 2 * (DEEP_LEVELS + 2)
        assert events[DEEP_LEVELS + 1] == ("enter", leaf)
        assert events[DEEP_LEVELS + 2] == ("exit", leaf)
        assert events[-1] == ("exit", doc)

    def test_visit_async(self, deep):
        doc, _ = deep
        counter = create_counter_visitor()

        async def count(node):
            counter.counts.add(node)

        asyncio.run(visit_async(doc, AsyncVisitor(enter_node=count)))
        assert counter.counts.total == DEEP_LEVELS + 2

    def test_clone_and_compare(self, deep):
        doc, leaf = deep
        cloned = clone_node(doc)
        assert nodes_equal(cloned, doc)
        assert get_max_depth(cloned) == DEEP_LEVELS + 1

        leaf.content = "changed"
        assert not nodes_equal(cloned, doc)

    def test_validate(self, deep):
        doc, _ = deep
        assert validate_tree(doc) == []
