"""
Unit tests for the syntax tree walker.
"""

import json
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional, Sequence, Tuple

import pytest

from tree_visualizer.models import SyntaxBlock, SyntaxToken, VisualizationNode
from tree_visualizer.serializer import (
    MalformedTreeError,
    SyntaxTreeAdapter,
    TreeAdapter,
    TreeSerializer,
    TreeTooLargeError,
    serialize_tree,
)


@pytest.fixture
def serializer():
    """Create a serializer for in-memory syntax trees."""
    return TreeSerializer(SyntaxTreeAdapter())


@pytest.fixture
def hello_tree():
    """Container with a CRLF-terminated leaf and a plain leaf."""
    return SyntaxBlock(
        text="Hello\r\nWorld!",
        start=0,
        length=13,
        children=[
            SyntaxToken(text="Hello\r\n", start=0, length=7),
            SyntaxToken(text="World!", start=7, length=6),
        ],
    )


def build_nested_tree() -> SyntaxBlock:
    """Document with a nested block between two tokens."""
    source = "@if (x) {\n  <p>hi</p>\n}\n"
    inner = SyntaxBlock(
        text="{\n  <p>hi</p>\n}",
        start=8,
        length=15,
        children=[
            SyntaxToken(text="{", start=8, length=1),
            SyntaxBlock(
                text="\n  <p>hi</p>\n",
                start=9,
                length=13,
                children=[
                    SyntaxToken(text="\n  ", start=9, length=3),
                    SyntaxToken(text="<p>hi</p>", start=12, length=9),
                    SyntaxToken(text="\n", start=21, length=1),
                ],
            ),
            SyntaxToken(text="}", start=22, length=1),
        ],
    )
    return SyntaxBlock(
        text=source,
        start=0,
        length=len(source),
        children=[
            SyntaxToken(text="@if (x) ", start=0, length=8),
            inner,
            SyntaxToken(text="\n", start=23, length=1),
        ],
    )


def count_source_nodes(node) -> int:
    if isinstance(node, SyntaxBlock):
        return 1 + sum(count_source_nodes(child) for child in node.children)
    return 1


class TestExampleScenarios:
    """Test the documented input/output examples."""

    def test_container_with_two_leaves(self, serializer, hello_tree):
        """Test CRLF normalization, spans and child order."""
        node = serializer.visit(hello_tree)

        assert node.content == "HelloLFWorld!"
        assert (node.start, node.length) == (0, 13)
        assert [child.content for child in node.children] == ["HelloLF", "World!"]
        assert [(c.start, c.length) for c in node.children] == [(0, 7), (7, 6)]
        assert all(child.children == [] for child in node.children)

    def test_container_serialized_shape(self, serializer, hello_tree):
        """Test the JSON document for the two-leaf example."""
        data = json.loads(serializer.serialize(hello_tree))

        assert data == {
            "Content": "HelloLFWorld!",
            "Start": 0,
            "Length": 13,
            "Children": [
                {"Content": "HelloLF", "Start": 0, "Length": 7, "Children": []},
                {"Content": "World!", "Start": 7, "Length": 6, "Children": []},
            ],
        }

    def test_empty_source(self, serializer):
        """Test a single empty leaf root."""
        node = serializer.visit(SyntaxToken(text="", start=0, length=0))

        assert json.loads(node.to_json()) == {
            "Content": "",
            "Start": 0,
            "Length": 0,
            "Children": [],
        }

    def test_json_field_order(self, serializer, hello_tree):
        """Test that fields are emitted as Content, Start, Length, Children."""
        output = serializer.serialize(hello_tree)

        assert output.startswith('{"Content":"HelloLFWorld!","Start":0,"Length":13,"Children":[')


class TestTreeShape:
    """Test that the output mirrors the source tree."""

    def test_node_count_matches_source(self, serializer):
        """Test one visualization node per visited source node."""
        tree = build_nested_tree()
        node = serializer.visit(tree)

        assert node.count_nodes() == count_source_nodes(tree) == 10

    def test_children_keep_source_order(self, serializer):
        """Test that children are ordered left to right."""
        node = serializer.visit(build_nested_tree())

        starts = [child.start for child in node.children]
        assert starts == sorted(starts) == [0, 8, 23]
        inner = node.children[1]
        assert [child.content for child in inner.children] == ["{", "LF  <p>hi</p>LF", "}"]
        assert [child.content for child in inner.children[1].children] == ["LF  ", "<p>hi</p>", "LF"]

    def test_leaf_parts_are_not_walked(self, serializer):
        """Test that tokens never get children, whatever their parts."""
        token = SyntaxToken(
            text='"a\\nb"',
            start=0,
            length=6,
            parts=[
                SyntaxToken(text='"', start=0, length=1),
                SyntaxToken(text="a\\nb", start=1, length=4),
                SyntaxToken(text='"', start=5, length=1),
            ],
        )
        root = SyntaxBlock(text=token.text, start=0, length=6, children=[token])

        node = serializer.visit(root)

        assert len(node.children) == 1
        assert node.children[0].children == []

    def test_empty_block_has_no_children(self, serializer):
        """Test a container with zero children."""
        node = serializer.visit(SyntaxBlock(text="", start=4, length=0))

        assert node.children == []
        assert node.span.start == 4
        assert node.span.end == 4

    def test_output_is_detached_from_source(self, serializer, hello_tree):
        """Test that mutating the source afterwards does not affect the output."""
        node = serializer.visit(hello_tree)
        hello_tree.children.append(SyntaxToken(text="!", start=13, length=1))
        hello_tree.text = "changed"

        assert node.content == "HelloLFWorld!"
        assert len(node.children) == 2


class TestDeterminism:
    """Test repeatable output."""

    def test_repeated_walks_are_equal(self, serializer):
        """Test that two walks of the same tree are deep-equal."""
        tree = build_nested_tree()

        first = serializer.visit(tree)
        second = serializer.visit(tree)

        assert first == second
        assert first is not second
        assert first.to_json() == second.to_json()

    def test_concurrent_walks_are_equal(self):
        """Test independent walks running in parallel."""
        tree = build_nested_tree()
        expected = serialize_tree(tree, SyntaxTreeAdapter()).to_json()

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(
                lambda _: serialize_tree(tree, SyntaxTreeAdapter()).to_json(),
                range(16),
            ))

        assert all(result == expected for result in results)


class TestDeepTrees:
    """Test trees deeper than the interpreter recursion limit."""

    def test_deep_chain_is_walked(self, serializer):
        """Test that a very deep tree does not hit the recursion limit."""
        depth = 5000
        tree = SyntaxToken(text="x", start=0, length=1)
        for _ in range(depth):
            tree = SyntaxBlock(text="x", start=0, length=1, children=[tree])

        node = serializer.visit(tree)

        levels = 0
        while node.children:
            node = node.children[0]
            levels += 1
        assert levels == depth

    def test_deep_chain_is_serialized(self, serializer):
        """Test that a tree far deeper than pydantic's serializer allows renders to JSON."""
        depth = 2000
        tree = SyntaxToken(text="leaf\r\n", start=0, length=6)
        for _ in range(depth):
            tree = SyntaxBlock(text="x", start=0, length=1, children=[tree])

        output = serializer.serialize(tree)

        assert output.startswith('{"Content":"x","Start":0,"Length":1,"Children":[{"Content":"x",')
        assert output.endswith(
            '{"Content":"leafLF","Start":0,"Length":6,"Children":[]}' + "]}" * depth
        )
        assert output.count('"Children":[') == depth + 1
        assert output.count('"Content":"x"') == depth

    def test_wide_tree_matches_pydantic_rendering(self, serializer):
        """Test that the hand-built JSON equals pydantic's for shallow trees."""
        node = serializer.visit(build_nested_tree())

        assert node.to_json() == node.model_dump_json(by_alias=True)

    def test_non_ascii_content_is_not_escaped(self, serializer):
        node = serializer.visit(SyntaxToken(text='日本 "q"\\', start=0, length=7))

        assert node.to_json() == '{"Content":"日本 \\"q\\"\\\\","Start":0,"Length":7,"Children":[]}'
        assert json.loads(node.to_json())["Content"] == '日本 "q"\\'


class FakeNode:
    """Minimal node used to exercise adapter contract violations."""

    def __init__(self, text: Any = "", span: Any = (0, 0), children: Any = None):
        self.text = text
        self.span = span
        self.children = children


class FakeAdapter(TreeAdapter):
    """Adapter that returns whatever the fake node holds."""

    def text(self, node: FakeNode) -> str:
        return node.text

    def span(self, node: FakeNode) -> Tuple[int, int]:
        return node.span

    def children(self, node: FakeNode) -> Optional[Sequence[Any]]:
        return node.children


class TestMalformedInput:
    """Test failures on trees that violate the walker's preconditions."""

    def test_missing_root(self, serializer):
        with pytest.raises(MalformedTreeError):
            serializer.visit(None)

    def test_missing_child(self):
        serializer = TreeSerializer(FakeAdapter())

        with pytest.raises(MalformedTreeError, match="Missing child"):
            serializer.visit(FakeNode(children=[FakeNode(), None]))

    def test_non_iterable_children(self):
        serializer = TreeSerializer(FakeAdapter())

        with pytest.raises(MalformedTreeError, match="iterable"):
            serializer.visit(FakeNode(children=42))

    def test_negative_span(self):
        serializer = TreeSerializer(FakeAdapter())

        with pytest.raises(MalformedTreeError, match="invalid span"):
            serializer.visit(FakeNode(span=(-1, 3)))

    def test_span_of_wrong_shape(self):
        serializer = TreeSerializer(FakeAdapter())

        with pytest.raises(MalformedTreeError, match="invalid span"):
            serializer.visit(FakeNode(span=None))

    def test_non_string_text(self):
        serializer = TreeSerializer(FakeAdapter())

        with pytest.raises(MalformedTreeError, match="expected str"):
            serializer.visit(FakeNode(text=b"bytes"))


class TestLimits:
    """Test the depth and node-count caps."""

    def test_cycle_is_stopped_by_node_cap(self):
        """Test that a cyclic tree fails instead of looping forever."""
        node = FakeNode(text="loop", span=(0, 4))
        node.children = [node]
        serializer = TreeSerializer(FakeAdapter(), max_nodes=100)

        with pytest.raises(TreeTooLargeError, match="possibly cyclic") as exc_info:
            serializer.visit(node)

        assert exc_info.value.limit == 100

    def test_depth_cap(self, serializer):
        tree = build_nested_tree()
        limited = TreeSerializer(SyntaxTreeAdapter(), max_depth=1)

        with pytest.raises(TreeTooLargeError, match="deeper than 1"):
            limited.visit(tree)

    def test_limits_that_fit_are_not_triggered(self, serializer):
        tree = build_nested_tree()
        limited = TreeSerializer(SyntaxTreeAdapter(), max_depth=3, max_nodes=10)

        assert limited.visit(tree) == serializer.visit(tree)

    def test_node_cap_exceeded_by_one(self):
        tree = build_nested_tree()
        limited = TreeSerializer(SyntaxTreeAdapter(), max_nodes=9)

        with pytest.raises(TreeTooLargeError):
            limited.visit(tree)


def test_visualization_node_accepts_wire_names():
    """Test that nodes can be rebuilt from their JSON form."""
    data = {
        "Content": "HelloLFWorld!",
        "Start": 0,
        "Length": 13,
        "Children": [{"Content": "World!", "Start": 7, "Length": 6, "Children": []}],
    }

    node = VisualizationNode.model_validate(data)

    assert node.children[0].content == "World!"
    assert json.loads(node.to_json()) == data
