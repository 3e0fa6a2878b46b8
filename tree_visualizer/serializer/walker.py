"""
Tree walker that turns a syntax tree into visualization nodes.

The walk is a depth-first, pre-order descent driven by an explicit work
stack. Each source node yields exactly one :class:`VisualizationNode`;
only container nodes are descended into. The walker reads the source tree
through a :class:`TreeAdapter` and never keeps references into it.
"""

from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from tree_visualizer.models.visualization import SourceSpan, VisualizationNode
from tree_visualizer.serializer.adapter import TreeAdapter
from tree_visualizer.serializer.errors import MalformedTreeError, TreeTooLargeError
from tree_visualizer.serializer.normalizer import normalize


class TreeSerializer:
    """Builds :class:`VisualizationNode` trees from adapted syntax trees."""

    def __init__(
        self,
        adapter: TreeAdapter,
        max_depth: Optional[int] = None,
        max_nodes: Optional[int] = None,
    ):
        """
        Initialize the serializer.

        Args:
            adapter: Adapter for the kind of tree being walked
            max_depth: Deepest level to descend to (root is depth 0), None for no limit
            max_nodes: Maximum number of nodes to build, None for no limit
        """
        self.adapter = adapter
        self.max_depth = max_depth
        self.max_nodes = max_nodes

    def visit(self, root: Any) -> VisualizationNode:
        """
        Build the visualization tree rooted at ``root``.

        Args:
            root: Root node of the source tree

        Returns:
            Fully populated root VisualizationNode

        Raises:
            MalformedTreeError: If the source tree violates the adapter contract
            TreeTooLargeError: If a depth or node-count cap is exceeded
        """
        if root is None:
            raise MalformedTreeError("Source tree root is missing")

        result: List[VisualizationNode] = []
        # (source node, list the built node is appended to, depth)
        stack: List[Tuple[Any, List[VisualizationNode], int]] = [(root, result, 0)]
        built = 0

        while stack:
            source, siblings, depth = stack.pop()

            if source is None:
                raise MalformedTreeError(f"Missing child node at depth {depth}")
            if self.max_depth is not None and depth > self.max_depth:
                raise TreeTooLargeError(
                    f"Source tree is deeper than {self.max_depth} levels; "
                    "input too large or possibly cyclic",
                    self.max_depth,
                )
            built += 1
            if self.max_nodes is not None and built > self.max_nodes:
                raise TreeTooLargeError(
                    f"Source tree has more than {self.max_nodes} nodes; "
                    "input too large or possibly cyclic",
                    self.max_nodes,
                )

            node = self._build_node(source)
            siblings.append(node)

            children = self.adapter.children(source)
            if children is None:
                continue

            try:
                ordered = list(children)
            except TypeError as e:
                raise MalformedTreeError(
                    f"Container node {self.adapter.kind(source)!r} does not expose "
                    f"iterable children"
                ) from e

            # Reversed so that children are popped, and appended, in source order
            for child in reversed(ordered):
                stack.append((child, node.children, depth + 1))

        return result[0]

    def serialize(self, root: Any) -> str:
        """
        Build the visualization tree and render it as JSON.

        Args:
            root: Root node of the source tree

        Returns:
            JSON document with ``Content``, ``Start``, ``Length`` and ``Children`` fields
        """
        return self.visit(root).to_json()

    def _build_node(self, source: Any) -> VisualizationNode:
        text = self.adapter.text(source)
        if not isinstance(text, str):
            raise MalformedTreeError(
                f"Node {self.adapter.kind(source)!r} rendered text of type "
                f"{type(text).__name__}, expected str"
            )

        span = self._read_span(source)
        return VisualizationNode(
            content=normalize(text),
            start=span.start,
            length=span.length,
        )

    def _read_span(self, source: Any) -> SourceSpan:
        try:
            start, length = self.adapter.span(source)
            return SourceSpan(start=start, length=length)
        except (TypeError, ValueError, ValidationError) as e:
            raise MalformedTreeError(
                f"Node {self.adapter.kind(source)!r} has an invalid span: {e}"
            ) from e


def serialize_tree(
    root: Any,
    adapter: TreeAdapter,
    max_depth: Optional[int] = None,
    max_nodes: Optional[int] = None,
) -> VisualizationNode:
    """
    Convenience wrapper around :meth:`TreeSerializer.visit`.

    Args:
        root: Root node of the source tree
        adapter: Adapter for the kind of tree being walked
        max_depth: Optional depth cap
        max_nodes: Optional node-count cap

    Returns:
        Root VisualizationNode
    """
    return TreeSerializer(adapter, max_depth=max_depth, max_nodes=max_nodes).visit(root)
