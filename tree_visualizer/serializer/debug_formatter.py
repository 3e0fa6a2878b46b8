"""
Debug rendering of syntax trees.

Produces one line per node, indented two spaces per level::

    block [0..13) "HelloLFWorld!"
      token [0..7) "HelloLF"
      token [7..13) "World!"

This is an independent path from :class:`TreeSerializer`; it only shares
the text normalizer.
"""

from typing import Any, List, Optional, Tuple

from tree_visualizer.serializer.adapter import TreeAdapter
from tree_visualizer.serializer.errors import MalformedTreeError, TreeTooLargeError
from tree_visualizer.serializer.normalizer import normalize

INDENT = "  "
DEFAULT_PREVIEW_LENGTH = 40


def _preview(text: str, limit: int) -> str:
    text = normalize(text)
    truncated = len(text) > limit
    if truncated:
        text = text[:limit]
    text = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}..."' if truncated else f'"{text}"'


def format_tree(
    root: Any,
    adapter: TreeAdapter,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
    max_depth: Optional[int] = None,
    max_nodes: Optional[int] = None,
) -> str:
    """
    Render a syntax tree as an indented debug listing.

    Args:
        root: Root node of the source tree
        adapter: Adapter for the kind of tree being rendered
        preview_length: Maximum number of normalized text characters per line
        max_depth: Deepest level to descend to (root is depth 0), None for no limit
        max_nodes: Maximum number of lines to render, None for no limit

    Returns:
        Multi-line debug string

    Raises:
        MalformedTreeError: If the root is missing
        TreeTooLargeError: If a depth or node-count cap is exceeded
    """
    if root is None:
        raise MalformedTreeError("Source tree root is missing")

    lines: List[str] = []
    stack: List[Tuple[Any, int]] = [(root, 0)]

    while stack:
        node, depth = stack.pop()
        if max_depth is not None and depth > max_depth:
            raise TreeTooLargeError(
                f"Source tree is deeper than {max_depth} levels; "
                "input too large or possibly cyclic",
                max_depth,
            )
        if max_nodes is not None and len(lines) >= max_nodes:
            raise TreeTooLargeError(
                f"Source tree has more than {max_nodes} nodes; "
                "input too large or possibly cyclic",
                max_nodes,
            )
        start, length = adapter.span(node)
        lines.append(
            f"{INDENT * depth}{adapter.kind(node)} [{start}..{start + length}) "
            f"{_preview(adapter.text(node), preview_length)}"
        )

        children = adapter.children(node)
        if children:
            for child in reversed(list(children)):
                stack.append((child, depth + 1))

    return "\n".join(lines)
