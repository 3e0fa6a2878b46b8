"""
Adapters exposing externally produced syntax trees to the tree walker.

An adapter answers three questions about a source node: its rendered text,
its ``(start, length)`` span, and, for container nodes only, its ordered
children. Leaves answer ``None`` for children.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Tuple

from tree_visualizer.models.syntax import SyntaxBlock, SyntaxToken


class TreeAdapter(ABC):
    """Capability interface over one kind of syntax tree."""

    @abstractmethod
    def text(self, node: Any) -> str:
        """Return the full rendered text of the node."""
        pass

    @abstractmethod
    def span(self, node: Any) -> Tuple[int, int]:
        """Return the node's ``(start, length)`` in the original source."""
        pass

    @abstractmethod
    def children(self, node: Any) -> Optional[Sequence[Any]]:
        """
        Return the node's structural children in source order.

        Returns:
            Ordered children for container nodes, None for leaves
        """
        pass

    def kind(self, node: Any) -> str:
        """Return a short label for the node, used by the debug formatter."""
        return type(node).__name__


class SyntaxTreeAdapter(TreeAdapter):
    """Adapter for in-memory :class:`SyntaxBlock` / :class:`SyntaxToken` trees."""

    def text(self, node: Any) -> str:
        return node.text

    def span(self, node: Any) -> Tuple[int, int]:
        return node.start, node.length

    def children(self, node: Any) -> Optional[Sequence[Any]]:
        if isinstance(node, SyntaxBlock):
            return node.children
        return None

    def kind(self, node: Any) -> str:
        if isinstance(node, (SyntaxBlock, SyntaxToken)):
            return node.kind
        return super().kind(node)
