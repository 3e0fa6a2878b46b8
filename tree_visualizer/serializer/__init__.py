"""
Syntax tree to visualization node serialization.
"""

from tree_visualizer.serializer.adapter import SyntaxTreeAdapter, TreeAdapter
from tree_visualizer.serializer.debug_formatter import format_tree
from tree_visualizer.serializer.errors import (
    MalformedTreeError,
    TreeSerializationError,
    TreeTooLargeError,
)
from tree_visualizer.serializer.normalizer import normalize, to_crlf
from tree_visualizer.serializer.walker import TreeSerializer, serialize_tree

__all__ = [
    "normalize",
    "to_crlf",
    "TreeAdapter",
    "SyntaxTreeAdapter",
    "TreeSerializer",
    "serialize_tree",
    "format_tree",
    "TreeSerializationError",
    "MalformedTreeError",
    "TreeTooLargeError",
]
