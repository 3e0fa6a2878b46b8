"""
Shared tree-sitter plumbing for language plugins.

Tree-sitter nodes only store byte offsets into the UTF-8 encoded source, so
the adapter maps them back to character offsets of the decoded string. Spans
and text then index the same string the caller submitted.
"""

import logging
from abc import abstractmethod
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

import tree_sitter

from plugins.base import LanguagePlugin, ParsedSource, ParseError
from tree_visualizer.serializer.adapter import TreeAdapter

logger = logging.getLogger(__name__)


def build_offset_map(content: str) -> Optional[List[int]]:
    """
    Map UTF-8 byte offsets of ``content`` to character offsets.

    Returns:
        List indexed by byte offset, or None when the source is pure ASCII
        and both offsets coincide
    """
    encoded_length = len(content.encode("utf-8"))
    if encoded_length == len(content):
        return None

    offsets = [0] * (encoded_length + 1)
    position = 0
    for index, char in enumerate(content):
        width = len(char.encode("utf-8"))
        for k in range(width):
            offsets[position + k] = index
        position += width
    offsets[encoded_length] = len(content)
    return offsets


class TreeSitterAdapter(TreeAdapter):
    """Adapter for trees produced by a ``tree_sitter.Parser``."""

    def __init__(self, content: str, leaf_types: FrozenSet[str] = frozenset()):
        """
        Initialize the adapter.

        Args:
            content: Source text the tree was parsed from
            leaf_types: Node types rendered as leaves even when they have children
        """
        self.content = content
        self.leaf_types = leaf_types
        self._offsets = build_offset_map(content)

    def _char_offset(self, byte_offset: int) -> int:
        if self._offsets is None:
            return byte_offset
        return self._offsets[byte_offset]

    def _char_range(self, node: tree_sitter.Node) -> Tuple[int, int]:
        return self._char_offset(node.start_byte), self._char_offset(node.end_byte)

    def text(self, node: tree_sitter.Node) -> str:
        start, end = self._char_range(node)
        return self.content[start:end]

    def span(self, node: tree_sitter.Node) -> Tuple[int, int]:
        start, end = self._char_range(node)
        return start, end - start

    def children(self, node: tree_sitter.Node) -> Optional[Sequence[Any]]:
        if node.child_count == 0 or node.type in self.leaf_types:
            return None
        return node.children

    def kind(self, node: tree_sitter.Node) -> str:
        return node.type


class TreeSitterPlugin(LanguagePlugin):
    """Language plugin backed by a tree-sitter grammar and a config.yaml."""

    # Directory holding the plugin's config.yaml, set by concrete plugins
    plugin_dir: Path

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the plugin.

        Args:
            config: Configuration loaded by PluginManager.load_plugin_config
        """
        self._config = config

        self._parser = tree_sitter.Parser(self._load_language())

        logger.info(f"{self.language_name} plugin initialized successfully")

    @abstractmethod
    def _load_language(self) -> tree_sitter.Language:
        """Return the tree-sitter grammar for this plugin."""
        pass

    @property
    def language_name(self) -> str:
        return self._config['name']

    @property
    def file_extensions(self) -> List[str]:
        return self._config['file_extensions']

    @property
    def leaf_types(self) -> FrozenSet[str]:
        return frozenset(self._config.get('leaf_types') or [])

    async def parse(self, content: str) -> ParsedSource:
        """
        Parse source text using the plugin's tree-sitter grammar.

        Syntax errors do not fail the parse: tree-sitter recovers and marks
        them with ERROR / MISSING nodes, which are visualized like any other.

        Args:
            content: Source text

        Returns:
            ParsedSource holding the tree-sitter root node

        Raises:
            ParseError: If the source cannot be parsed
        """
        try:
            tree = self._parser.parse(content.encode("utf-8"))
        except Exception as e:
            logger.error(f"Error parsing {self.language_name} source: {e}")
            raise ParseError(f"Failed to parse {self.language_name} source: {e}") from e

        if tree.root_node is None:
            raise ParseError(f"Failed to parse {self.language_name} source")

        logger.debug(f"Successfully parsed {self.language_name} source")
        return ParsedSource(
            language=self.language_name,
            content=content,
            root=tree.root_node,
            adapter=TreeSitterAdapter(content, self.leaf_types),
        )
