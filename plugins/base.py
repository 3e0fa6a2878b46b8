"""
Base interface for language parser plugins.

This module defines the abstract base class that all language plugins must implement
to turn raw source text into a syntax tree the visualizer can walk.
"""

from abc import ABC, abstractmethod
from typing import Any, FrozenSet, List

from pydantic import BaseModel, ConfigDict

from tree_visualizer.serializer.adapter import TreeAdapter


class ParseError(ValueError):
    """Raised when a plugin cannot produce a syntax tree for its input."""


class ParsedSource(BaseModel):
    """Syntax tree produced by a plugin, with the adapter needed to walk it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    language: str
    content: str
    root: Any
    adapter: TreeAdapter


class LanguagePlugin(ABC):
    """Base interface for language parser plugins."""

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the language name (e.g., 'java', 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> List[str]:
        """Return supported file extensions (e.g., ['.java'])."""
        pass

    @property
    def leaf_types(self) -> FrozenSet[str]:
        """Return node types rendered as leaves even when they have children."""
        return frozenset()

    @abstractmethod
    async def parse(self, content: str) -> ParsedSource:
        """
        Parse source text into a syntax tree.

        Args:
            content: Source text

        Returns:
            ParsedSource holding the tree root and its adapter

        Raises:
            ParseError: If the source cannot be parsed
        """
        pass
