"""
Java Language Plugin.

Parses Java source with tree-sitter-java.
"""

from pathlib import Path

import tree_sitter
import tree_sitter_java

from plugins.treesitter import TreeSitterPlugin


class JavaPlugin(TreeSitterPlugin):
    """Java parser plugin using tree-sitter."""

    plugin_dir = Path(__file__).parent

    def _load_language(self) -> tree_sitter.Language:
        return tree_sitter.Language(tree_sitter_java.language())
