"""
TypeScript Language Plugin.

Parses TypeScript source with tree-sitter-typescript.
"""

from pathlib import Path

import tree_sitter
import tree_sitter_typescript

from plugins.treesitter import TreeSitterPlugin


class TypeScriptPlugin(TreeSitterPlugin):
    """TypeScript parser plugin using tree-sitter."""

    plugin_dir = Path(__file__).parent

    def _load_language(self) -> tree_sitter.Language:
        return tree_sitter.Language(tree_sitter_typescript.language_typescript())
