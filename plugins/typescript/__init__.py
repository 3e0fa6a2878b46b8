"""
TypeScript language plugin.

This plugin parses TypeScript source into tree-sitter syntax trees.
"""

from plugins.typescript.plugin import TypeScriptPlugin

__all__ = ['TypeScriptPlugin']
