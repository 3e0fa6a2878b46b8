"""
Java language plugin.

This plugin parses Java source into tree-sitter syntax trees.
"""

from plugins.java.plugin import JavaPlugin

__all__ = ['JavaPlugin']
