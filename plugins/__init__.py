"""
Language parser plugins.

This package provides the plugin system that turns source text into syntax
trees, including the base plugin interface and plugin manager.
"""

from plugins.base import LanguagePlugin, ParsedSource, ParseError
from plugins.manager import PluginManager, create_default_plugin_manager

__all__ = [
    'LanguagePlugin',
    'ParsedSource',
    'ParseError',
    'PluginManager',
    'create_default_plugin_manager',
]
