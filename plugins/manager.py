"""
Registry of language plugins.

Plugins are looked up by language name. Bundled tree-sitter plugins read
their settings from a ``config.yaml`` next to the plugin module; the manager
loads and checks those files before the plugin is built.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional
import yaml

from plugins.base import LanguagePlugin

logger = logging.getLogger(__name__)

REQUIRED_CONFIG_FIELDS = ('name', 'version', 'file_extensions')


class PluginManager:
    """Keeps the language plugins available to the service."""

    def __init__(self):
        self._plugins: Dict[str, LanguagePlugin] = {}
        self._config_cache: Dict[str, Dict] = {}

    def register_plugin(self, plugin: LanguagePlugin) -> None:
        """
        Register a plugin under its language name.

        A second plugin for the same language replaces the first.
        """
        language_name = plugin.language_name
        if language_name in self._plugins:
            logger.warning(f"Replacing plugin for language '{language_name}'")

        self._plugins[language_name] = plugin
        logger.info(f"Registered '{language_name}' plugin ({', '.join(plugin.file_extensions)})")

    def get_plugin(self, language_name: str) -> Optional[LanguagePlugin]:
        return self._plugins.get(language_name)

    def list_supported_languages(self) -> List[str]:
        """Language names in registration order."""
        return list(self._plugins)

    def load_plugin_config(self, plugin_dir: Path) -> Dict:
        """
        Read and check the config.yaml of a plugin directory.

        Results are cached per file, so building a plugin twice reads its
        configuration once.

        Args:
            plugin_dir: Directory holding config.yaml

        Returns:
            Parsed configuration mapping

        Raises:
            FileNotFoundError: If config.yaml does not exist
            yaml.YAMLError: If config.yaml is not valid YAML
            ValueError: If a required field is missing or has the wrong type
        """
        config_path = Path(plugin_dir) / "config.yaml"
        cache_key = str(config_path)
        if cache_key in self._config_cache:
            return self._config_cache[cache_key]

        if not config_path.exists():
            raise FileNotFoundError(f"Plugin configuration not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in {config_path}: {e}")
            raise

        if not isinstance(config, dict):
            raise ValueError(f"Plugin configuration {config_path} must be a mapping")
        for field in REQUIRED_CONFIG_FIELDS:
            if field not in config:
                raise ValueError(f"Missing required field '{field}' in {config_path}")
        if not isinstance(config['file_extensions'], list):
            raise ValueError(f"'file_extensions' must be a list in {config_path}")
        if not isinstance(config.get('leaf_types') or [], list):
            raise ValueError(f"'leaf_types' must be a list in {config_path}")

        self._config_cache[cache_key] = config
        logger.info(f"Loaded {config['name']} v{config['version']} configuration from {config_path}")
        return config


def create_default_plugin_manager() -> PluginManager:
    """
    Build a manager holding the bundled Java and TypeScript plugins.

    Each plugin is constructed from the configuration the manager loaded
    from its directory.
    """
    from plugins.java import JavaPlugin
    from plugins.typescript import TypeScriptPlugin

    manager = PluginManager()
    for plugin_class in (JavaPlugin, TypeScriptPlugin):
        config = manager.load_plugin_config(plugin_class.plugin_dir)
        manager.register_plugin(plugin_class(config))
    return manager
