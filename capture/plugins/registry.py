"""
Plugin registry for managing extraction plugins.
"""
import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from .base import ExtractionOutcome, ExtractionPlugin, create_empty_result

logger = logging.getLogger(__name__)

NO_STRATEGY_NAME = "none"

# Global registry instance
_registry: Optional['PluginRegistry'] = None


class PluginRegistry:
    """Registry for extraction plugins"""

    def __init__(self):
        self._plugins: List[ExtractionPlugin] = []
        self._plugins_by_name: Dict[str, ExtractionPlugin] = {}

    def register(self, plugin: ExtractionPlugin):
        """Register a plugin"""
        if plugin.name in self._plugins_by_name:
            logger.warning(f"Plugin {plugin.name} already registered, replacing")
            self._plugins.remove(self._plugins_by_name[plugin.name])

        self._plugins_by_name[plugin.name] = plugin
        self._plugins.append(plugin)

        # Sort by priority (higher first); stable, so ties keep registration order
        self._plugins.sort(key=lambda p: p.priority, reverse=True)

        logger.info(f"Registered plugin: {plugin.name} (priority={plugin.priority})")

    def get_plugin(self, name: str) -> Optional[ExtractionPlugin]:
        """Get plugin by name"""
        return self._plugins_by_name.get(name)

    def extract(self, url: str, soup: BeautifulSoup) -> ExtractionOutcome:
        """
        Extract a job offer using the first plugin that succeeds.

        Plugins are tried in priority order. A plugin that declines the page,
        fails, or raises is skipped and the next one is tried; results are
        never merged across plugins.

        Args:
            url: Source URL
            soup: Parsed page

        Returns:
            The first successful ExtractionOutcome, or a failure outcome named
            "none" carrying the collected errors
        """
        errors: List[str] = []

        for plugin in self._plugins:
            try:
                if not plugin.can_handle(url, soup):
                    continue
            except Exception as e:
                logger.error(f"Plugin {plugin.name} can_handle error: {e}", exc_info=True)
                errors.append(f"{plugin.name}: {e}")
                continue

            logger.debug(f"Trying plugin: {plugin.name} for {url[:80]}")

            try:
                outcome = plugin.extract(url, soup)
            except Exception as e:
                logger.error(f"Plugin {plugin.name} extraction error: {e}", exc_info=True)
                errors.append(f"{plugin.name}: {e}")
                continue

            if not isinstance(outcome, ExtractionOutcome):
                logger.error(f"Plugin {plugin.name} returned {type(outcome).__name__}, not an ExtractionOutcome")
                errors.append(f"{plugin.name}: returned {type(outcome).__name__} instead of an outcome")
                continue

            if outcome.is_success() and outcome.confidence > 0 and outcome.record.is_usable():
                logger.info(f"Plugin {plugin.name} extracted offer (confidence={outcome.confidence:.2f})")
                return outcome

            logger.debug(f"Plugin {plugin.name} found no usable offer for {url[:80]}")

        logger.warning(f"No plugin extracted an offer from {url[:80]}")
        return create_empty_result(NO_STRATEGY_NAME, errors)

    def list_plugins(self) -> List[Dict]:
        """List all registered plugins"""
        return [
            {
                'name': plugin.name,
                'priority': plugin.priority,
                'class': plugin.__class__.__name__
            }
            for plugin in self._plugins
        ]


def get_plugin_registry() -> PluginRegistry:
    """Get or create the global plugin registry"""
    global _registry
    if _registry is None:
        _registry = PluginRegistry()
        # Auto-register built-in plugins
        _register_builtin_plugins(_registry)
    return _registry


def _register_builtin_plugins(registry: PluginRegistry):
    """Register all built-in plugins"""
    from .linkedin import LinkedInPlugin
    from .indeed import IndeedPlugin
    from .welcometothejungle import WelcomeToTheJunglePlugin
    from .generic import GenericPlugin

    registry.register(LinkedInPlugin())
    registry.register(IndeedPlugin())
    registry.register(WelcomeToTheJunglePlugin())
    registry.register(GenericPlugin())
