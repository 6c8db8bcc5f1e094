"""
Extraction plugin system.

Plugins provide site-specific extraction logic for a single job offer page:
- LinkedIn, Indeed and Welcome to the Jungle selector cascades
- A generic fallback driven by JSON-LD, meta tags and common patterns
"""

from .base import ExtractionOutcome, ExtractionPlugin
from .registry import PluginRegistry, get_plugin_registry

__all__ = [
    'ExtractionOutcome',
    'ExtractionPlugin',
    'PluginRegistry',
    'get_plugin_registry'
]
