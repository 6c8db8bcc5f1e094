"""
Main extraction orchestrator.

Async entry points used by callers holding a rendered page:
1. Job page classifier (should extraction be attempted at all?)
2. Plugin registry (site plugins, then the generic fallback)

All work happens on an in-memory tree; the coroutines never suspend and
only exist so callers can await them alongside their own I/O.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from capture.plugins.base import ExtractionOutcome
from capture.plugins.registry import PluginRegistry, get_plugin_registry
from .classifier import JobPageClassifier

logger = logging.getLogger(__name__)


class Extractor:
    """Main extraction orchestrator."""

    def __init__(self, registry: Optional[PluginRegistry] = None,
                 classifier: Optional[JobPageClassifier] = None):
        self.registry = registry or get_plugin_registry()
        self.classifier = classifier or JobPageClassifier()

    def is_job_page(self, url: str, soup: BeautifulSoup) -> bool:
        return self.classifier.classify(url, soup)

    async def extract_job_offer(self, url: str, soup: BeautifulSoup) -> ExtractionOutcome:
        """
        Extract a job offer from a parsed page.

        Args:
            url: Source URL
            soup: Parsed page

        Returns:
            ExtractionOutcome from the first plugin that succeeded, or a
            failure outcome named "none"
        """
        outcome = self.registry.extract(url, soup)
        if outcome.is_success():
            logger.info(f"Extracted '{outcome.record.title}' from {url[:80]} "
                        f"with {outcome.strategy_name} (confidence={outcome.confidence:.2f})")
        else:
            logger.info(f"No job offer extracted from {url[:80]}: {'; '.join(outcome.errors)}")
        return outcome

    async def extract_from_html(self, html: str, url: str,
                                soup: Optional[BeautifulSoup] = None) -> ExtractionOutcome:
        """
        Extract a job offer from raw HTML.

        Args:
            html: Raw HTML content
            url: Source URL
            soup: Pre-parsed BeautifulSoup object (optional)
        """
        if soup is None:
            soup = BeautifulSoup(html, 'lxml')
        return await self.extract_job_offer(url, soup)


async def extract_job_offer(url: str, soup: BeautifulSoup) -> ExtractionOutcome:
    """Extract a job offer with the built-in plugins."""
    return await Extractor().extract_job_offer(url, soup)
