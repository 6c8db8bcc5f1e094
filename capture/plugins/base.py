"""
Base plugin interface for job offer extraction.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from core.markdown import html_to_markdown
from core.normalize import clean_text, domain_matches, get_domain
from pipeline.models import JobOffer

logger = logging.getLogger(__name__)

EMPTY_RESULT_ERROR = "No job data extracted"

# Rendered descriptions at or below this length are too weak to keep
DESCRIPTION_MIN_LENGTH = 100
# Descriptions above this length earn the "substantial description" bonus
SUBSTANTIAL_DESCRIPTION_LENGTH = 200


class ExtractionOutcome:
    """Result of one extraction attempt"""
    def __init__(
        self,
        success: bool,
        record: Optional[JobOffer] = None,
        confidence: float = 0.0,
        strategy_name: str = "none",
        errors: Optional[List[str]] = None
    ):
        self.success = success
        self.record = record
        self.confidence = confidence  # 0.0 to 1.0
        self.strategy_name = strategy_name
        self.errors = errors or []

    def is_success(self) -> bool:
        return self.success and self.record is not None

    def to_dict(self) -> Dict:
        return {
            "success": self.success,
            "record": self.record.to_dict() if self.record else None,
            "confidence": round(self.confidence, 2),
            "strategy_name": self.strategy_name,
            "errors": list(self.errors),
        }

    def __repr__(self):
        return (
            f"ExtractionOutcome(success={self.success}, strategy={self.strategy_name}, "
            f"confidence={self.confidence:.2f})"
        )


def create_empty_result(strategy_name: str, errors: Optional[List[str]] = None) -> ExtractionOutcome:
    """Canonical failure: no record, zero confidence."""
    return ExtractionOutcome(
        success=False,
        record=None,
        confidence=0.0,
        strategy_name=strategy_name,
        errors=list(errors or []) + [EMPTY_RESULT_ERROR],
    )


def create_success_result(strategy_name: str, offer: JobOffer, confidence: float) -> ExtractionOutcome:
    return ExtractionOutcome(
        success=True,
        record=offer,
        confidence=max(0.0, min(confidence, 1.0)),
        strategy_name=strategy_name,
    )


class ExtractionPlugin(ABC):
    """
    Base class for extraction plugins.

    Plugins provide site-specific extraction logic for a single job offer.
    Each plugin should:
    1. Determine if it can handle a given URL/page
    2. Extract a JobOffer from the page and score its confidence

    Plugins are registered once and reused, so they must not keep state
    between calls.
    """

    def __init__(self, name: str, domains: Optional[Iterable[str]] = None, priority: int = 50):
        """
        Initialize plugin.

        Args:
            name: Plugin name (e.g., 'linkedin', 'indeed', 'generic')
            domains: Domains this plugin recognises
            priority: Priority (higher = tried first, default 50)
        """
        self.name = name
        self.domains = list(domains or [])
        self.priority = priority
        self.logger = logging.getLogger(f"{__name__}.{name}")

    @abstractmethod
    def can_handle(self, url: str, soup: BeautifulSoup) -> bool:
        """
        Check if this plugin can handle the given page.

        Args:
            url: Source URL
            soup: Parsed page

        Returns:
            True if this plugin should try the page
        """
        pass

    @abstractmethod
    def extract(self, url: str, soup: BeautifulSoup) -> ExtractionOutcome:
        """
        Extract a job offer from the page.

        Args:
            url: Source URL
            soup: Parsed page

        Returns:
            ExtractionOutcome with the offer and its confidence
        """
        pass

    def handles_domain(self, url: str) -> bool:
        """True if the URL's host is one of (or a subdomain of) self.domains"""
        return domain_matches(get_domain(url), self.domains)

    def get_soup(self, html: str) -> BeautifulSoup:
        """Helper to create BeautifulSoup instance"""
        return BeautifulSoup(html, 'lxml')

    def new_offer(self, url: str) -> JobOffer:
        return JobOffer(source_url=url, source_domain=get_domain(url))

    def finish(self, offer: JobOffer, confidence: float) -> ExtractionOutcome:
        """Success when the offer is usable, else the canonical empty result."""
        if not offer.is_usable():
            self.logger.debug(f"[{self.name}] Missing title or description for {offer.source_url[:80]}")
            return create_empty_result(self.name)
        return create_success_result(self.name, offer, confidence)

    def select_one(self, soup: BeautifulSoup, selector: str) -> Optional[Tag]:
        try:
            return soup.select_one(selector)
        except SelectorSyntaxError as e:
            self.logger.debug(f"[{self.name}] Invalid selector {selector!r}: {e}")
            return None

    def select(self, soup: BeautifulSoup, selector: str) -> List[Tag]:
        try:
            return soup.select(selector)
        except SelectorSyntaxError as e:
            self.logger.debug(f"[{self.name}] Invalid selector {selector!r}: {e}")
            return []

    def select_text(
        self,
        soup: BeautifulSoup,
        selectors: Iterable[str],
        min_length: int = 0,
        max_length: Optional[int] = None
    ) -> Optional[str]:
        """
        First text from a selector cascade with min_length < len < max_length.

        Only the first element each selector matches is considered.
        """
        for selector in selectors:
            element = self.select_one(soup, selector)
            if element is None:
                continue
            text = clean_text(element.get_text())
            if len(text) > min_length and (max_length is None or len(text) < max_length):
                return text
        return None

    def select_all_texts(self, soup: BeautifulSoup, selectors: Iterable[str]) -> List[str]:
        """Non-empty texts of every element matched by every selector, in order"""
        texts = []
        for selector in selectors:
            for element in self.select(soup, selector):
                text = clean_text(element.get_text())
                if text:
                    texts.append(text)
        return texts

    def select_markdown(
        self,
        soup: BeautifulSoup,
        selectors: Iterable[str],
        min_length: int = DESCRIPTION_MIN_LENGTH
    ) -> Optional[str]:
        """First element of a selector cascade whose Markdown rendering is long enough"""
        for selector in selectors:
            element = self.select_one(soup, selector)
            if element is None:
                continue
            markdown = html_to_markdown(element)
            if len(markdown) > min_length:
                return markdown
            self.logger.debug(f"[{self.name}] Description from {selector!r} too short ({len(markdown)} chars)")
        return None

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name}, priority={self.priority})>"
