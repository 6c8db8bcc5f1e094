"""
Job page classifier.

Decides from the URL and the page whether extraction is worth attempting.
Known job boards are judged on their URL alone; other sites get a heuristic
score.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from core.config import ExtractionConfig, get_extraction_config
from core.normalize import domain_matches, get_domain
from .jsonld import has_job_posting

logger = logging.getLogger(__name__)

# Heuristic weights
URL_KEYWORD_WEIGHT = 1
TITLE_KEYWORD_BONUS = 2
JOB_ELEMENT_BONUS = 2
JSONLD_BONUS = 5
JOB_PAGE_THRESHOLD = 3


class JobPageClassifier:
    """Classifies pages as job postings or not."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or get_extraction_config()

    def classify(self, url: str, soup: Optional[BeautifulSoup]) -> bool:
        if self.is_known_job_site(url):
            is_job = self.matches_job_path(url)
            logger.debug(f"Known job site {get_domain(url)}: job page={is_job}")
            return is_job

        score = self.score(url, soup)
        logger.debug(f"Job page score for {url[:80]}: {score}")
        return score >= JOB_PAGE_THRESHOLD

    def is_known_job_site(self, url: str) -> bool:
        return domain_matches(get_domain(url), self.config.job_site_domains)

    def matches_job_path(self, url: str) -> bool:
        """Path indicator or job URL pattern present."""
        lower = url.lower()
        if any(indicator in lower for indicator in self.config.path_indicators):
            return True
        return any(pattern.search(url) for pattern in self.config.url_patterns)

    def score(self, url: str, soup: Optional[BeautifulSoup]) -> int:
        """
        Heuristic score for an unknown site.

        - one point per job keyword in the URL
        - +2 if the document title carries a job keyword
        - +2 if a job-related element is present
        - +5 if a JSON-LD JobPosting is embedded
        """
        lower_url = url.lower()
        score = URL_KEYWORD_WEIGHT * sum(
            1 for keyword in self.config.url_keywords if keyword in lower_url
        )

        if soup is None:
            return score

        title = soup.title.get_text().lower() if soup.title else ''
        if title and any(keyword in title for keyword in self.config.title_keywords):
            score += TITLE_KEYWORD_BONUS

        if self._has_job_elements(soup):
            score += JOB_ELEMENT_BONUS

        if has_job_posting(soup):
            score += JSONLD_BONUS

        return score

    def _has_job_elements(self, soup: BeautifulSoup) -> bool:
        for selector in self.config.job_element_selectors:
            try:
                if soup.select_one(selector) is not None:
                    return True
            except SelectorSyntaxError as e:
                logger.debug(f"Invalid job element selector {selector!r}: {e}")
        return False


def is_job_page(url: str, soup: Optional[BeautifulSoup]) -> bool:
    """Check whether a page looks like a single job posting."""
    return JobPageClassifier().classify(url, soup)
