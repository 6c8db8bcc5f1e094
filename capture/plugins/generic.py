"""
Generic extraction plugin.

Provides fallback extraction for any website, in order of reliability:
1. JSON-LD JobPosting structured data
2. OpenGraph / Twitter / meta description tags
3. Common job page selectors and the document title
This is the default plugin when no site-specific plugin matches.
"""
import re
from typing import Optional

from bs4 import BeautifulSoup

from core.normalize import clean_text
from pipeline.heuristics import detect_remote_type, extract_skills_from_text
from pipeline.jsonld import apply_job_posting, find_job_posting
from pipeline.models import JobOffer
from .base import ExtractionOutcome, ExtractionPlugin, SUBSTANTIAL_DESCRIPTION_LENGTH

# Structured data is trusted regardless of which other fields are present
JSONLD_CONFIDENCE = 0.9

CONFIDENCE_WEIGHTS = {
    'title': 0.25,
    'description': 0.25,
    'company': 0.15,
    'location': 0.10,
    'salary': 0.10,
    'skills': 0.10,
    'contract_type': 0.05,
}

TITLE_SELECTORS = [
    'h1[class*="job-title"]',
    'h1[class*="jobtitle"]',
    'h1[class*="position"]',
    '[class*="job-title"] h1',
    '[class*="job-header"] h1',
    '[data-testid*="job-title"]',
    'h1',
]

DESCRIPTION_SELECTORS = [
    '[class*="job-description"]',
    '[class*="jobdescription"]',
    '[class*="description-content"]',
    '[data-testid*="job-description"]',
    '[id*="job-description"]',
    'article',
    'main',
]

COMPANY_SELECTORS = [
    '[class*="company-name"]',
    '[class*="companyname"]',
    '[class*="employer"]',
    '[data-testid*="company"]',
    '[class*="hiring-organization"]',
]

LOCATION_SELECTORS = [
    '[class*="job-location"]',
    '[class*="joblocation"]',
    '[class*="location"]',
    '[data-testid*="location"]',
    '[class*="address"]',
]

# "Backend Engineer | Acme" / "Backend Engineer - Acme"; hyphenated words are kept
TITLE_SUFFIX_SEPARATOR = re.compile(r'\s*\|\s*|\s+[-–—]\s+')


class GenericPlugin(ExtractionPlugin):
    """Generic fallback plugin for job extraction"""

    def __init__(self):
        super().__init__(name="generic", priority=0)  # Lowest priority - fallback only

    def can_handle(self, url: str, soup: BeautifulSoup) -> bool:
        """Generic plugin can always handle (as fallback)"""
        return True

    def extract(self, url: str, soup: BeautifulSoup) -> ExtractionOutcome:
        """
        Extract a job offer using structured data, meta tags and common patterns.

        Each step only fills fields the previous steps left empty.

        Returns:
            ExtractionOutcome with the offer
        """
        offer = self.new_offer(url)

        # PRIORITY 1: JSON-LD
        job_posting = find_job_posting(soup)
        if job_posting:
            self.logger.debug(f"[generic] Found JSON-LD JobPosting for {url[:80]}")
            apply_job_posting(offer, job_posting)

        # PRIORITY 2: meta tags
        self._apply_meta_tags(offer, soup)

        # PRIORITY 3: page selectors
        if not offer.title:
            offer.title = self._extract_title(soup)
        if not offer.description:
            offer.description = self.select_markdown(soup, DESCRIPTION_SELECTORS)
        if not offer.company:
            offer.company = self.select_text(soup, COMPANY_SELECTORS, min_length=1, max_length=100)
        if not offer.location:
            offer.location = self.select_text(soup, LOCATION_SELECTORS, min_length=1, max_length=200)

        if offer.description and not offer.skills:
            offer.skills = extract_skills_from_text(offer.description) or None

        if not offer.remote_type or offer.remote_type == 'unknown':
            offer.remote_type = detect_remote_type(f"{offer.title or ''} {offer.description or ''}")

        if job_posting:
            confidence = JSONLD_CONFIDENCE
        else:
            confidence = self._calculate_confidence(offer)

        return self.finish(offer, confidence)

    def _apply_meta_tags(self, offer: JobOffer, soup: BeautifulSoup):
        og_title = self._meta_content(soup, 'meta[property="og:title"]')
        og_description = self._meta_content(soup, 'meta[property="og:description"]')
        og_site_name = self._meta_content(soup, 'meta[property="og:site_name"]')
        twitter_title = self._meta_content(soup, 'meta[name="twitter:title"]')
        twitter_description = self._meta_content(soup, 'meta[name="twitter:description"]')
        meta_description = self._meta_content(soup, 'meta[name="description"]')

        if not offer.title and (og_title or twitter_title):
            offer.title = og_title or twitter_title

        description = og_description or twitter_description or meta_description
        if not offer.description and description:
            offer.description = description

        if not offer.company and og_site_name:
            offer.company = og_site_name

    def _meta_content(self, soup: BeautifulSoup, selector: str) -> Optional[str]:
        element = self.select_one(soup, selector)
        if element is None:
            return None
        return clean_text(element.get('content')) or None

    def _extract_title(self, soup: BeautifulSoup) -> Optional[str]:
        title = self.select_text(soup, TITLE_SELECTORS, min_length=3, max_length=200)
        if title:
            return title

        # Fall back to the document title without its " | Company" suffix
        if soup.title:
            doc_title = clean_text(soup.title.get_text())
            if doc_title:
                return clean_text(TITLE_SUFFIX_SEPARATOR.split(doc_title)[0]) or None

        return None

    @staticmethod
    def _calculate_confidence(offer: JobOffer) -> float:
        score = 0.0

        if offer.title:
            score += CONFIDENCE_WEIGHTS['title']
        if offer.description and len(offer.description) > SUBSTANTIAL_DESCRIPTION_LENGTH:
            score += CONFIDENCE_WEIGHTS['description']
        if offer.company:
            score += CONFIDENCE_WEIGHTS['company']
        if offer.location:
            score += CONFIDENCE_WEIGHTS['location']
        if offer.salary:
            score += CONFIDENCE_WEIGHTS['salary']
        if offer.skills:
            score += CONFIDENCE_WEIGHTS['skills']
        if offer.contract_type:
            score += CONFIDENCE_WEIGHTS['contract_type']

        return min(score, 1.0)
