"""
Indeed extraction plugin.

Handles job pages on every Indeed country site (indeed.com, indeed.fr,
indeed.co.uk, de.indeed.com...).
"""
import re
from typing import Dict, Optional

from bs4 import BeautifulSoup

from core.normalize import get_domain
from pipeline.heuristics import detect_remote_type, extract_skills_from_text, match_keyword_rules, parse_salary
from pipeline.models import JobOffer, Salary
from .base import ExtractionOutcome, ExtractionPlugin, SUBSTANTIAL_DESCRIPTION_LENGTH

TITLE_SELECTORS = [
    'h1.jobsearch-JobInfoHeader-title',
    '[data-testid="jobsearch-JobInfoHeader-title"]',
    'h1[class*="JobTitle"]',
    '.jobsearch-JobInfoHeader-title-container h1',
    'h1',
]

COMPANY_SELECTORS = [
    '[data-testid="inlineHeader-companyName"]',
    '[data-testid="jobsearch-CompanyInfoHeader-companyName"]',
    '.jobsearch-InlineCompanyRating-companyHeader a',
    '.jobsearch-CompanyInfoWithoutHeaderImage a',
    '[class*="companyName"]',
    '.icl-u-lg-mr--sm a',
]

LOCATION_SELECTORS = [
    '[data-testid="inlineHeader-companyLocation"]',
    '[data-testid="jobsearch-CompanyInfoHeader-location"]',
    '.jobsearch-InlineCompanyRating-companyHeader + div',
    '.jobsearch-JobInfoHeader-subtitle > div:last-child',
    '[class*="companyLocation"]',
]

DESCRIPTION_SELECTORS = [
    '#jobDescriptionText',
    '[data-testid="jobDescriptionText"]',
    '.jobsearch-jobDescriptionText',
    '.jobsearch-JobComponent-description',
    '[class*="jobDescription"]',
]

SALARY_SELECTORS = [
    '[data-testid="jobsearch-JobMetadataHeader-salarySnippet"]',
    '.jobsearch-JobMetadataHeader-item .attribute_snippet',
    '#salaryInfoAndJobType',
    '[class*="salary"]',
    '[class*="salaire"]',
]

METADATA_SELECTORS = [
    '.jobsearch-JobMetadataHeader-item',
    '[data-testid="jobsearch-JobMetadataHeader-item"]',
    '#salaryInfoAndJobType span',
    '.jobMetaDataGroup span',
]

# "New" badge rendered inside the title heading
NEW_BADGE = re.compile(r'^(new|nouveau)\b\s*', re.IGNORECASE)

CONTRACT_RULES = [
    (('cdi', 'permanent', 'full-time'), 'CDI'),
    (('cdd', 'temporary', 'contract'), 'CDD'),
    (('intérim', 'interim'), 'Intérim'),
    (('stage', 'intern'), 'Stage'),
    (('apprenti', 'alternance'), 'Alternance'),
]


class IndeedPlugin(ExtractionPlugin):
    """Plugin for Indeed job pages"""

    def __init__(self):
        super().__init__(name="indeed", domains=['indeed.com', 'indeed.fr'], priority=10)

    def can_handle(self, url: str, soup: BeautifulSoup) -> bool:
        # Any Indeed country site: indeed.<tld> or <country>.indeed.<tld>
        return 'indeed' in get_domain(url).split('.')

    def extract(self, url: str, soup: BeautifulSoup) -> ExtractionOutcome:
        offer = self.new_offer(url)

        offer.title = self._extract_title(soup)
        offer.company = self.select_text(soup, COMPANY_SELECTORS, min_length=1)
        offer.location = self.select_text(soup, LOCATION_SELECTORS, min_length=2)
        offer.description = self.select_markdown(soup, DESCRIPTION_SELECTORS)

        if not offer.title or not offer.description:
            return self.finish(offer, 0.0)

        offer.salary = self._extract_salary(soup)

        details = self._extract_job_details(soup)
        offer.contract_type = details.get('contract_type')
        offer.remote_type = details.get('remote_type') or detect_remote_type(offer.description)

        offer.skills = extract_skills_from_text(offer.description) or None

        return self.finish(offer, self._calculate_confidence(offer))

    def _extract_title(self, soup: BeautifulSoup) -> Optional[str]:
        title = self.select_text(soup, TITLE_SELECTORS, min_length=2)
        if not title:
            return None
        return NEW_BADGE.sub('', title).strip() or None

    def _extract_salary(self, soup: BeautifulSoup) -> Optional[Salary]:
        for selector in SALARY_SELECTORS:
            element = self.select_one(soup, selector)
            if element is None:
                continue
            salary = parse_salary(element.get_text())
            if salary:
                return salary
        return None

    def _extract_job_details(self, soup: BeautifulSoup) -> Dict[str, str]:
        """Contract and remote labels from the metadata header; later items win."""
        details: Dict[str, str] = {}

        for text in self.select_all_texts(soup, METADATA_SELECTORS):
            contract = match_keyword_rules(text, CONTRACT_RULES)
            if contract:
                details['contract_type'] = contract

            lower = text.lower()
            if 'télétravail' in lower or 'remote' in lower:
                if 'hybrid' in lower or 'hybride' in lower or 'partiel' in lower:
                    details['remote_type'] = 'hybrid'
                else:
                    details['remote_type'] = 'remote'

        return details

    @staticmethod
    def _calculate_confidence(offer: JobOffer) -> float:
        score = 0.5  # Indeed is a trusted source

        if offer.title:
            score += 0.15
        if offer.company:
            score += 0.1
        if offer.description and len(offer.description) > SUBSTANTIAL_DESCRIPTION_LENGTH:
            score += 0.15
        if offer.location:
            score += 0.05
        if offer.salary:
            score += 0.05

        return min(score, 1.0)
