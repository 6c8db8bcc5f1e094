"""
Welcome to the Jungle extraction plugin.

WTTJ pages are built with styled-components, so many hooks are either
data-testid attributes or partial class names ("sc-", "JobHeader"...).
"""
import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from core.markdown import html_to_markdown
from core.normalize import clean_text
from pipeline.heuristics import (
    detect_remote_type,
    experience_from_years,
    extract_skills_from_text,
    match_keyword_rules,
    parse_salary,
    parse_years_of_experience,
)
from pipeline.models import JobOffer
from .base import ExtractionOutcome, ExtractionPlugin

TITLE_SELECTORS = [
    'h1[class*="JobHeader"]',
    '[data-testid="job-header-title"]',
    'h1[class*="sc-"]',
    'header h1',
    'h1',
]

COMPANY_SELECTORS = [
    '[data-testid="job-header-company-name"]',
    '[class*="CompanyName"]',
    'a[href*="/companies/"]',
    'header a[class*="sc-"]',
]

LOCATION_SELECTORS = [
    '[data-testid="job-header-location"]',
    '[class*="Location"]',
    'header [class*="sc-"] span',
]

DESCRIPTION_SELECTORS = [
    '[data-testid="job-section-description"]',
    '[class*="JobDescription"]',
    '[class*="sc-"] div[class*="sc-"] p',
    'article',
    'main section',
]

JOB_SECTIONS_SELECTOR = '[data-testid^="job-section-"]'

INFO_SELECTORS = [
    '[data-testid*="job-info"]',
    '[class*="JobInfo"]',
    'header ul li',
    'header div[class*="sc-"]',
]

SKILL_SELECTORS = [
    '[data-testid="job-section-stack"] li',
    '[data-testid="job-section-skills"] li',
    '[class*="TechStack"] span',
    '[class*="Skill"]',
]

LOCATION_HINTS = (',', 'Paris', 'Lyon', 'France')
POSTAL_CODE = re.compile(r'^\d{5}')
SALARY_HINT = re.compile(r'\d+k')

CONTRACT_RULES = [
    (('cdi',), 'CDI'),
    (('cdd',), 'CDD'),
    (('stage',), 'Stage'),
    (('alternance', 'apprentissage'), 'Alternance'),
    (('freelance', 'indépendant'), 'Freelance'),
]

SECTION_MIN_LENGTH = 20
COMBINED_DESCRIPTION_MIN_LENGTH = 100


class WelcomeToTheJunglePlugin(ExtractionPlugin):
    """Plugin for Welcome to the Jungle job pages"""

    def __init__(self):
        super().__init__(name="welcometothejungle", domains=['welcometothejungle.com'], priority=10)

    def can_handle(self, url: str, soup: BeautifulSoup) -> bool:
        return self.handles_domain(url)

    def extract(self, url: str, soup: BeautifulSoup) -> ExtractionOutcome:
        offer = self.new_offer(url)

        offer.title = self.select_text(soup, TITLE_SELECTORS, min_length=2, max_length=200)
        offer.company = self.select_text(soup, COMPANY_SELECTORS, min_length=1, max_length=100)
        offer.location = self._extract_location(soup)
        offer.description = self._extract_description(soup)

        if not offer.title or not offer.description:
            return self.finish(offer, 0.0)

        metadata = self._extract_metadata(soup)
        offer.contract_type = metadata.get('contract_type')
        offer.salary = metadata.get('salary')
        offer.experience = metadata.get('experience')
        offer.remote_type = metadata.get('remote_type') or detect_remote_type(offer.description)

        offer.skills = self._extract_skills(soup) or extract_skills_from_text(offer.description) or None

        return self.finish(offer, self._calculate_confidence(offer))

    def _extract_location(self, soup: BeautifulSoup) -> Optional[str]:
        for selector in LOCATION_SELECTORS:
            for element in self.select(soup, selector):
                text = clean_text(element.get_text())
                if not text:
                    continue
                if any(hint in text for hint in LOCATION_HINTS) or POSTAL_CODE.match(text):
                    return text
        return None

    def _extract_description(self, soup: BeautifulSoup) -> Optional[str]:
        description = self.select_markdown(soup, DESCRIPTION_SELECTORS)
        if description:
            return description

        # Stitch the job-section-* blocks together
        blocks = [html_to_markdown(section) for section in self.select(soup, JOB_SECTIONS_SELECTOR)]
        combined = '\n\n'.join(block for block in blocks if len(block) > SECTION_MIN_LENGTH)
        if len(combined) > COMBINED_DESCRIPTION_MIN_LENGTH:
            return combined
        return None

    def _extract_metadata(self, soup: BeautifulSoup) -> Dict:
        """
        Classify header info items.

        Every item is scanned; a later item matching a category overwrites
        what an earlier one set.
        """
        metadata: Dict = {}

        for text in self.select_all_texts(soup, INFO_SELECTORS):
            lower = text.lower()

            contract = match_keyword_rules(text, CONTRACT_RULES)
            if contract:
                metadata['contract_type'] = contract

            if '€' in lower or 'eur' in lower or SALARY_HINT.search(lower):
                salary = parse_salary(text)
                if salary:
                    metadata['salary'] = salary

            years = parse_years_of_experience(text)
            if years is not None:
                metadata['experience'] = experience_from_years(years)

            if 'télétravail' in lower or 'remote' in lower:
                if '100%' in lower or 'full' in lower:
                    metadata['remote_type'] = 'remote'
                else:
                    metadata['remote_type'] = 'hybrid'
            elif 'présentiel' in lower or 'sur site' in lower:
                metadata['remote_type'] = 'onsite'

        return metadata

    def _extract_skills(self, soup: BeautifulSoup) -> List[str]:
        skills = []
        for text in self.select_all_texts(soup, SKILL_SELECTORS):
            if 1 < len(text) < 50 and text not in skills:
                skills.append(text)
        return skills

    @staticmethod
    def _calculate_confidence(offer: JobOffer) -> float:
        score = 0.6  # WTTJ pages are well structured

        if offer.title:
            score += 0.1
        if offer.company:
            score += 0.1
        if offer.description and len(offer.description) > 200:
            score += 0.1
        if offer.location:
            score += 0.05
        if offer.skills:
            score += 0.05

        return min(score, 1.0)
