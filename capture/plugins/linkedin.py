"""
LinkedIn extraction plugin.

Handles job detail pages under linkedin.com/jobs/, both the public
(logged-out) top card and the logged-in unified top card layouts.
"""
import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from core.normalize import clean_text
from pipeline.heuristics import (
    EXPERIENCE_CONFIRMED,
    EXPERIENCE_JUNIOR,
    EXPERIENCE_SENIOR,
    detect_remote_type,
    extract_skills_from_text,
    match_keyword_rules,
    parse_relative_date,
)
from pipeline.models import JobOffer
from .base import ExtractionOutcome, ExtractionPlugin, SUBSTANTIAL_DESCRIPTION_LENGTH

TITLE_SELECTORS = [
    'h1.t-24.t-bold.inline',
    'h1.topcard__title',
    'h1.job-details-jobs-unified-top-card__job-title',
    '.jobs-unified-top-card__job-title',
    'h1[class*="job-title"]',
    '.top-card-layout__title',
    'h1',
]

COMPANY_SELECTORS = [
    '.topcard__org-name-link',
    '.job-details-jobs-unified-top-card__company-name',
    '.jobs-unified-top-card__company-name',
    'a[class*="company-name"]',
    '.top-card-layout__card a[data-tracking-control-name="public_jobs_topcard-org-name"]',
    'a[data-tracking-control-name*="company"]',
]

LOCATION_SELECTORS = [
    '.topcard__flavor--bullet',
    '.job-details-jobs-unified-top-card__bullet',
    '.jobs-unified-top-card__bullet',
    '.top-card-layout__entity-info-container .topcard__flavor:not(.topcard__flavor--bullet)',
    'span[class*="location"]',
]

DESCRIPTION_SELECTORS = [
    '.show-more-less-html__markup',
    '.jobs-description__content',
    '.jobs-description-content__text',
    '.description__text',
    '[class*="job-description"]',
    '.jobs-box__html-content',
]

INSIGHT_SELECTORS = [
    '.job-details-jobs-unified-top-card__job-insight',
    '.jobs-unified-top-card__job-insight',
    '.description__job-criteria-item',
    '.job-criteria__item',
]

SKILL_SELECTORS = [
    '.job-details-skill-match-modal__skill-name',
    '.job-details-how-you-match__skills-item',
    '[class*="skill-match"] span',
]

POSTED_DATE_SELECTORS = [
    '.posted-time-ago__text',
    '.jobs-unified-top-card__posted-date',
    '[class*="posted-date"]',
]

# "2 weeks ago" sits next to the location in the top card
RELATIVE_TIME = re.compile(r'\d+\s*(week|day|hour|jour|semaine)', re.IGNORECASE)

CONTRACT_RULES = [
    (('cdi', 'full-time', 'temps plein'), 'CDI'),
    (('cdd', 'contract', 'temporary'), 'CDD'),
    (('intern', 'stage'), 'Stage'),
    (('freelance',), 'Freelance'),
]

SENIORITY_RULES = [
    (('entry', 'junior', 'débutant'), EXPERIENCE_JUNIOR),
    (('mid-senior', 'confirmé'), EXPERIENCE_CONFIRMED),
    (('senior', 'expert'), EXPERIENCE_SENIOR),
]


class LinkedInPlugin(ExtractionPlugin):
    """Plugin for LinkedIn job pages"""

    def __init__(self):
        super().__init__(name="linkedin", domains=['linkedin.com'], priority=10)

    def can_handle(self, url: str, soup: BeautifulSoup) -> bool:
        return self.handles_domain(url) and '/jobs/' in url

    def extract(self, url: str, soup: BeautifulSoup) -> ExtractionOutcome:
        offer = self.new_offer(url)

        offer.title = self.select_text(soup, TITLE_SELECTORS, min_length=2)
        offer.company = self.select_text(soup, COMPANY_SELECTORS, min_length=1)
        offer.location = self._extract_location(soup)
        offer.description = self.select_markdown(soup, DESCRIPTION_SELECTORS)

        if not offer.title or not offer.description:
            return self.finish(offer, 0.0)

        details = self._extract_job_details(soup)
        offer.contract_type = details.get('contract_type')
        offer.experience = details.get('experience')
        offer.remote_type = details.get('remote_type') or detect_remote_type(offer.description)

        offer.skills = self._extract_skills(soup) or extract_skills_from_text(offer.description) or None
        offer.published_at = self._extract_posted_date(soup)

        return self.finish(offer, self._calculate_confidence(offer))

    def _extract_location(self, soup: BeautifulSoup) -> Optional[str]:
        for selector in LOCATION_SELECTORS:
            for element in self.select(soup, selector):
                text = clean_text(element.get_text())
                if not text or not (',' in text or len(text) > 3):
                    continue
                if RELATIVE_TIME.search(text):
                    continue
                return text
        return None

    def _extract_job_details(self, soup: BeautifulSoup) -> Dict[str, str]:
        """
        Classify insight/criteria items into contract, remote and seniority.

        Items are scanned in page order and a later matching item overwrites
        an earlier one.
        """
        details: Dict[str, str] = {}

        for text in self.select_all_texts(soup, INSIGHT_SELECTORS):
            contract = match_keyword_rules(text, CONTRACT_RULES)
            if contract:
                details['contract_type'] = contract

            remote = self._classify_remote(text)
            if remote:
                details['remote_type'] = remote

            experience = match_keyword_rules(text, SENIORITY_RULES)
            if experience:
                details['experience'] = experience

        return details

    @staticmethod
    def _classify_remote(text: str) -> Optional[str]:
        lower = text.lower()
        if 'remote' in lower or 'télétravail' in lower:
            if 'hybrid' in lower or 'hybride' in lower:
                return 'hybrid'
            return 'remote'
        if 'on-site' in lower or 'sur site' in lower:
            return 'onsite'
        return None

    def _extract_skills(self, soup: BeautifulSoup) -> List[str]:
        skills = []
        for text in self.select_all_texts(soup, SKILL_SELECTORS):
            if 1 < len(text) < 50 and text not in skills:
                skills.append(text)
        return skills

    def _extract_posted_date(self, soup: BeautifulSoup) -> Optional[str]:
        text = self.select_text(soup, POSTED_DATE_SELECTORS)
        if not text:
            return None
        return parse_relative_date(text)

    @staticmethod
    def _calculate_confidence(offer: JobOffer) -> float:
        score = 0.5  # LinkedIn is a trusted source

        if offer.title:
            score += 0.15
        if offer.company:
            score += 0.1
        if offer.description and len(offer.description) > SUBSTANTIAL_DESCRIPTION_LENGTH:
            score += 0.15
        if offer.location:
            score += 0.05
        if offer.skills:
            score += 0.05

        return min(score, 1.0)
