"""
Text heuristics.

Pure functions over scraped strings: salary parsing, remote-work detection,
skill vocabulary matching, relative date resolution and experience buckets.
"""

import re
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from core.config import get_extraction_config
from .models import Salary

logger = logging.getLogger(__name__)

# (keywords, label) tables; the first rule with a keyword present wins
KeywordRules = Sequence[Tuple[Tuple[str, ...], str]]

REMOTE_TYPE_RULES: KeywordRules = [
    (('full remote', '100% remote', 'télétravail complet', '100% télétravail',
      'fully remote', 'télétravail total'), 'remote'),
    (('hybrid', 'hybride', 'télétravail partiel'), 'hybrid'),
    (('on-site', 'sur site', 'présentiel'), 'onsite'),
]

SALARY_CURRENCY_RULES: KeywordRules = [
    (('chf',), 'CHF'),
    (('£',), 'GBP'),
    (('$',), 'USD'),
]

SALARY_PERIOD_RULES: KeywordRules = [
    (('/m', 'mois'), 'month'),
    (('/j', 'jour'), 'day'),
    (('/h', 'heure'), 'hour'),
]

# The currency symbol may sit on each bound: '45k€-55k€'
SALARY_RANGE = re.compile(r'(\d+)(k?)[€$£]?[-–à](\d+)(k?)')
SALARY_SINGLE = re.compile(r'(\d+)k?[€$£]')
THOUSANDS_SEPARATOR = re.compile(r'(?<=\d)[,.](?=\d{3}\b)')

RELATIVE_DATE = re.compile(r'(\d+)\s*(hour|day|week|month|jour|semaine|mois|heure)')
RELATIVE_UNITS = {
    'hour': 'hours',
    'heure': 'hours',
    'day': 'days',
    'jour': 'days',
    'week': 'weeks',
    'semaine': 'weeks',
    'month': 'months',
    'mois': 'months',
}

YEARS_OF_EXPERIENCE = re.compile(r'(\d+)\s*(an|année|year)')

EXPERIENCE_JUNIOR = 'Junior (0-2 ans)'
EXPERIENCE_CONFIRMED = 'Confirmé (3-5 ans)'
EXPERIENCE_SENIOR = 'Senior (5+ ans)'


def match_keyword_rules(text: Optional[str], rules: KeywordRules) -> Optional[str]:
    """Return the label of the first rule with a keyword in text (case-insensitive)."""
    if not text:
        return None
    lower = text.lower()
    for keywords, label in rules:
        if any(keyword in lower for keyword in keywords):
            return label
    return None


def parse_salary(text: Optional[str]) -> Optional[Salary]:
    """
    Parse a free-text salary such as '45k-55k€', '3 000 €/mois' or '£40,000'.

    Ranges are tried before single amounts. A 'k' on the matched amount
    multiplies values below 1000 by 1000. Currency defaults to EUR and
    period to year.

    Returns:
        Salary, or None when no amount is found
    """
    if not text:
        return None

    normalized = re.sub(r'\s+', '', text.lower())
    normalized = THOUSANDS_SEPARATOR.sub('', normalized)

    range_match = SALARY_RANGE.search(normalized)
    if range_match:
        amount_text = range_match.group(0)
        low = _scale_thousands(int(range_match.group(1)), amount_text)
        high = _scale_thousands(int(range_match.group(3)), amount_text)
    else:
        single_match = SALARY_SINGLE.search(normalized)
        if not single_match:
            return None
        amount_text = single_match.group(0)
        low = high = _scale_thousands(int(single_match.group(1)), amount_text)

    return Salary(
        min=low,
        max=high,
        currency=match_keyword_rules(normalized, SALARY_CURRENCY_RULES) or 'EUR',
        period=match_keyword_rules(normalized, SALARY_PERIOD_RULES) or 'year',
    )


def _scale_thousands(value: int, amount_text: str) -> int:
    if value < 1000 and 'k' in amount_text:
        return value * 1000
    return value


def detect_remote_type(text: Optional[str]) -> str:
    """Classify text as 'remote', 'hybrid', 'onsite' or 'unknown'."""
    return match_keyword_rules(text, REMOTE_TYPE_RULES) or 'unknown'


def extract_skills_from_text(text: Optional[str], vocabulary: Optional[Iterable[str]] = None) -> List[str]:
    """
    Find vocabulary skills mentioned in text.

    Matching is a case-insensitive substring test; results follow vocabulary
    order without duplicates.
    """
    if not text:
        return []
    if vocabulary is None:
        vocabulary = get_extraction_config().skills

    lower = text.lower()
    found = []
    seen = set()
    for skill in vocabulary:
        key = skill.lower()
        if key in seen:
            continue
        if key in lower:
            found.append(skill)
            seen.add(key)
    return found


def parse_relative_date(text: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Resolve '3 days ago' / 'il y a 2 semaines' to a YYYY-MM-DD date.

    Text without a recognised offset resolves to today.
    """
    if now is None:
        now = datetime.now()

    match = RELATIVE_DATE.search(text.lower()) if text else None
    if not match:
        if text:
            logger.debug(f"Unrecognised relative date: {text!r}")
        return now.strftime('%Y-%m-%d')

    amount = int(match.group(1))
    delta = relativedelta(**{RELATIVE_UNITS[match.group(2)]: amount})
    return (now - delta).strftime('%Y-%m-%d')


def parse_years_of_experience(text: Optional[str]) -> Optional[int]:
    """Extract '<n> ans' / '<n> années' / '<n> years' as an integer."""
    if not text:
        return None
    match = YEARS_OF_EXPERIENCE.search(text.lower())
    if not match:
        return None
    return int(match.group(1))


def experience_from_years(years: int) -> str:
    """Bucket a number of years of experience."""
    if years <= 2:
        return EXPERIENCE_JUNIOR
    if years <= 5:
        return EXPERIENCE_CONFIRMED
    return EXPERIENCE_SENIOR
