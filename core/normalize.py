"""
Normalization helpers shared by the extraction plugins.

- Whitespace cleanup of scraped text
- Source domain detection and allow-list matching
- Contract type and salary period normalization for structured data
"""

import re
from typing import Any, Iterable, Optional, Union
from urllib.parse import urlparse


# Ordered (keywords, label) rules for schema.org employmentType values.
# First match wins; unmatched values pass through unchanged.
CONTRACT_TYPE_RULES = [
    (('full', 'permanent'), 'CDI'),
    (('freelance', 'contractor'), 'Freelance'),
    (('temporary', 'contract'), 'CDD'),
    (('intern', 'stage'), 'Stage'),
    (('part-time', 'partiel'), 'Temps partiel'),
    (('apprenti',), 'Alternance'),
]

# Ordered (keywords, period) rules for salary unit text, default 'year'
SALARY_PERIOD_RULES = [
    (('hour', 'heure'), 'hour'),
    (('day', 'jour'), 'day'),
    (('month', 'mois'), 'month'),
]


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace runs to single spaces and strip."""
    if not text:
        return ''
    return re.sub(r'\s+', ' ', text).strip()


def get_domain(url: str) -> str:
    """Return the lower-cased host of a URL without a leading 'www.'."""
    try:
        host = urlparse(url).hostname or ''
    except (ValueError, AttributeError):
        return ''
    host = host.lower()
    if host.startswith('www.'):
        host = host[4:]
    return host


def domain_matches(domain: str, candidates: Iterable[str]) -> bool:
    """True if domain equals one of the candidates or is a subdomain of one."""
    if not domain:
        return False
    for candidate in candidates:
        candidate = candidate.lower()
        if candidate.startswith('www.'):
            candidate = candidate[4:]
        if domain == candidate or domain.endswith('.' + candidate):
            return True
    return False


def normalize_contract_type(employment_type: Any) -> Optional[str]:
    """
    Map a structured-data employment type onto a contract label.

    Lists (schema.org allows several values) are normalized on their first
    entry.
    """
    if isinstance(employment_type, (list, tuple)):
        employment_type = next((t for t in employment_type if t), None)
    if not employment_type:
        return None

    raw = str(employment_type).strip()
    # schema.org uses FULL_TIME, PART_TIME...
    lower = re.sub(r'[\s_]+', '-', raw.lower())

    if lower == 'cdi':
        return 'CDI'
    if lower == 'cdd':
        return 'CDD'
    for keywords, label in CONTRACT_TYPE_RULES:
        if any(k in lower for k in keywords):
            return label
    return raw


def normalize_salary_period(unit_text: Optional[str]) -> str:
    """Map a salary unit ('HOUR', 'per month', 'jour'...) onto a period."""
    if not unit_text:
        return 'year'
    lower = str(unit_text).lower()
    for keywords, period in SALARY_PERIOD_RULES:
        if any(k in lower for k in keywords):
            return period
    return 'year'


def to_number(value: Any) -> Optional[Union[int, float]]:
    """Coerce a JSON number or numeric string to int/float, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        cleaned = re.sub(r'[\s,]', '', value)
        try:
            number = float(cleaned)
        except ValueError:
            return None
        return int(number) if number.is_integer() else number
    return None
