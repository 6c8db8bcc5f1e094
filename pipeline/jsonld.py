"""
JSON-LD extractor.

Finds schema.org JobPosting blocks embedded in a page and maps them onto a
JobOffer.
"""

import html
import json
import logging
from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup

from core.markdown import html_to_markdown
from core.normalize import clean_text, normalize_contract_type, normalize_salary_period, to_number
from .models import JobOffer, Salary

logger = logging.getLogger(__name__)

JOB_POSTING_TYPE = 'JobPosting'


def iter_jsonld_items(soup: BeautifulSoup) -> Iterator[Dict]:
    """
    Yield every JSON-LD object on the page.

    Top-level arrays are unwrapped, and the members of an object's '@graph'
    are yielded after the object itself (one level only). Blocks that fail
    to parse are skipped.
    """
    for script in soup.find_all('script', type='application/ld+json'):
        raw = script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug(f"Failed to parse JSON-LD: {e}")
            continue

        items = data if isinstance(data, list) else [data]
        for item in items:
            if not isinstance(item, dict):
                continue
            yield item
            graph = item.get('@graph')
            if isinstance(graph, list):
                for node in graph:
                    if isinstance(node, dict):
                        yield node


def is_job_posting(item: Dict) -> bool:
    """Check if a JSON-LD item is typed JobPosting ('@type' may be a list)."""
    item_type = item.get('@type')
    if isinstance(item_type, str):
        return item_type == JOB_POSTING_TYPE
    if isinstance(item_type, list):
        return JOB_POSTING_TYPE in item_type
    return False


def find_job_posting(soup: BeautifulSoup) -> Optional[Dict]:
    """Return the first JobPosting object on the page, or None."""
    for item in iter_jsonld_items(soup):
        if is_job_posting(item):
            return item
    return None


def has_job_posting(soup: BeautifulSoup) -> bool:
    return find_job_posting(soup) is not None


def apply_job_posting(offer: JobOffer, job_data: Dict) -> None:
    """Fill the offer's absent fields from a JobPosting object."""
    if offer.title is None:
        title = clean_text(_as_text(job_data.get('title')))
        if title:
            offer.title = title

    if offer.description is None:
        description = _extract_description(job_data.get('description'))
        if description:
            offer.description = description

    if offer.company is None:
        offer.company = _extract_company(job_data.get('hiringOrganization'))

    if offer.location is None:
        offer.location = _extract_location(job_data.get('jobLocation'))

    if offer.contract_type is None:
        offer.contract_type = normalize_contract_type(job_data.get('employmentType'))

    if offer.salary is None:
        offer.salary = _extract_salary(job_data.get('baseSalary'))

    if offer.published_at is None and job_data.get('datePosted'):
        offer.published_at = str(job_data['datePosted'])

    if not offer.skills:
        skills = _extract_skills(job_data.get('skills'))
        if skills:
            offer.skills = skills


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _extract_description(value: Any) -> Optional[str]:
    description = _as_text(value)
    if not description:
        return None
    # Some sites entity-escape the HTML inside the JSON string
    if '&lt;' in description:
        description = html.unescape(description)
    return html_to_markdown(description) or None


def _extract_company(org: Any) -> Optional[str]:
    if isinstance(org, dict):
        name = org.get('name') or org.get('legalName')
        return clean_text(_as_text(name)) or None
    if isinstance(org, str):
        return clean_text(org) or None
    return None


def _extract_location(location: Any) -> Optional[str]:
    if isinstance(location, list):
        location = location[0] if location else None
    if isinstance(location, str):
        return clean_text(location) or None
    if not isinstance(location, dict):
        return None

    address = location.get('address')
    if isinstance(address, str):
        return clean_text(address) or None
    if not isinstance(address, dict):
        return None

    country = address.get('addressCountry')
    if isinstance(country, dict):
        country = country.get('name')

    parts = [
        clean_text(_as_text(part))
        for part in (address.get('addressLocality'), address.get('addressRegion'), country)
    ]
    parts = [part for part in parts if part]
    return ', '.join(parts) if parts else None


def _extract_salary(base_salary: Any) -> Optional[Salary]:
    if not isinstance(base_salary, dict):
        return None

    value = base_salary.get('value')
    unit_text = base_salary.get('unitText')

    if isinstance(value, dict):
        single = to_number(value.get('value'))
        low = to_number(value.get('minValue'))
        high = to_number(value.get('maxValue'))
        if low is None:
            low = single
        if high is None:
            high = single
        unit_text = value.get('unitText') or unit_text
    else:
        low = high = to_number(value)

    if low is None and high is None:
        return None

    return Salary(
        min=low,
        max=high,
        currency=_as_text(base_salary.get('currency')) or 'EUR',
        period=normalize_salary_period(unit_text),
    )


def _extract_skills(skills: Any) -> List[str]:
    if isinstance(skills, str):
        candidates = skills.split(',')
    elif isinstance(skills, list):
        candidates = [_as_text(skill) or '' for skill in skills]
    else:
        return []
    return [clean_text(skill) for skill in candidates if clean_text(skill)]
