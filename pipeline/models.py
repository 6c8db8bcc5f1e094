"""
Job offer data model.

A JobOffer is built incrementally by the extraction plugins; every field is
optional until extraction finishes.
"""

from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RemoteType = Literal['onsite', 'hybrid', 'remote', 'unknown']
SalaryPeriod = Literal['hour', 'day', 'month', 'year']


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string ending in 'Z'."""
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class Salary(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    currency: str = 'EUR'
    period: SalaryPeriod = 'year'


class JobOffer(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    source_url: str
    source_domain: str = ''
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    remote_type: Optional[RemoteType] = None
    description: Optional[str] = None
    contract_type: Optional[str] = None
    experience: Optional[str] = None
    salary: Optional[Salary] = None
    skills: Optional[List[str]] = None
    required_skills: Optional[List[str]] = None
    nice_to_have_skills: Optional[List[str]] = None
    published_at: Optional[str] = None
    captured_at: str = Field(default_factory=utc_timestamp)

    def is_usable(self) -> bool:
        """A record is usable once it has both a title and a description."""
        return bool(self.title and self.title.strip()) and bool(
            self.description and self.description.strip()
        )

    def to_dict(self) -> Dict:
        return self.model_dump(exclude_none=True)
