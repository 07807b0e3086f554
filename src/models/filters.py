"""Query-string filters for list, matching and calendar screens."""

from datetime import date
from typing import Mapping, Optional, Sequence, Union
from pydantic import BaseModel, Field, field_validator

from src.utils.array_utils import get_unique_values
from src.utils.date_utils import parse_date
from src.utils.url_utils import is_filter_value

QueryValue = Union[str, Sequence[str], None]

SEARCH_PARAM_KEYS = (
    "search", "status", "area", "skill", "supporter", "service_user",
    "date_from", "date_to", "skills", "time_slots", "view", "month", "time_slot",
)


class SearchParams(BaseModel):
    """Raw single-valued query parameters understood by the list screens."""
    search: Optional[str] = None
    status: Optional[str] = None
    area: Optional[str] = None
    skill: Optional[str] = None
    supporter: Optional[str] = None
    service_user: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    skills: Optional[str] = None
    time_slots: Optional[str] = None
    view: Optional[str] = None
    month: Optional[str] = None
    time_slot: Optional[str] = None

    @classmethod
    def from_query(cls, query: Mapping[str, QueryValue]) -> "SearchParams":
        """
        Keep only single-valued parameters.

        Accepts both plain strings and parse_qs-style lists; a repeated
        parameter is ambiguous and is dropped.
        """
        values = {}
        for key in SEARCH_PARAM_KEYS:
            raw = query.get(key)
            if isinstance(raw, str):
                values[key] = raw
            elif isinstance(raw, (list, tuple)) and len(raw) == 1 and isinstance(raw[0], str):
                values[key] = raw[0]
        return cls(**values)


def _none_unless_filter(value: Optional[str]) -> Optional[str]:
    return value if is_filter_value(value) else None


def parse_id_list(value: Optional[str]) -> list[str]:
    """Split a comma separated id list, dropping blanks and duplicates."""
    if not value:
        return []
    return get_unique_values(part.strip() for part in value.split(",") if part.strip())


class SupporterFilters(BaseModel):
    search: Optional[str] = None
    status: Optional[str] = None
    area: Optional[str] = None
    skill: Optional[str] = None
    time_slot: Optional[str] = None

    @field_validator("search", "status", "area", "skill", "time_slot", mode="before")
    @classmethod
    def _drop_sentinels(cls, value):
        return _none_unless_filter(value)

    @classmethod
    def from_params(cls, params: SearchParams) -> "SupporterFilters":
        return cls(
            search=params.search,
            status=params.status,
            area=params.area,
            skill=params.skill,
            time_slot=params.time_slot,
        )


class ServiceUserFilters(BaseModel):
    search: Optional[str] = None
    area: Optional[str] = None

    @field_validator("search", "area", mode="before")
    @classmethod
    def _drop_sentinels(cls, value):
        return _none_unless_filter(value)

    @classmethod
    def from_params(cls, params: SearchParams) -> "ServiceUserFilters":
        return cls(search=params.search, area=params.area)


class ActivityFilters(BaseModel):
    search: Optional[str] = None
    supporter: Optional[str] = None
    service_user: Optional[str] = None
    status: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @field_validator("search", "supporter", "service_user", "status", mode="before")
    @classmethod
    def _drop_sentinels(cls, value):
        return _none_unless_filter(value)

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _lenient_date(cls, value):
        # Malformed dates in a URL are ignored rather than rejected
        if isinstance(value, date):
            return value
        return parse_date(value) if isinstance(value, str) else None

    @classmethod
    def from_params(cls, params: SearchParams) -> "ActivityFilters":
        return cls(
            search=params.search,
            supporter=params.supporter,
            service_user=params.service_user,
            status=params.status,
            date_from=params.date_from,
            date_to=params.date_to,
        )


class MatchingFilters(BaseModel):
    """Required skill ids and required time slot ids, both AND-ed."""
    skills: list[str] = Field(default_factory=list)
    time_slots: list[str] = Field(default_factory=list)

    @property
    def has_filters(self) -> bool:
        return bool(self.skills or self.time_slots)

    @classmethod
    def from_params(cls, params: SearchParams) -> "MatchingFilters":
        return cls(skills=parse_id_list(params.skills), time_slots=parse_id_list(params.time_slots))
