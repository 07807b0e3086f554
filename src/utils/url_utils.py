"""Query-string helpers shared by list filters and calendar links."""

from typing import Mapping, Optional
from urllib.parse import urlencode

ALL_SENTINEL = "all"


def is_filter_value(value: Optional[str]) -> bool:
    """True when value should constrain a query: not empty, not blank, not the "all" sentinel."""
    return bool(value) and value != ALL_SENTINEL and value.strip() != ""


def create_search_params_string(params: Mapping[str, Optional[str]]) -> str:
    return urlencode({key: value for key, value in params.items() if is_filter_value(value)})


def update_url_with_params(pathname: str, params: Mapping[str, Optional[str]]) -> str:
    search = create_search_params_string(params)
    return f"{pathname}?{search}" if search else pathname
