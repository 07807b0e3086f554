"""Matching search endpoint: GET ?skills=id,id&time_slots=id,id."""

import asyncio

from src.models.filters import MatchingFilters
from src.services.matching import find_matching_supporters, get_matching_filter_options
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_GET(self):
        filters = MatchingFilters.from_params(self.search_params())

        async def action():
            result, options = await asyncio.gather(
                find_matching_supporters(filters),
                get_matching_filter_options(),
            )
            return 200, {
                "has_filters": filters.has_filters,
                "filters": filters,
                "supporters": result,
                "options": options,
            }

        self.dispatch(action)
