"""Supporter roster endpoint: GET list with filters, POST create."""

import asyncio

from src.models.filters import SupporterFilters
from src.models.forms import SupporterForm, validate_form
from src.services.supporters import create_supporter, get_supporter_filter_options, list_supporters
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_GET(self):
        filters = SupporterFilters.from_params(self.search_params())

        async def action():
            result, options = await asyncio.gather(list_supporters(filters), get_supporter_filter_options())
            return 200, {"filters": filters, "supporters": result, "options": options}

        self.dispatch(action)

    def do_POST(self):
        async def action():
            form = validate_form(SupporterForm, self.read_json_body())
            return 201, await create_supporter(form)

        self.dispatch(action, write=True)
