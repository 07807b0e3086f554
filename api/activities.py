"""
Activities collection endpoint.

GET  ?view=list (default) with search/supporter/service_user/status/date_from/date_to
GET  ?view=calendar&month=YYYY-MM-DD
POST create an activity from a form payload
"""

import asyncio

from src.models.filters import ActivityFilters
from src.models.forms import ActivityForm, validate_form
from src.services.activities import (
    create_activity,
    get_activity_filter_options,
    get_calendar_month,
    list_activities,
)
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_GET(self):
        params = self.search_params()

        if params.view == "calendar":
            async def action():
                view, error = await get_calendar_month(params.month)
                return 200, {"view": "calendar", "calendar": view, "error": error}
        else:
            filters = ActivityFilters.from_params(params)

            async def action():
                result, options = await asyncio.gather(list_activities(filters), get_activity_filter_options())
                return 200, {"view": "list", "filters": filters, "activities": result, "options": options}

        self.dispatch(action)

    def do_POST(self):
        async def action():
            form = validate_form(ActivityForm, self.read_json_body())
            return 201, await create_activity(form)

        self.dispatch(action, write=True)
