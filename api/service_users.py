"""Service user list endpoint: GET list with filters, POST create."""

import asyncio

from src.models.filters import ServiceUserFilters
from src.models.forms import ServiceUserForm, validate_form
from src.services.service_users import create_service_user, get_service_user_areas, list_service_users
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_GET(self):
        filters = ServiceUserFilters.from_params(self.search_params())

        async def action():
            result, areas = await asyncio.gather(list_service_users(filters), get_service_user_areas())
            return 200, {"filters": filters, "service_users": result, "areas": areas}

        self.dispatch(action)

    def do_POST(self):
        async def action():
            form = validate_form(ServiceUserForm, self.read_json_body())
            return 201, await create_service_user(form)

        self.dispatch(action, write=True)
