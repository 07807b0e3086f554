"""Single service user endpoint: GET ?id= (with recent activities), PUT ?id=."""

import asyncio

from src.models.forms import ServiceUserForm, validate_form
from src.services.service_users import get_service_user, get_service_user_activities, update_service_user
from src.utils.errors import SupabaseError
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_GET(self):
        async def action():
            service_user_id = self.require_id()
            service_user, activities = await asyncio.gather(
                get_service_user(service_user_id),
                get_service_user_activities(service_user_id),
            )
            if service_user is None:
                raise SupabaseError(f"Service user unavailable: {service_user_id}")
            return 200, {"service_user": service_user, "activities": activities}

        self.dispatch(action)

    def do_PUT(self):
        async def action():
            service_user_id = self.require_id()
            form = validate_form(ServiceUserForm, self.read_json_body())
            return 200, await update_service_user(service_user_id, form)

        self.dispatch(action, write=True)
