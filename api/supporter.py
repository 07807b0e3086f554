"""Single supporter endpoint: GET ?id= (with recent activities), PUT ?id=."""

import asyncio

from src.models.forms import SupporterForm, validate_form
from src.services.supporters import get_supporter, get_supporter_activities, update_supporter
from src.utils.errors import SupabaseError
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_GET(self):
        async def action():
            supporter_id = self.require_id()
            supporter, activities = await asyncio.gather(
                get_supporter(supporter_id),
                get_supporter_activities(supporter_id),
            )
            if supporter is None:
                raise SupabaseError(f"Supporter unavailable: {supporter_id}")
            return 200, {"supporter": supporter, "activities": activities}

        self.dispatch(action)

    def do_PUT(self):
        async def action():
            supporter_id = self.require_id()
            form = validate_form(SupporterForm, self.read_json_body())
            return 200, await update_supporter(supporter_id, form)

        self.dispatch(action, write=True)
