"""Single activity endpoint: GET / PUT / DELETE ?id=."""

from src.models.forms import ActivityForm, validate_form
from src.services.activities import delete_activity, get_activity, get_activity_form_options, update_activity
from src.utils.errors import SupabaseError
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_GET(self):
        async def action():
            activity_id = self.require_id()
            activity = await get_activity(activity_id)
            if activity is None:
                raise SupabaseError(f"Activity unavailable: {activity_id}")
            payload = {"activity": activity}
            if self.query_value("include") == "form_options":
                payload["form_options"] = await get_activity_form_options()
            return 200, payload

        self.dispatch(action)

    def do_PUT(self):
        async def action():
            activity_id = self.require_id()
            form = validate_form(ActivityForm, self.read_json_body())
            return 200, await update_activity(activity_id, form)

        self.dispatch(action, write=True)

    def do_DELETE(self):
        async def action():
            await delete_activity(self.require_id())
            return 200, {"ok": True}

        self.dispatch(action, write=True)
