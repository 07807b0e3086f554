"""Activity status master data: POST create, PUT ?id= update, DELETE ?id=."""

from src.models.forms import ActivityStatusForm, validate_form
from src.services.master_data import create_activity_status, delete_activity_status, update_activity_status
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_POST(self):
        async def action():
            form = validate_form(ActivityStatusForm, self.read_json_body())
            return 201, await create_activity_status(form)

        self.dispatch(action, write=True)

    def do_PUT(self):
        async def action():
            status_id = self.require_id()
            form = validate_form(ActivityStatusForm, self.read_json_body())
            return 200, await update_activity_status(status_id, form)

        self.dispatch(action, write=True)

    def do_DELETE(self):
        async def action():
            await delete_activity_status(self.require_id())
            return 200, {"ok": True}

        self.dispatch(action, write=True)
