"""Complete an activity: POST ?id= with {"completion_notes": "..."}."""

from src.models.forms import CompleteActivityForm, validate_form
from src.services.activities import complete_activity
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_POST(self):
        async def action():
            activity_id = self.require_id()
            form = validate_form(CompleteActivityForm, self.read_json_body())
            return 200, await complete_activity(activity_id, form)

        self.dispatch(action, write=True)
