"""Settings endpoint: skills and activity statuses."""

from src.services.master_data import get_settings
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_GET(self):
        async def action():
            return 200, await get_settings()

        self.dispatch(action)
