"""Dashboard endpoint: headline counts, today's and this week's activities."""

from src.services.dashboard import get_dashboard
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_GET(self):
        async def action():
            return 200, await get_dashboard()

        self.dispatch(action)
