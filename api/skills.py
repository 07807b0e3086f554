"""Skill master data: POST create, PUT ?id= update, DELETE ?id=."""

from src.models.forms import SkillForm, validate_form
from src.services.master_data import create_skill, delete_skill, update_skill
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):

    def do_POST(self):
        async def action():
            form = validate_form(SkillForm, self.read_json_body())
            return 201, await create_skill(form)

        self.dispatch(action, write=True)

    def do_PUT(self):
        async def action():
            skill_id = self.require_id()
            form = validate_form(SkillForm, self.read_json_body())
            return 200, await update_skill(skill_id, form)

        self.dispatch(action, write=True)

    def do_DELETE(self):
        async def action():
            await delete_skill(self.require_id())
            return 200, {"ok": True}

        self.dispatch(action, write=True)
