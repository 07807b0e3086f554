"""Activity models - one engagement between a supporter and a service user."""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, computed_field

from src.utils.date_utils import format_date_with_weekday


class Activity(BaseModel):
    """Row of the activities table."""
    id: str = Field(..., description="Activity ID (uuid)")
    activity_date: date = Field(..., description="Calendar date of the activity")
    arbitrary_time_notes: Optional[str] = Field(None, description="Free-text start time, e.g. 14:30開始")
    notes: Optional[str] = None
    supporter_id: str
    service_user_id: str
    skill_id: str
    time_slot_id: str
    status_id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PersonRef(BaseModel):
    id: Optional[str] = None
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


class NameRef(BaseModel):
    name: str


class DisplayNameRef(BaseModel):
    display_name: str


class ActivityWithRelations(Activity):
    """Activity joined with the display names of everything it references."""
    supporters: PersonRef
    service_users: PersonRef
    skills: NameRef
    time_slots: DisplayNameRef
    activity_statuses: NameRef

    @property
    def status_name(self) -> str:
        return self.activity_statuses.name

    @computed_field
    @property
    def date_label(self) -> str:
        """Display date, e.g. 2024年5月1日(水)."""
        return format_date_with_weekday(self.activity_date)
