"""Supporter models - volunteers who carry out activities for service users."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class SupporterStatus(str, Enum):
    """Supporter registration status (values are the strings stored in the table)."""
    APPLICATION_RECEIVED = "応募受付"
    INTERVIEWED = "面接済み"
    REGISTERED = "登録完了"
    SUSPENDED = "休止中"


# Only these supporters can be proposed by the matching search
MATCHING_ELIGIBLE_STATUSES = (SupporterStatus.REGISTERED, SupporterStatus.INTERVIEWED)


class Supporter(BaseModel):
    """Row of the supporters table."""
    id: str = Field(..., description="Supporter ID (uuid)")
    name: str = Field(..., description="Full name")
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    area: Optional[str] = Field(None, description="Area the supporter covers")
    status: Optional[str] = Field(
        default=SupporterStatus.APPLICATION_RECEIVED.value,
        description="Status: 応募受付, 面接済み, 登録完了, 休止中"
    )
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SkillRef(BaseModel):
    id: Optional[str] = None
    name: str
    category: Optional[str] = None


class TimeSlotRef(BaseModel):
    id: Optional[str] = None
    display_name: str
    day_of_week: Optional[int] = None
    period: Optional[str] = None


class SupporterSkillLink(BaseModel):
    """Embedded supporter_skills row with its skill expanded."""
    skills: Optional[SkillRef] = None


class SupporterScheduleLink(BaseModel):
    """Embedded supporter_schedules row with its time slot expanded."""
    time_slot_id: Optional[str] = None
    time_slots: Optional[TimeSlotRef] = None


class SupporterWithRelations(Supporter):
    """Supporter with its skill and availability links expanded."""
    supporter_skills: list[SupporterSkillLink] = Field(default_factory=list)
    supporter_schedules: list[SupporterScheduleLink] = Field(default_factory=list)

    @property
    def skill_ids(self) -> set[str]:
        return {link.skills.id for link in self.supporter_skills if link.skills and link.skills.id}

    @property
    def skill_names(self) -> list[str]:
        return [link.skills.name for link in self.supporter_skills if link.skills]

    @property
    def time_slot_ids(self) -> set[str]:
        ids = set()
        for link in self.supporter_schedules:
            if link.time_slots and link.time_slots.id:
                ids.add(link.time_slots.id)
            elif link.time_slot_id:
                ids.add(link.time_slot_id)
        return ids


class MatchedSupporter(SupporterWithRelations):
    """Matching search result annotated with the supporter's completed activity count."""
    completed_activities: int = Field(default=0, ge=0)
