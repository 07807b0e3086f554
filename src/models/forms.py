"""Form payload validation for create/update operations."""

from datetime import date
from typing import Any, Optional, Type, TypeVar
from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator

from src.models.supporter import SupporterStatus
from src.utils.array_utils import get_unique_values
from src.utils.errors import FormValidationError

FormT = TypeVar("FormT", bound=BaseModel)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class SupporterForm(BaseModel):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    area: Optional[str] = None
    notes: Optional[str] = None
    status: SupporterStatus = SupporterStatus.APPLICATION_RECEIVED
    skills: list[str] = Field(default_factory=list, description="Skill ids")
    schedules: list[str] = Field(default_factory=list, description="Time slot ids")

    @field_validator("phone", "email", "address", "area", "notes", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return _blank_to_none(value)

    @field_validator("skills", "schedules")
    @classmethod
    def _unique_ids(cls, value: list[str]) -> list[str]:
        return get_unique_values(v for v in value if v)

    def to_row(self) -> dict:
        """Scalar columns for the supporters table (link tables are written separately)."""
        return {
            "name": self.name,
            "phone": self.phone,
            "email": str(self.email) if self.email else None,
            "address": self.address,
            "area": self.area,
            "notes": self.notes,
            "status": self.status.value,
        }


class ServiceUserForm(BaseModel):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    area: Optional[str] = None
    special_notes: Optional[str] = None

    @field_validator("phone", "email", "address", "area", "special_notes", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return _blank_to_none(value)

    def to_row(self) -> dict:
        row = self.model_dump()
        row["email"] = str(self.email) if self.email else None
        return row


class ActivityForm(BaseModel):
    supporter_id: str = Field(..., min_length=1)
    service_user_id: str = Field(..., min_length=1)
    skill_id: str = Field(..., min_length=1)
    activity_date: date
    time_slot_id: str = Field(..., min_length=1)
    status_id: str = Field(..., min_length=1)
    notes: Optional[str] = None
    arbitrary_time_notes: Optional[str] = None

    @field_validator("notes", "arbitrary_time_notes", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return _blank_to_none(value)

    def to_row(self) -> dict:
        return self.model_dump(mode="json")


class CompleteActivityForm(BaseModel):
    completion_notes: str = Field(..., min_length=1, description="Activity report")


class SkillForm(BaseModel):
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    is_active: bool = True

    @field_validator("category", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return _blank_to_none(value)

    def to_row(self) -> dict:
        return self.model_dump()


class ActivityStatusForm(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return _blank_to_none(value)

    def to_row(self) -> dict:
        return self.model_dump()


def validate_form(form_cls: Type[FormT], payload: Any) -> FormT:
    """Validate a submitted payload, raising FormValidationError with per-field messages."""
    if not isinstance(payload, dict):
        raise FormValidationError({"__root__": "Request body must be a JSON object"})
    try:
        return form_cls.model_validate(payload)
    except ValidationError as e:
        raise FormValidationError.from_pydantic(e) from e
