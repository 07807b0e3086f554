"""Skill model."""

from typing import Optional
from pydantic import BaseModel, Field


class Skill(BaseModel):
    """A kind of support a supporter can provide."""
    id: str
    name: str
    category: Optional[str] = None
    is_active: bool = Field(default=True, description="Inactive skills are hidden from forms and filters")
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
