"""Service user model - care recipients."""

from typing import Optional
from pydantic import BaseModel, Field


class ServiceUser(BaseModel):
    """Row of the service_users table."""
    id: str = Field(..., description="Service user ID (uuid)")
    name: str = Field(..., description="Full name")
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    area: Optional[str] = None
    special_notes: Optional[str] = Field(None, description="Care notes shared with supporters")
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
