"""Time slot model."""

from typing import Optional
from pydantic import BaseModel, Field


class TimeSlot(BaseModel):
    """Recurring availability window, e.g. Monday morning."""
    id: str
    display_name: str
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    period: str = Field(..., description="Coarse time of day label")
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
