"""Activity status model."""

from typing import Optional
from pydantic import BaseModel

# Conventional status names stored in activity_statuses.name
SCHEDULED_STATUS_NAME = "予定"
COMPLETED_STATUS_NAME = "完了"
CANCELLED_STATUS_NAME = "キャンセル"
TENTATIVE_STATUS_NAME = "仮予約"


class ActivityStatus(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
