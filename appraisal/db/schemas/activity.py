from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class Notification(BaseModel):
    id: int
    recipient_id: int
    module: str
    event_type: str
    title: str
    message: str
    action_url: Optional[str] = None
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class NotificationListResponse(BaseModel):
    notifications: List[Notification]
    unread_count: int
    total_count: int


class RecentAction(BaseModel):
    id: int
    module: str
    action_type: str
    cl_id: Optional[int] = None
    idp_id: Optional[int] = None
    employee_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    url: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)
