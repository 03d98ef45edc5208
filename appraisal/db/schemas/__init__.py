"""
Domain-split Pydantic schemas with a single aggregator.
"""

from .leveling import (
    CLCreate,
    CLItemUpdate,
    CLUpdate,
    SubmitRequest,
    CreatedResponse,
    CLItem,
    CLHeader,
    CLDetail,
    SupervisorSummary,
    PendingCL,
    EmployeeProfile,
    MappedCompetency,
    CompetencyPreview,
)
from .development import (
    IDPCreate,
    IDPItemUpsert,
    IDPUpdate,
    IDPItem,
    IDPHeader,
    IDPDetail,
    EmployeeForIDP,
)
from .activity import Notification, NotificationListResponse, RecentAction

__all__ = [
    # competency leveling
    "CLCreate",
    "CLItemUpdate",
    "CLUpdate",
    "SubmitRequest",
    "CreatedResponse",
    "CLItem",
    "CLHeader",
    "CLDetail",
    "SupervisorSummary",
    "PendingCL",
    "EmployeeProfile",
    "MappedCompetency",
    "CompetencyPreview",
    # development plans
    "IDPCreate",
    "IDPItemUpsert",
    "IDPUpdate",
    "IDPItem",
    "IDPHeader",
    "IDPDetail",
    "EmployeeForIDP",
    # notifications/recent actions
    "Notification",
    "NotificationListResponse",
    "RecentAction",
]
