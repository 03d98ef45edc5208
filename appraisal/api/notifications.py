"""
Notification API Endpoints

In-app notifications produced by workflow events for the calling user.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, status

from appraisal.api.deps import get_notifications, require_actor_id
from appraisal.db import schemas
from appraisal.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=schemas.NotificationListResponse)
def get_notifications_endpoint(
    unread_only: bool = False,
    limit: int = 50,
    service: NotificationService = Depends(get_notifications),
    user_id: int = Depends(require_actor_id),
):
    """
    Get notifications for the current user.

    - **unread_only**: If true, only return unread notifications
    - **limit**: Maximum number of notifications to return (default 50)
    """
    notifications = service.get_user_notifications(user_id, unread_only=unread_only, limit=limit)
    return schemas.NotificationListResponse(
        notifications=notifications,
        unread_count=service.get_unread_count(user_id),
        total_count=len(notifications),
    )


@router.patch("/mark-all-read")
def mark_all_read_endpoint(
    service: NotificationService = Depends(get_notifications),
    user_id: int = Depends(require_actor_id),
):
    updated = service.mark_all_read(user_id)
    return {"ok": True, "updated": updated}


@router.patch("/{notification_id}/read")
def mark_notification_read_endpoint(
    notification_id: int = Path(gt=0),
    service: NotificationService = Depends(get_notifications),
    user_id: int = Depends(require_actor_id),
):
    if not service.mark_notification_read(notification_id, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return {"ok": True}
