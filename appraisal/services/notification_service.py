"""
Notification service: in-app notifications for workflow events.
Centralizes recipient selection and wording so every workflow emits the same way.
"""

from datetime import datetime, UTC
from typing import List, Optional

from sqlalchemy import and_, desc, update
from sqlalchemy.orm import Session

from appraisal.db import models

# Event type constants
EVENT_CL_CREATED = 'cl_created'
EVENT_CL_SUBMITTED = 'cl_submitted'
EVENT_IDP_CREATED = 'idp_created'
EVENT_IDP_SUBMITTED = 'idp_submitted'

MODULE_CL = 'Competency Leveling'
MODULE_IDP = 'Individual Development Plan'


class NotificationService:
    """Service class for handling in-app notification operations."""

    def __init__(self, db: Session):
        self.db = db

    # === In-App Notification Management ===

    def create_notification(
        self,
        recipient_id: int,
        event_type: str,
        title: str,
        message: str,
        module: str = MODULE_CL,
        action_url: Optional[str] = None,
    ) -> models.Notification:
        """
        Create an in-app notification for a user.

        Args:
            recipient_id: The recipient user ID
            event_type: Type of event (e.g., 'cl_submitted')
            title: Short notification title
            message: Detailed notification message
            module: Workflow the notification belongs to
            action_url: Optional link to the affected record

        Returns:
            Created notification object
        """
        notification = models.Notification(
            recipient_id=recipient_id,
            module=module,
            event_type=event_type,
            title=title,
            message=message,
            action_url=action_url,
        )
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def get_user_notifications(
        self,
        recipient_id: int,
        unread_only: bool = False,
        limit: int = 50,
    ) -> List[models.Notification]:
        """
        Get notifications for a user, ordered by most recent.
        """
        query = self.db.query(models.Notification).filter(
            models.Notification.recipient_id == recipient_id
        )
        if unread_only:
            query = query.filter(models.Notification.is_read == False)  # noqa: E712
        return query.order_by(desc(models.Notification.created_at), desc(models.Notification.id)).limit(limit).all()

    def mark_notification_read(self, notification_id: int, recipient_id: int) -> bool:
        """
        Mark a notification as read for a specific user.
        Returns False if the notification does not exist or belongs to someone else.
        """
        notification = self.db.query(models.Notification).filter(
            and_(
                models.Notification.id == notification_id,
                models.Notification.recipient_id == recipient_id,
            )
        ).first()

        if not notification:
            return False

        if not notification.is_read:
            notification.is_read = True
            notification.read_at = datetime.now(UTC)
            self.db.commit()

        return True

    def mark_all_read(self, recipient_id: int) -> int:
        """Mark every unread notification of a user as read; returns how many changed."""
        result = self.db.execute(
            update(models.Notification)
            .where(
                models.Notification.recipient_id == recipient_id,
                models.Notification.is_read == False,  # noqa: E712
            )
            .values(is_read=True, read_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount

    def get_unread_count(self, recipient_id: int) -> int:
        return self.db.query(models.Notification).filter(
            and_(
                models.Notification.recipient_id == recipient_id,
                models.Notification.is_read == False,  # noqa: E712
            )
        ).count()

    # === Workflow events ===

    def notify_cl_created(self, header: models.CLHeader) -> models.Notification:
        return self.create_notification(
            recipient_id=header.employee_id,
            event_type=EVENT_CL_CREATED,
            title='Competency Leveling started',
            message=f'Your Competency Leveling form #{header.id} has been created by your supervisor.',
            module=MODULE_CL,
            action_url=f'/cl/{header.id}',
        )

    def notify_cl_submitted(self, header: models.CLHeader) -> models.Notification:
        return self.create_notification(
            recipient_id=header.employee_id,
            event_type=EVENT_CL_SUBMITTED,
            title='Competency Leveling submitted',
            message=f'Your Competency Leveling form #{header.id} was submitted and is awaiting the next approver.',
            module=MODULE_CL,
            action_url=f'/cl/{header.id}',
        )

    def notify_idp_created(self, header: models.IDPHeader) -> models.Notification:
        return self.create_notification(
            recipient_id=header.employee_id,
            event_type=EVENT_IDP_CREATED,
            title='Development plan started',
            message=f'An Individual Development Plan #{header.id} was opened for you.',
            module=MODULE_IDP,
            action_url=f'/idp/{header.id}',
        )

    def notify_idp_submitted(self, header: models.IDPHeader) -> models.Notification:
        return self.create_notification(
            recipient_id=header.employee_id,
            event_type=EVENT_IDP_SUBMITTED,
            title='Development plan submitted',
            message=f'Your Individual Development Plan #{header.id} was submitted and is awaiting the next approver.',
            module=MODULE_IDP,
            action_url=f'/idp/{header.id}',
        )


def get_notification_service(db: Session) -> NotificationService:
    return NotificationService(db)
