"""
Shared plumbing for the CL and IDP workflow managers.

Both managers bump their header inside the mutation's transaction, map a
missed bump to not-found or version conflict, and fan out side effects after
commit.
"""
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from appraisal.errors import NotFoundError, VersionConflictError
from appraisal.services.notification_service import NotificationService
from appraisal.services.side_effects import emit_best_effort
from appraisal.utils.feature_flags import notifications_enabled, recent_actions_enabled

logger = logging.getLogger(__name__)


class WorkflowManager:
    label = "record"

    def __init__(self, db: Session, notification_service: Optional[NotificationService] = None):
        self.db = db
        self.notifications = notification_service or NotificationService(db)

    def _header_exists(self, header_id: int) -> bool:
        raise NotImplementedError

    def _bump_header(
        self,
        touch: Callable[..., int],
        header_id: int,
        *,
        status: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> None:
        """Apply a header bump; raise when it matched nothing.

        Must run inside the caller's transaction so the raise rolls back every
        write of the batch.
        """
        changed = touch(self.db, header_id, status=status, expected_version=expected_version)
        if changed:
            return
        if expected_version is not None and self._header_exists(header_id):
            raise VersionConflictError(
                f"{self.label} {header_id} was modified concurrently",
                context={"id": header_id, "expected_version": expected_version},
            )
        raise NotFoundError(f"{self.label} not found", context={"id": header_id})

    def _notify(self, label: str, fn: Callable, *args) -> None:
        if notifications_enabled():
            emit_best_effort(self.db, label, fn, *args)

    def _record(self, label: str, fn: Callable, **kwargs) -> None:
        if recent_actions_enabled():
            emit_best_effort(self.db, label, fn, self.db, **kwargs)
