"""
API dependency helpers.

Resolves the acting user forwarded by the authentication layer and wires the
workflow services to the request's database session.
"""
from typing import NoReturn, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from appraisal.db.database import get_db
from appraisal.errors import WorkflowError
from appraisal.services.cl_workflow import CLWorkflowManager, get_cl_workflow_manager
from appraisal.services.idp_workflow import IDPWorkflowManager, get_idp_workflow_manager
from appraisal.services.notification_service import NotificationService, get_notification_service

# Contract: the authentication collaborator validates the caller's token and
# forwards the numeric user id in X-User-Id. It is optional on workflow routes
# (only used to attribute recent actions) and required on per-user reads.


def get_actor_id(x_user_id: Optional[int] = Header(default=None, gt=0)) -> Optional[int]:
    return x_user_id


def require_actor_id(actor_id: Optional[int] = Depends(get_actor_id)) -> int:
    if actor_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return actor_id


def get_cl_manager(db: Session = Depends(get_db)) -> CLWorkflowManager:
    return get_cl_workflow_manager(db)


def get_idp_manager(db: Session = Depends(get_db)) -> IDPWorkflowManager:
    return get_idp_workflow_manager(db)


def get_notifications(db: Session = Depends(get_db)) -> NotificationService:
    return get_notification_service(db)


def raise_http(exc: WorkflowError) -> NoReturn:
    """Translate a workflow error into the matching HTTP response."""
    raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
