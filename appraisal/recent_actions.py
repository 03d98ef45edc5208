"""
Recent-action logging helpers and enums.

Records what an actor did to a CL or IDP so dashboards can show a "recently
worked on" list; includes convenience wrappers per module.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from sqlalchemy.orm import Session

from appraisal.db import models


class RecentActionType(str, Enum):
    # Competency Leveling
    CL_CREATE = "cl_create"
    CL_UPDATE = "cl_update"
    CL_SUBMIT = "cl_submit"
    # Individual Development Plan
    IDP_CREATE = "idp_create"
    IDP_UPDATE = "idp_update"
    IDP_SUBMIT = "idp_submit"


MODULE_CL = "CL"
MODULE_IDP = "IDP"


def log(
    db: Session,
    *,
    actor_id: int,
    action: RecentActionType | str,
    title: str,
    module: str = MODULE_CL,
    cl_id: Optional[int] = None,
    idp_id: Optional[int] = None,
    employee_id: Optional[int] = None,
    description: Optional[str] = None,
    url: Optional[str] = None,
) -> models.RecentAction:
    """Persist one recent-action row and commit it."""
    # Persist the plain string value, not the Enum repr
    action_value = action.value if isinstance(action, RecentActionType) else str(action)
    entry = models.RecentAction(
        actor_id=actor_id,
        module=module,
        action_type=action_value,
        cl_id=cl_id,
        idp_id=idp_id,
        employee_id=employee_id,
        title=title,
        description=description,
        url=url,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def log_cl(db: Session, *, actor_id: int, header: models.CLHeader, action: RecentActionType, title: str, description: Optional[str] = None):
    return log(
        db,
        actor_id=actor_id,
        action=action,
        title=title,
        module=MODULE_CL,
        cl_id=header.id,
        employee_id=header.employee_id,
        description=description,
        url=f"/cl/{header.id}",
    )


def log_idp(db: Session, *, actor_id: int, header: models.IDPHeader, action: RecentActionType, title: str, description: Optional[str] = None):
    return log(
        db,
        actor_id=actor_id,
        action=action,
        title=title,
        module=MODULE_IDP,
        cl_id=header.cl_header_id,
        idp_id=header.id,
        employee_id=header.employee_id,
        description=description,
        url=f"/idp/{header.id}",
    )


def get_recent_actions(db: Session, actor_id: int, limit: int = 20) -> List[models.RecentAction]:
    return (
        db.query(models.RecentAction)
        .filter(models.RecentAction.actor_id == actor_id)
        .order_by(models.RecentAction.created_at.desc(), models.RecentAction.id.desc())
        .limit(limit)
        .all()
    )


__all__ = [
    "RecentActionType",
    "MODULE_CL",
    "MODULE_IDP",
    "log",
    "log_cl",
    "log_idp",
    "get_recent_actions",
]
