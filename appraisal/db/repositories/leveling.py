"""
Competency Leveling repository functions.

Header/item inserts, scoped item updates with score recomputation, header
bumps guarded by an optional expected version, and supervisor dashboard reads.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session, aliased, joinedload

from appraisal.db import models, schemas
from appraisal.db.models import now_utc
from appraisal.utils.scoring import compute_score
from appraisal.utils.statuses import (
    OPEN_CL_STATUSES,
    STATUS_APPROVED,
    STATUS_DRAFT,
    STATUS_IN_PROGRESS,
)


def insert_cl_header(db: Session, cl: schemas.CLCreate) -> models.CLHeader:
    db_header = models.CLHeader(
        employee_id=cl.employee_id,
        supervisor_id=cl.supervisor_id,
        department_id=cl.department_id,
        cycle_id=cl.cycle_id,
        status=STATUS_DRAFT,
        has_assistant_manager=False,
    )
    db.add(db_header)
    db.flush()
    return db_header


def insert_preloaded_items(db: Session, header_id: int, mappings: Iterable[Tuple[int, int]]) -> int:
    """Insert one item per ``(competency_id, required_level)`` mapping; returns the count."""
    items = [
        models.CLItem(
            cl_header_id=header_id,
            competency_id=competency_id,
            mplr_level=required_level,
            assigned_level=required_level,
            weight=0,
            justification='',
            score=compute_score(0, required_level or 0),
            pdf_path=None,
        )
        for competency_id, required_level in mappings
    ]
    db.add_all(items)
    db.flush()
    return len(items)


def get_cl_header(db: Session, header_id: int) -> Optional[models.CLHeader]:
    return db.query(models.CLHeader).filter(models.CLHeader.id == header_id).first()


def get_cl_items(db: Session, header_id: int) -> List[models.CLItem]:
    return (
        db.query(models.CLItem)
        .options(joinedload(models.CLItem.competency))
        .filter(models.CLItem.cl_header_id == header_id)
        .order_by(models.CLItem.id)
        .all()
    )


def update_cl_item(db: Session, header_id: int, item: schemas.CLItemUpdate) -> int:
    """Write level, weight, justification and the derived score in one statement.

    The score is computed from the incoming values, never from what is
    currently stored. Returns the number of rows matched (0 or 1).
    """
    values = {
        "assigned_level": item.assigned_level,
        "weight": item.weight,
        "justification": item.justification or '',
        "score": compute_score(item.weight, item.assigned_level),
        "updated_at": now_utc(),
    }
    if item.pdf_path:
        values["pdf_path"] = item.pdf_path
    result = db.execute(
        update(models.CLItem)
        .where(models.CLItem.id == item.id, models.CLItem.cl_header_id == header_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def touch_cl_header(
    db: Session,
    header_id: int,
    *,
    status: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> int:
    """Bump ``updated_at`` and ``version`` (and optionally set status).

    With ``expected_version`` the bump only applies if the stored version
    still matches. Returns the number of rows changed.
    """
    stmt = update(models.CLHeader).where(models.CLHeader.id == header_id)
    if expected_version is not None:
        stmt = stmt.where(models.CLHeader.version == expected_version)
    values = {"updated_at": now_utc(), "version": models.CLHeader.version + 1}
    if status is not None:
        values["status"] = status
    result = db.execute(stmt.values(**values).execution_options(synchronize_session=False))
    return result.rowcount


def get_item_weights(db: Session, header_id: int) -> List[int]:
    return list(
        db.execute(
            select(models.CLItem.weight).where(models.CLItem.cl_header_id == header_id)
        ).scalars()
    )


def get_supervisor_summary(db: Session, supervisor_id: int) -> dict:
    """Status bucket counts for CLs of employees in the supervisor's department."""
    employee = aliased(models.User)
    supervisor = aliased(models.User)
    row = db.execute(
        select(
            func.coalesce(func.sum(case((models.CLHeader.status == STATUS_DRAFT, 1), else_=0)), 0).label("cl_pending"),
            func.coalesce(func.sum(case((models.CLHeader.status == STATUS_IN_PROGRESS, 1), else_=0)), 0).label("cl_in_progress"),
            func.coalesce(func.sum(case((models.CLHeader.status == STATUS_APPROVED, 1), else_=0)), 0).label("cl_approved"),
        )
        .select_from(models.CLHeader)
        .join(employee, models.CLHeader.employee_id == employee.id)
        .join(supervisor, models.CLHeader.supervisor_id == supervisor.id)
        .where(supervisor.id == supervisor_id, employee.department_id == supervisor.department_id)
    ).mappings().first()
    if not row:
        return {"cl_pending": 0, "cl_in_progress": 0, "cl_approved": 0}
    return {key: int(value or 0) for key, value in row.items()}


def get_supervisor_pending(db: Session, supervisor_id: int) -> List[dict]:
    """Open CLs of the supervisor's department, newest first."""
    employee = aliased(models.User)
    supervisor = aliased(models.User)
    rows = db.execute(
        select(
            models.CLHeader.id,
            employee.name.label("employee_name"),
            employee.employee_id.label("employee_code"),
            models.Department.name.label("department_name"),
            models.Position.title.label("position_title"),
            models.CLHeader.status,
            models.CLHeader.created_at.label("submitted_at"),
        )
        .select_from(models.CLHeader)
        .join(employee, models.CLHeader.employee_id == employee.id)
        .join(supervisor, models.CLHeader.supervisor_id == supervisor.id)
        .join(models.Department, employee.department_id == models.Department.id)
        .join(models.Position, employee.position_id == models.Position.id)
        .where(
            supervisor.id == supervisor_id,
            employee.department_id == supervisor.department_id,
            models.CLHeader.status.in_(sorted(OPEN_CL_STATUSES)),
        )
        .order_by(models.CLHeader.created_at.desc(), models.CLHeader.id.desc())
    ).mappings().all()
    return [dict(r) for r in rows]
