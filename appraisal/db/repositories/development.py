"""
Individual Development Plan repository functions.

Header insert, item upsert primitives scoped to their header, and the
supervisor query for CLs still waiting on a plan.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from appraisal.db import models, schemas
from appraisal.db.models import now_utc
from appraisal.utils.statuses import ITEM_STATUS_NOT_STARTED, STATUS_APPROVED, STATUS_DRAFT


def insert_idp_header(db: Session, idp: schemas.IDPCreate) -> models.IDPHeader:
    db_header = models.IDPHeader(
        cl_header_id=idp.cl_header_id,
        employee_id=idp.employee_id,
        supervisor_id=idp.supervisor_id,
        cycle_id=idp.cycle_id,
        status=STATUS_DRAFT,
    )
    db.add(db_header)
    db.flush()
    return db_header


def get_idp_header(db: Session, header_id: int) -> Optional[models.IDPHeader]:
    return db.query(models.IDPHeader).filter(models.IDPHeader.id == header_id).first()


def get_idp_items(db: Session, header_id: int) -> List[models.IDPItem]:
    return (
        db.query(models.IDPItem)
        .options(joinedload(models.IDPItem.competency))
        .filter(models.IDPItem.idp_header_id == header_id)
        .order_by(models.IDPItem.id)
        .all()
    )


def update_idp_item(db: Session, header_id: int, item: schemas.IDPItemUpsert) -> int:
    """Update the activity fields of an existing item; returns rows matched."""
    result = db.execute(
        update(models.IDPItem)
        .where(models.IDPItem.id == item.id, models.IDPItem.idp_header_id == header_id)
        .values(
            development_activity=item.development_activity,
            development_type=item.development_type,
            start_date=item.start_date,
            end_date=item.end_date,
            updated_at=now_utc(),
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def insert_idp_item(db: Session, header_id: int, item: schemas.IDPItemUpsert) -> models.IDPItem:
    db_item = models.IDPItem(
        idp_header_id=header_id,
        competency_id=item.competency_id,
        current_level=item.current_level,
        target_level=item.target_level,
        development_activity=item.development_activity,
        development_type=item.development_type,
        start_date=item.start_date,
        end_date=item.end_date,
        status=ITEM_STATUS_NOT_STARTED,
    )
    db.add(db_item)
    db.flush()
    return db_item


def touch_idp_header(
    db: Session,
    header_id: int,
    *,
    status: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> int:
    stmt = update(models.IDPHeader).where(models.IDPHeader.id == header_id)
    if expected_version is not None:
        stmt = stmt.where(models.IDPHeader.version == expected_version)
    values = {"updated_at": now_utc(), "version": models.IDPHeader.version + 1}
    if status is not None:
        values["status"] = status
    result = db.execute(stmt.values(**values).execution_options(synchronize_session=False))
    return result.rowcount


def get_employees_for_idp_creation(db: Session, supervisor_id: int) -> List[dict]:
    """Approved CLs of this supervisor that have no IDP yet, most recent first."""
    rows = db.execute(
        select(
            models.User.id.label("employee_id"),
            models.User.name,
            models.Position.title.label("position"),
            models.CLHeader.id.label("cl_id"),
            models.CLHeader.updated_at.label("cl_approved_date"),
        )
        .select_from(models.CLHeader)
        .join(models.User, models.CLHeader.employee_id == models.User.id)
        .outerjoin(models.Position, models.User.position_id == models.Position.id)
        .outerjoin(models.IDPHeader, models.IDPHeader.cl_header_id == models.CLHeader.id)
        .where(
            models.CLHeader.supervisor_id == supervisor_id,
            models.CLHeader.status == STATUS_APPROVED,
            models.IDPHeader.id.is_(None),
        )
        .order_by(models.CLHeader.updated_at.desc(), models.CLHeader.id.desc())
    ).mappings().all()
    return [dict(r) for r in rows]
