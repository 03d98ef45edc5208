"""
Competency catalog reader.

Read-only lookups against the externally owned users, positions, departments
and competency mapping tables.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from appraisal.db import models


def get_employee_position_id(db: Session, employee_id: int) -> Optional[int]:
    """Return the employee's position id, or None when it cannot be resolved."""
    return db.execute(
        select(models.User.position_id).where(models.User.id == employee_id)
    ).scalar_one_or_none()


def get_position_competencies(db: Session, position_id: Optional[int]) -> List[Tuple[int, int]]:
    """Return ``(competency_id, required_level)`` pairs mapped to a position, in mapping order."""
    if position_id is None:
        return []
    rows = db.execute(
        select(models.PositionCompetency.competency_id, models.PositionCompetency.required_level)
        .where(models.PositionCompetency.position_id == position_id)
        .order_by(models.PositionCompetency.id)
    ).all()
    return [(competency_id, required_level) for competency_id, required_level in rows]


def get_employee_profile(db: Session, employee_id: int) -> Optional[dict]:
    row = db.execute(
        select(
            models.User.id,
            models.User.name,
            models.User.employee_id,
            models.User.position_id,
            models.User.department_id,
            models.Position.title.label("position_title"),
            models.Department.name.label("department_name"),
        )
        .select_from(models.User)
        .outerjoin(models.Position, models.User.position_id == models.Position.id)
        .outerjoin(models.Department, models.User.department_id == models.Department.id)
        .where(models.User.id == employee_id)
    ).mappings().first()
    return dict(row) if row else None


def get_mapped_competencies(db: Session, position_id: Optional[int]) -> List[dict]:
    """Competency metadata for every mapping of a position."""
    if position_id is None:
        return []
    rows = db.execute(
        select(
            models.Competency.id.label("competency_id"),
            models.Competency.name,
            models.Competency.description,
            models.PositionCompetency.required_level.label("mplr"),
            models.PositionCompetency.max_level_increment,
        )
        .join(models.Competency, models.Competency.id == models.PositionCompetency.competency_id)
        .where(models.PositionCompetency.position_id == position_id)
        .order_by(models.PositionCompetency.id)
    ).mappings().all()
    return [dict(r) for r in rows]
