"""
Catalog tables owned by the surrounding HR system.

The workflow engine only reads them: employees resolve to a position, and a
position maps to the competencies (with required levels) a CL is preloaded
with.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base, now_utc


class Department(Base):
    __tablename__ = 'departments'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    has_am = Column(Boolean, nullable=False, default=False)  # department has an Assistant Manager step
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class Position(Base):
    __tablename__ = 'positions'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, unique=True)
    department_id = Column(Integer, ForeignKey('departments.id'), nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    competency_mappings = relationship("PositionCompetency", back_populates="position")


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(String(50), nullable=False, unique=True)  # HR employee code, not a row id
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    position_id = Column(Integer, ForeignKey('positions.id'), nullable=True)
    department_id = Column(Integer, ForeignKey('departments.id'), nullable=True)
    role = Column(String(20), nullable=False, default='Employee')
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_users_role', 'role'),
    )


class Competency(Base):
    __tablename__ = 'competencies'
    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class PositionCompetency(Base):
    __tablename__ = 'position_competencies'
    id = Column(Integer, primary_key=True, autoincrement=True)
    position_id = Column(Integer, ForeignKey('positions.id'), nullable=False)
    competency_id = Column(Integer, ForeignKey('competencies.id'), nullable=False)
    required_level = Column(Integer, nullable=False, default=1)
    max_level_increment = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    position = relationship("Position", back_populates="competency_mappings")
    competency = relationship("Competency")

    __table_args__ = (
        UniqueConstraint('position_id', 'competency_id', name='uq_position_competencies_pair'),
    )


class Cycle(Base):
    __tablename__ = 'cycles'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    type = Column(String(10), nullable=False, default='BOTH')  # 'CL'|'IDP'|'BOTH'
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
