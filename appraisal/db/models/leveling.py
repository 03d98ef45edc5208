from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index, Numeric
from sqlalchemy.orm import relationship

from .base import Base, now_utc


class CLHeader(Base):
    __tablename__ = 'cl_headers'
    id = Column(Integer, primary_key=True, autoincrement=True)
    # References into externally owned tables; stored, not enforced.
    employee_id = Column(Integer, nullable=False)
    supervisor_id = Column(Integer, nullable=False)
    department_id = Column(Integer, nullable=False)
    cycle_id = Column(Integer, nullable=False)
    status = Column(String(32), nullable=False, default='DRAFT')  # open-ended, see utils.statuses
    has_assistant_manager = Column(Boolean, nullable=False, default=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    items = relationship(
        "CLItem",
        back_populates="header",
        cascade="all, delete-orphan",
        order_by="CLItem.id",
    )

    __table_args__ = (
        Index('idx_cl_headers_supervisor_id', 'supervisor_id'),
        Index('idx_cl_headers_status', 'status'),
        Index('idx_cl_headers_employee_cycle', 'employee_id', 'cycle_id'),
    )


class CLItem(Base):
    __tablename__ = 'cl_items'
    id = Column(Integer, primary_key=True, autoincrement=True)
    cl_header_id = Column(Integer, ForeignKey('cl_headers.id', ondelete='CASCADE'), nullable=False)
    competency_id = Column(Integer, ForeignKey('competencies.id'), nullable=False)
    mplr_level = Column(Integer, nullable=True)
    assigned_level = Column(Integer, nullable=True)
    weight = Column(Integer, nullable=False, default=0)
    justification = Column(Text, nullable=True)
    # Always (weight / 100) * assigned_level; written together with both inputs.
    score = Column(Numeric(10, 2), nullable=True)
    pdf_path = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    header = relationship("CLHeader", back_populates="items")
    competency = relationship("Competency")

    @property
    def competency_name(self):
        return self.competency.name if self.competency is not None else None

    @property
    def competency_description(self):
        return self.competency.description if self.competency is not None else None

    __table_args__ = (
        Index('idx_cl_items_cl_header_id', 'cl_header_id'),
    )
