from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base, now_utc


class IDPHeader(Base):
    __tablename__ = 'idp_headers'
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Logical link to the originating CL; existence is checked on create.
    cl_header_id = Column(Integer, nullable=True)
    employee_id = Column(Integer, nullable=False)
    supervisor_id = Column(Integer, nullable=False)
    cycle_id = Column(Integer, nullable=False)
    status = Column(String(32), nullable=False, default='DRAFT')
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    items = relationship(
        "IDPItem",
        back_populates="header",
        cascade="all, delete-orphan",
        order_by="IDPItem.id",
    )

    __table_args__ = (
        Index('idx_idp_headers_supervisor_id', 'supervisor_id'),
        Index('idx_idp_headers_status', 'status'),
        Index('idx_idp_headers_cl_header_id', 'cl_header_id'),
    )


class IDPItem(Base):
    __tablename__ = 'idp_items'
    id = Column(Integer, primary_key=True, autoincrement=True)
    idp_header_id = Column(Integer, ForeignKey('idp_headers.id', ondelete='CASCADE'), nullable=False)
    competency_id = Column(Integer, ForeignKey('competencies.id'), nullable=False)
    current_level = Column(Integer, nullable=True)
    target_level = Column(Integer, nullable=True)
    development_activity = Column(Text, nullable=True)
    development_type = Column(String(100), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(String(32), nullable=False, default='NOT_STARTED')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    header = relationship("IDPHeader", back_populates="items")
    competency = relationship("Competency")

    @property
    def competency_name(self):
        return self.competency.name if self.competency is not None else None

    __table_args__ = (
        Index('idx_idp_items_idp_header_id', 'idp_header_id'),
    )
