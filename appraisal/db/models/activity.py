from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, Index

from .base import Base, now_utc


class Notification(Base):
    __tablename__ = 'notifications'

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipient_id = Column(Integer, nullable=False)
    module = Column(String(50), nullable=False, default='Competency Leveling')
    event_type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    action_url = Column(String(500), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_notifications_recipient_id_created_at', 'recipient_id', 'created_at'),
        Index('idx_notifications_recipient_id_is_read', 'recipient_id', 'is_read'),
    )


class RecentAction(Base):
    __tablename__ = 'recent_actions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    actor_id = Column(Integer, nullable=False)
    module = Column(String(10), nullable=False, default='CL')  # 'CL'|'IDP'
    action_type = Column(String(50), nullable=False)
    cl_id = Column(Integer, nullable=True)
    idp_id = Column(Integer, nullable=True)
    employee_id = Column(Integer, nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_recent_actions_actor_id_created_at', 'actor_id', 'created_at'),
    )
