"""
Domain-split SQLAlchemy models with a single aggregator.

Import ORM classes from here (``from appraisal.db import models``) so every
table is registered on ``Base.metadata`` before schema creation.
"""

from .base import Base, now_utc  # re-export

# Externally owned catalog
from .catalog import Department, Position, User, Competency, PositionCompetency, Cycle
# Workflow tables
from .leveling import CLHeader, CLItem
from .development import IDPHeader, IDPItem
# Side-effect tables
from .activity import Notification, RecentAction

__all__ = [
    # base
    "Base",
    "now_utc",
    # catalog
    "Department",
    "Position",
    "User",
    "Competency",
    "PositionCompetency",
    "Cycle",
    # competency leveling
    "CLHeader",
    "CLItem",
    # development plans
    "IDPHeader",
    "IDPItem",
    # notifications/recent actions
    "Notification",
    "RecentAction",
]
