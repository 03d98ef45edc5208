"""
Header and item status constants.

Statuses are persisted as free text so the surrounding approval chain can add
its own values; this module only names the ones the workflow engine knows.
"""

from enum import Enum
from typing import FrozenSet, Union

STATUS_DRAFT = "DRAFT"
STATUS_PENDING_AM = "PENDING_AM"

# Written by the external approval chain, read by dashboard queries.
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_PENDING_MANAGER = "PENDING_MANAGER"
STATUS_APPROVED = "APPROVED"

ITEM_STATUS_NOT_STARTED = "NOT_STARTED"

# Statuses still awaiting action from the owning supervisor's chain
OPEN_CL_STATUSES: FrozenSet[str] = frozenset({
    STATUS_DRAFT,
    STATUS_IN_PROGRESS,
    STATUS_PENDING_AM,
    STATUS_PENDING_MANAGER,
})


class WorkflowStatus(str, Enum):
    """Known header statuses; unknown values are extensions, not errors."""
    DRAFT = STATUS_DRAFT
    PENDING_AM = STATUS_PENDING_AM
    IN_PROGRESS = STATUS_IN_PROGRESS
    PENDING_MANAGER = STATUS_PENDING_MANAGER
    APPROVED = STATUS_APPROVED

    @classmethod
    def parse(cls, value: str) -> Union["WorkflowStatus", str]:
        """Return the matching member, or the raw value for an extension status."""
        try:
            return cls(value)
        except ValueError:
            return value

