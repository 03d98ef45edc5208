"""
Competency Leveling workflow.

Creates a CL preloaded from the employee's position mappings, applies item
edits while keeping each item's score equal to ``weight / 100 * assigned_level``,
and moves the header from DRAFT to PENDING_AM on submission.
"""
import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from appraisal import recent_actions
from appraisal.db import models, schemas
from appraisal.db.database import transaction
from appraisal.db.repositories import catalog as catalog_repo
from appraisal.db.repositories import leveling as cl_repo
from appraisal.errors import NotFoundError, ValidationError
from appraisal.recent_actions import RecentActionType
from appraisal.services.workflow_base import WorkflowManager
from appraisal.utils.feature_flags import enforce_weight_total, strict_item_match
from appraisal.utils.scoring import total_weight
from appraisal.utils.statuses import STATUS_PENDING_AM

logger = logging.getLogger(__name__)

REQUIRED_WEIGHT_TOTAL = 100


class CLWorkflowManager(WorkflowManager):
    label = "CL"

    def _header_exists(self, header_id: int) -> bool:
        return cl_repo.get_cl_header(self.db, header_id) is not None

    # === Reads ===

    def get_by_id(self, header_id: int) -> Optional[dict]:
        """Return ``{"header", "items"}`` with competency names, or None."""
        header = cl_repo.get_cl_header(self.db, header_id)
        if header is None:
            return None
        return {"header": header, "items": cl_repo.get_cl_items(self.db, header_id)}

    def require(self, header_id: int) -> dict:
        detail = self.get_by_id(header_id)
        if detail is None:
            raise NotFoundError("CL not found", context={"id": header_id})
        return detail

    # === Mutations ===

    def create(self, cl: schemas.CLCreate, *, actor_id: Optional[int] = None) -> int:
        """Insert a DRAFT header and one item per competency mapped to the employee's position.

        An employee without a resolvable position, or a position without
        mappings, yields a header with no items.
        """
        with transaction(self.db):
            header = cl_repo.insert_cl_header(self.db, cl)
            header_id = header.id
            position_id = catalog_repo.get_employee_position_id(self.db, cl.employee_id)
            mappings = catalog_repo.get_position_competencies(self.db, position_id)
            item_count = cl_repo.insert_preloaded_items(self.db, header_id, mappings)

        logger.info("cl_create: id=%s employee_id=%s position_id=%s items=%s",
                    header_id, cl.employee_id, position_id, item_count)
        self._notify("cl_create_notification", self.notifications.notify_cl_created, header)
        self._record(
            "cl_create_recent_action",
            recent_actions.log_cl,
            actor_id=actor_id or cl.supervisor_id,
            header=header,
            action=RecentActionType.CL_CREATE,
            title=f"Started CL #{header_id}",
        )
        return header_id

    def update(
        self,
        header_id: int,
        items: Iterable[schemas.CLItemUpdate],
        *,
        expected_version: Optional[int] = None,
        actor_id: Optional[int] = None,
    ) -> dict:
        """Apply a partial batch of item edits and return the refreshed CL.

        Items not named are left untouched. An item id that does not belong to
        the header is skipped, or rejected when strict item matching is on.
        """
        items = list(items)
        strict = strict_item_match()
        with transaction(self.db):
            self._bump_header(cl_repo.touch_cl_header, header_id, expected_version=expected_version)
            matched = 0
            for item in items:
                rows = cl_repo.update_cl_item(self.db, header_id, item)
                if rows == 0 and strict:
                    raise NotFoundError(
                        f"CL item {item.id} not found on CL {header_id}",
                        context={"id": header_id, "item_id": item.id},
                    )
                matched += rows

        logger.info("cl_update: id=%s supplied=%s matched=%s", header_id, len(items), matched)
        header = cl_repo.get_cl_header(self.db, header_id)
        self._record(
            "cl_update_recent_action",
            recent_actions.log_cl,
            actor_id=actor_id or header.supervisor_id,
            header=header,
            action=RecentActionType.CL_UPDATE,
            title=f"Updated CL #{header_id}",
            description=f"{matched} item(s) updated",
        )
        return self.require(header_id)

    def submit(
        self,
        header_id: int,
        *,
        expected_version: Optional[int] = None,
        actor_id: Optional[int] = None,
    ) -> dict:
        """Move the CL to PENDING_AM. Re-submitting is allowed and changes nothing else."""
        with transaction(self.db):
            if enforce_weight_total() and self._header_exists(header_id):
                self._check_weight_total(header_id)
            self._bump_header(
                cl_repo.touch_cl_header,
                header_id,
                status=STATUS_PENDING_AM,
                expected_version=expected_version,
            )

        logger.info("cl_submit: id=%s status=%s", header_id, STATUS_PENDING_AM)
        header: models.CLHeader = cl_repo.get_cl_header(self.db, header_id)
        self._notify("cl_submit_notification", self.notifications.notify_cl_submitted, header)
        self._record(
            "cl_submit_recent_action",
            recent_actions.log_cl,
            actor_id=actor_id or header.supervisor_id,
            header=header,
            action=RecentActionType.CL_SUBMIT,
            title=f"Submitted CL #{header_id}",
        )
        return self.require(header_id)

    def _check_weight_total(self, header_id: int) -> None:
        weights = cl_repo.get_item_weights(self.db, header_id)
        total = total_weight(weights)
        if not weights or total != REQUIRED_WEIGHT_TOTAL:
            raise ValidationError(
                f"CL item weights must total {REQUIRED_WEIGHT_TOTAL}, got {total}",
                context={"id": header_id, "total_weight": total, "items": len(weights)},
            )

    # === Dashboards ===

    def get_supervisor_summary(self, supervisor_id: int) -> dict:
        return cl_repo.get_supervisor_summary(self.db, supervisor_id)

    def list_supervisor_pending(self, supervisor_id: int) -> list:
        return cl_repo.get_supervisor_pending(self.db, supervisor_id)

    def preview_competencies(self, employee_id: int) -> dict:
        """The employee profile and the competencies a new CL would be preloaded with."""
        employee = catalog_repo.get_employee_profile(self.db, employee_id)
        if employee is None:
            raise NotFoundError("Employee not found", context={"employee_id": employee_id})
        competencies = catalog_repo.get_mapped_competencies(self.db, employee["position_id"])
        return {"employee": employee, "competencies": competencies}


def get_cl_workflow_manager(db: Session) -> CLWorkflowManager:
    return CLWorkflowManager(db)
