"""
Individual Development Plan workflow.

An IDP is opened for an existing CL, starts empty, and is filled through
upserts: items carrying an id are edited in place, items without one are
inserted as NOT_STARTED.
"""
import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from appraisal import recent_actions
from appraisal.db import models, schemas
from appraisal.db.database import transaction
from appraisal.db.repositories import development as idp_repo
from appraisal.db.repositories import leveling as cl_repo
from appraisal.errors import NotFoundError, ValidationError
from appraisal.recent_actions import RecentActionType
from appraisal.services.workflow_base import WorkflowManager
from appraisal.utils.feature_flags import strict_item_match
from appraisal.utils.statuses import STATUS_PENDING_AM

logger = logging.getLogger(__name__)


class IDPWorkflowManager(WorkflowManager):
    label = "IDP"

    def _header_exists(self, header_id: int) -> bool:
        return idp_repo.get_idp_header(self.db, header_id) is not None

    def get_by_id(self, header_id: int) -> Optional[dict]:
        header = idp_repo.get_idp_header(self.db, header_id)
        if header is None:
            return None
        return {"header": header, "items": idp_repo.get_idp_items(self.db, header_id)}

    def require(self, header_id: int) -> dict:
        detail = self.get_by_id(header_id)
        if detail is None:
            raise NotFoundError("IDP not found", context={"id": header_id})
        return detail

    def create(self, idp: schemas.IDPCreate, *, actor_id: Optional[int] = None) -> int:
        """Insert an empty DRAFT IDP for an existing CL."""
        with transaction(self.db):
            if cl_repo.get_cl_header(self.db, idp.cl_header_id) is None:
                raise ValidationError(
                    "cl_header_id does not reference an existing CL",
                    context={"cl_header_id": idp.cl_header_id},
                )
            header = idp_repo.insert_idp_header(self.db, idp)
            header_id = header.id

        logger.info("idp_create: id=%s cl_header_id=%s", header_id, idp.cl_header_id)
        self._notify("idp_create_notification", self.notifications.notify_idp_created, header)
        self._record(
            "idp_create_recent_action",
            recent_actions.log_idp,
            actor_id=actor_id or idp.supervisor_id,
            header=header,
            action=RecentActionType.IDP_CREATE,
            title=f"Started IDP #{header_id}",
        )
        return header_id

    def update(
        self,
        header_id: int,
        items: Iterable[schemas.IDPItemUpsert],
        *,
        expected_version: Optional[int] = None,
        actor_id: Optional[int] = None,
    ) -> dict:
        """Upsert a batch of items in one transaction and return the refreshed IDP.

        Updates are scoped to this header, so an id belonging to another IDP
        matches nothing and is skipped (or rejected in strict mode).
        """
        items = list(items)
        strict = strict_item_match()
        updated = inserted = 0
        with transaction(self.db):
            self._bump_header(idp_repo.touch_idp_header, header_id, expected_version=expected_version)
            for item in items:
                if item.id is not None:
                    rows = idp_repo.update_idp_item(self.db, header_id, item)
                    if rows == 0 and strict:
                        raise NotFoundError(
                            f"IDP item {item.id} not found on IDP {header_id}",
                            context={"id": header_id, "item_id": item.id},
                        )
                    updated += rows
                else:
                    idp_repo.insert_idp_item(self.db, header_id, item)
                    inserted += 1

        logger.info("idp_update: id=%s updated=%s inserted=%s", header_id, updated, inserted)
        header = idp_repo.get_idp_header(self.db, header_id)
        self._record(
            "idp_update_recent_action",
            recent_actions.log_idp,
            actor_id=actor_id or header.supervisor_id,
            header=header,
            action=RecentActionType.IDP_UPDATE,
            title=f"Updated IDP #{header_id}",
            description=f"{updated} updated, {inserted} added",
        )
        return self.require(header_id)

    def submit(
        self,
        header_id: int,
        *,
        expected_version: Optional[int] = None,
        actor_id: Optional[int] = None,
    ) -> dict:
        with transaction(self.db):
            self._bump_header(
                idp_repo.touch_idp_header,
                header_id,
                status=STATUS_PENDING_AM,
                expected_version=expected_version,
            )

        logger.info("idp_submit: id=%s status=%s", header_id, STATUS_PENDING_AM)
        header: models.IDPHeader = idp_repo.get_idp_header(self.db, header_id)
        self._notify("idp_submit_notification", self.notifications.notify_idp_submitted, header)
        self._record(
            "idp_submit_recent_action",
            recent_actions.log_idp,
            actor_id=actor_id or header.supervisor_id,
            header=header,
            action=RecentActionType.IDP_SUBMIT,
            title=f"Submitted IDP #{header_id}",
        )
        return self.require(header_id)

    def list_employees_for_creation(self, supervisor_id: int) -> list:
        return idp_repo.get_employees_for_idp_creation(self.db, supervisor_id)


def get_idp_workflow_manager(db: Session) -> IDPWorkflowManager:
    return IDPWorkflowManager(db)
