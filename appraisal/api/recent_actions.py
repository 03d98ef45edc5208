"""
Recent actions API endpoint.

Lists what the calling user most recently did across CLs and IDPs.
"""
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from appraisal import recent_actions
from appraisal.api.deps import require_actor_id
from appraisal.db import schemas
from appraisal.db.database import get_db

router = APIRouter(prefix="/recent-actions", tags=["recent-actions"])


@router.get("", response_model=List[schemas.RecentAction])
def get_recent_actions_endpoint(
    limit: int = Query(default=20, ge=1, le=100),
    db: Session = Depends(get_db),
    actor_id: int = Depends(require_actor_id),
):
    return recent_actions.get_recent_actions(db, actor_id, limit=limit)
