"""Best-effort execution of post-commit side effects."""
import logging
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def emit_best_effort(db: Session, label: str, fn: Callable[..., Any], *args, **kwargs) -> Optional[Any]:
    """Run ``fn`` after a workflow commit, swallowing and logging any failure.

    The session is rolled back on failure so the caller can keep reading from
    it; the already committed workflow change is not affected.
    """
    try:
        return fn(*args, **kwargs)
    except Exception as exc:
        try:
            db.rollback()
        except Exception:  # pragma: no cover - connection already gone
            logger.debug("side_effect_rollback_failed: %s", label, exc_info=True)
        logger.warning("side_effect_failed: %s: %s", label, exc)
        return None
