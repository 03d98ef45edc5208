"""
App assembly entry point.

Re-exports the FastAPI `app` from `appraisal.api.main` so servers can be
pointed at `app:app`.
"""

from appraisal.api.main import app  # noqa: F401
