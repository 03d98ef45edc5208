"""
FastAPI app assembly: logging, middleware, error mapping and router wiring.
"""
import logging
import os

from fastapi import APIRouter, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from appraisal.api.cl import router as cl_router  # noqa: E402
from appraisal.api.idp import router as idp_router  # noqa: E402
from appraisal.api.notifications import router as notifications_router  # noqa: E402
from appraisal.api.recent_actions import router as recent_actions_router  # noqa: E402
from appraisal.errors import WorkflowError  # noqa: E402

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Competency Leveling & Development Plan Service",
    description="Workflow API for Competency Leveling records and Individual Development Plans.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

_default_origins = "http://localhost,http://localhost:3000,http://localhost:5173"
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _default_origins).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    # Routers normally translate these; this catches any that slip through.
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


@app.exception_handler(SQLAlchemyError)
async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("persistence_failure: %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        {"detail": "Internal server error"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


api_router = APIRouter(prefix="/api")
api_router.include_router(cl_router)
api_router.include_router(idp_router)
api_router.include_router(notifications_router)
api_router.include_router(recent_actions_router)
app.include_router(api_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "appraisal-service"}
