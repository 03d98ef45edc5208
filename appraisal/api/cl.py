"""
Competency Leveling API endpoints.

Create, read, edit and submit CLs, plus the supervisor dashboard reads.
"""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from appraisal.api.deps import get_actor_id, get_cl_manager, raise_http
from appraisal.db import schemas
from appraisal.errors import WorkflowError
from appraisal.services.cl_workflow import CLWorkflowManager

router = APIRouter(prefix="/cl", tags=["competency-leveling"])


@router.get("/supervisor/{supervisor_id}/summary", response_model=schemas.SupervisorSummary)
def get_supervisor_summary_endpoint(
    supervisor_id: int = Path(gt=0),
    manager: CLWorkflowManager = Depends(get_cl_manager),
):
    return manager.get_supervisor_summary(supervisor_id)


@router.get("/supervisor/{supervisor_id}/pending", response_model=List[schemas.PendingCL])
def get_supervisor_pending_endpoint(
    supervisor_id: int = Path(gt=0),
    manager: CLWorkflowManager = Depends(get_cl_manager),
):
    return manager.list_supervisor_pending(supervisor_id)


@router.get("/employee/{employee_id}/competencies", response_model=schemas.CompetencyPreview)
def preview_competencies_endpoint(
    employee_id: int = Path(gt=0),
    manager: CLWorkflowManager = Depends(get_cl_manager),
):
    try:
        return manager.preview_competencies(employee_id)
    except WorkflowError as exc:
        raise_http(exc)


@router.get("/{cl_id}", response_model=schemas.CLDetail)
def get_cl_endpoint(
    cl_id: int = Path(gt=0),
    manager: CLWorkflowManager = Depends(get_cl_manager),
):
    detail = manager.get_by_id(cl_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="CL not found")
    return detail


@router.post("", response_model=schemas.CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_cl_endpoint(
    cl: schemas.CLCreate,
    manager: CLWorkflowManager = Depends(get_cl_manager),
    actor_id: Optional[int] = Depends(get_actor_id),
):
    return {"id": manager.create(cl, actor_id=actor_id)}


@router.put("/{cl_id}", response_model=schemas.CLDetail)
def update_cl_endpoint(
    payload: schemas.CLUpdate,
    cl_id: int = Path(gt=0),
    manager: CLWorkflowManager = Depends(get_cl_manager),
    actor_id: Optional[int] = Depends(get_actor_id),
):
    try:
        return manager.update(
            cl_id,
            payload.items,
            expected_version=payload.expected_version,
            actor_id=actor_id,
        )
    except WorkflowError as exc:
        raise_http(exc)


@router.put("/{cl_id}/submit", response_model=schemas.CLDetail)
def submit_cl_endpoint(
    cl_id: int = Path(gt=0),
    payload: Optional[schemas.SubmitRequest] = Body(default=None),
    manager: CLWorkflowManager = Depends(get_cl_manager),
    actor_id: Optional[int] = Depends(get_actor_id),
):
    expected_version = payload.expected_version if payload else None
    try:
        return manager.submit(cl_id, expected_version=expected_version, actor_id=actor_id)
    except WorkflowError as exc:
        raise_http(exc)
