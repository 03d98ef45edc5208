"""
Individual Development Plan API endpoints.
"""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from appraisal.api.deps import get_actor_id, get_idp_manager, raise_http
from appraisal.db import schemas
from appraisal.errors import WorkflowError
from appraisal.services.idp_workflow import IDPWorkflowManager

router = APIRouter(prefix="/idp", tags=["development-plans"])


@router.get("/supervisor/{supervisor_id}/for-creation", response_model=List[schemas.EmployeeForIDP])
def get_employees_for_creation_endpoint(
    supervisor_id: int = Path(gt=0),
    manager: IDPWorkflowManager = Depends(get_idp_manager),
):
    """Employees whose CL is approved but who have no development plan yet."""
    return manager.list_employees_for_creation(supervisor_id)


@router.get("/{idp_id}", response_model=schemas.IDPDetail)
def get_idp_endpoint(
    idp_id: int = Path(gt=0),
    manager: IDPWorkflowManager = Depends(get_idp_manager),
):
    detail = manager.get_by_id(idp_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="IDP not found")
    return detail


@router.post("", response_model=schemas.CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_idp_endpoint(
    idp: schemas.IDPCreate,
    manager: IDPWorkflowManager = Depends(get_idp_manager),
    actor_id: Optional[int] = Depends(get_actor_id),
):
    try:
        return {"id": manager.create(idp, actor_id=actor_id)}
    except WorkflowError as exc:
        raise_http(exc)


@router.put("/{idp_id}", response_model=schemas.IDPDetail)
def update_idp_endpoint(
    payload: schemas.IDPUpdate,
    idp_id: int = Path(gt=0),
    manager: IDPWorkflowManager = Depends(get_idp_manager),
    actor_id: Optional[int] = Depends(get_actor_id),
):
    try:
        return manager.update(
            idp_id,
            payload.items,
            expected_version=payload.expected_version,
            actor_id=actor_id,
        )
    except WorkflowError as exc:
        raise_http(exc)


@router.put("/{idp_id}/submit", response_model=schemas.IDPDetail)
def submit_idp_endpoint(
    idp_id: int = Path(gt=0),
    payload: Optional[schemas.SubmitRequest] = Body(default=None),
    manager: IDPWorkflowManager = Depends(get_idp_manager),
    actor_id: Optional[int] = Depends(get_actor_id),
):
    expected_version = payload.expected_version if payload else None
    try:
        return manager.submit(idp_id, expected_version=expected_version, actor_id=actor_id)
    except WorkflowError as exc:
        raise_http(exc)
