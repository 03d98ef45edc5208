from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer, PositiveInt

from appraisal.utils.statuses import WorkflowStatus

# Decimal in Python, plain number on the wire
ScoreValue = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Known statuses become WorkflowStatus members, extension statuses stay raw text
HeaderStatus = Annotated[
    str,
    AfterValidator(WorkflowStatus.parse),
    PlainSerializer(lambda s: getattr(s, "value", s), return_type=str),
]


class CLCreate(BaseModel):
    employee_id: PositiveInt
    supervisor_id: PositiveInt
    department_id: PositiveInt
    cycle_id: PositiveInt


class CLItemUpdate(BaseModel):
    id: PositiveInt
    assigned_level: int = Field(ge=0)
    weight: int = Field(ge=0, le=100)
    justification: Optional[str] = None
    pdf_path: Optional[str] = None  # only overwrites when provided


class CLUpdate(BaseModel):
    items: List[CLItemUpdate] = Field(default_factory=list)
    expected_version: Optional[PositiveInt] = None


class SubmitRequest(BaseModel):
    expected_version: Optional[PositiveInt] = None


class CreatedResponse(BaseModel):
    id: int


class CLItem(BaseModel):
    id: int
    cl_header_id: int
    competency_id: int
    competency_name: Optional[str] = None
    competency_description: Optional[str] = None
    mplr_level: Optional[int] = None
    assigned_level: Optional[int] = None
    weight: int
    justification: Optional[str] = None
    score: Optional[ScoreValue] = None
    pdf_path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class CLHeader(BaseModel):
    id: int
    employee_id: int
    supervisor_id: int
    department_id: int
    cycle_id: int
    status: HeaderStatus
    has_assistant_manager: bool
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class CLDetail(BaseModel):
    header: CLHeader
    items: List[CLItem]


class SupervisorSummary(BaseModel):
    cl_pending: int = 0
    cl_in_progress: int = 0
    cl_approved: int = 0


class PendingCL(BaseModel):
    id: int
    employee_name: Optional[str] = None
    employee_code: Optional[str] = None
    department_name: Optional[str] = None
    position_title: Optional[str] = None
    status: HeaderStatus
    submitted_at: Optional[datetime] = None


class EmployeeProfile(BaseModel):
    id: int
    name: str
    employee_id: str
    position_id: Optional[int] = None
    department_id: Optional[int] = None
    position_title: Optional[str] = None
    department_name: Optional[str] = None


class MappedCompetency(BaseModel):
    competency_id: int
    name: str
    description: Optional[str] = None
    mplr: int
    max_level_increment: Optional[int] = None


class CompetencyPreview(BaseModel):
    employee: EmployeeProfile
    competencies: List[MappedCompetency]
