from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

from .leveling import HeaderStatus


class IDPCreate(BaseModel):
    cl_header_id: PositiveInt
    employee_id: PositiveInt
    supervisor_id: PositiveInt
    cycle_id: PositiveInt


class IDPItemUpsert(BaseModel):
    """An item without ``id`` is inserted; with ``id`` its activity fields are updated."""
    id: Optional[PositiveInt] = None
    competency_id: Optional[PositiveInt] = None
    current_level: Optional[int] = Field(default=None, ge=0)
    target_level: Optional[int] = Field(default=None, ge=0)
    development_activity: Optional[str] = None
    development_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def _new_items_need_competency(self):
        if self.id is None and self.competency_id is None:
            raise ValueError("competency_id is required for new IDP items")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class IDPUpdate(BaseModel):
    items: List[IDPItemUpsert] = Field(default_factory=list)
    expected_version: Optional[PositiveInt] = None


class IDPItem(BaseModel):
    id: int
    idp_header_id: int
    competency_id: int
    competency_name: Optional[str] = None
    current_level: Optional[int] = None
    target_level: Optional[int] = None
    development_activity: Optional[str] = None
    development_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class IDPHeader(BaseModel):
    id: int
    cl_header_id: Optional[int] = None
    employee_id: int
    supervisor_id: int
    cycle_id: int
    status: HeaderStatus
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class IDPDetail(BaseModel):
    header: IDPHeader
    items: List[IDPItem]


class EmployeeForIDP(BaseModel):
    employee_id: int
    name: str
    position: Optional[str] = None
    cl_id: int
    cl_approved_date: Optional[datetime] = None
