from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BeforeValidator, Field, field_serializer

from jobly.schemas.base import CamelModel, RequestModel, decimal_to_str


def _float_as_text(v):
    # 0.2 must become Decimal("0.2"), not the float's binary expansion
    if isinstance(v, float):
        return repr(v)
    return v


Equity = Annotated[Decimal, BeforeValidator(_float_as_text), Field(ge=0, le=1)]


class JobCreateRequest(RequestModel):
    """Schema for creating a job. Equity may be sent as a number or a numeric string."""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Equity] = None
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(RequestModel):
    """Schema for a partial job update; moving a job to another company is not allowed"""
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Equity] = None


class JobResponse(CamelModel):
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str

    @field_serializer("equity")
    def serialize_equity(self, equity: Optional[Decimal]) -> Optional[str]:
        return decimal_to_str(equity)


class JobEnvelope(CamelModel):
    job: JobResponse


class JobListResponse(CamelModel):
    jobs: List[JobResponse]
