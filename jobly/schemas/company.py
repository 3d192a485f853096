"""
Pydantic schemas for companies.
"""

from typing import Annotated, List, Optional

from pydantic import AfterValidator, AnyUrl, Field, TypeAdapter, ValidationError

from jobly.schemas.base import CamelModel, RequestModel
from jobly.schemas.job import JobResponse

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(v: Optional[str]) -> Optional[str]:
    # Validate as a URI but keep the string exactly as given
    if v is not None:
        try:
            _url_adapter.validate_python(v)
        except ValidationError:
            raise ValueError("must be a valid URL")
    return v


LogoUrl = Annotated[Optional[str], AfterValidator(_check_url)]


class CompanyCreateRequest(RequestModel):
    """Schema for creating a company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: LogoUrl = None


class CompanyUpdateRequest(RequestModel):
    """Schema for a partial company update; the handle cannot change"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: LogoUrl = None


class CompanyData(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetail(CompanyData):
    """Company with its job postings"""
    jobs: List[JobResponse] = []


class CompanyResponse(CamelModel):
    company: CompanyData


class CompanyDetailResponse(CamelModel):
    company: CompanyDetail


class CompanyListResponse(CamelModel):
    companies: List[CompanyData]
