from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require_admin
from jobly.crud import job as job_crud
from jobly.schemas.base import DeletedResponse
from jobly.schemas.job import JobCreateRequest, JobEnvelope, JobListResponse, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", status_code=201, response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a job posting: {title, salary, equity, companyHandle}.

    Authorization required: admin
    """
    job = job_crud.create(db, request.model_dump(by_alias=True))
    return {"job": job}


@router.get("", response_model=JobListResponse)
def list_jobs(
    title_like: Optional[str] = Query(None, alias="titleLike"),
    min_salary: Optional[int] = Query(None, alias="minSalary"),
    has_equity: bool = Query(False, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    """
    List jobs, ordered by title.

    Optional filters:
    - titleLike: case-insensitive partial match on the title
    - minSalary: inclusive lower bound on salary (must not be negative)
    - hasEquity: when true, only jobs offering non-zero equity

    Authorization required: none
    """
    jobs = job_crud.find_all(db, title_like=title_like, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": jobs}


@router.get("/{title}", response_model=JobEnvelope)
def get_job(title: str, db: Session = Depends(get_db)):
    """
    A single job by title.

    Authorization required: none
    """
    return {"job": job_crud.get(db, title)}


@router.patch("/{title}", response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def update_job(title: str, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a job: any of title, salary, equity.

    Authorization required: admin
    """
    job = job_crud.update(db, title, request.model_dump(exclude_unset=True, by_alias=True))
    return {"job": job}


@router.delete("/{title}", response_model=DeletedResponse, dependencies=[Depends(require_admin)])
def delete_job(title: str, db: Session = Depends(get_db)):
    """
    Delete a job.

    Authorization required: admin
    """
    job_crud.remove(db, title)
    return {"deleted": title}
