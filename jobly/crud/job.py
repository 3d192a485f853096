"""
CRUD operations for the Job model.

Jobs are addressed by their (unique) title; the integer id is only used
internally, e.g. for applications.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, text
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import job_filters, rejecting_conflicts, sql_for_partial_update, typed_bindparams
from jobly.models.company import Company
from jobly.models.job import Job

logger = logging.getLogger(__name__)

JOB_COLUMNS = {
    "companyHandle": "company_handle",
}


def _by_title(db: Session, title: str) -> Optional[Job]:
    return db.scalars(select(Job).where(Job.title == title)).first()


def create(db: Session, data: Dict[str, Any]) -> Job:
    """
    Create a new job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        Created Job instance with id

    Raises:
        BadRequestError: If the title is taken or the company doesn't exist
    """
    title = data["title"]
    if _by_title(db, title) is not None:
        raise BadRequestError(f"Duplicate job: {title}")

    company_handle = data["companyHandle"]
    if db.get(Company, company_handle) is None:
        raise BadRequestError(f"No company: {company_handle}")

    job = Job(
        title=title,
        salary=data.get("salary"),
        equity=data.get("equity"),
        company_handle=company_handle,
    )
    db.add(job)
    with rejecting_conflicts(db, f"Invalid job: {title}"):
        db.commit()
    db.refresh(job)

    logger.info(f"Created job {job.id}: {job.title} ({job.company_handle})")
    return job


def find_all(
    db: Session,
    title_like: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: bool = False,
) -> List[Job]:
    """
    List jobs ordered by title, optionally filtered.

    Args:
        title_like: Case-insensitive substring of the title
        min_salary: Inclusive lower bound on salary
        has_equity: Only jobs with non-zero equity when True

    Raises:
        BadRequestError: If min_salary is negative
    """
    query = select(Job).where(*job_filters(title_like, min_salary, has_equity))
    return list(db.scalars(query.order_by(Job.title)))


def get(db: Session, title: str) -> Job:
    """
    Retrieve a job by title.

    Raises:
        NotFoundError: If no such job
    """
    job = _by_title(db, title)
    if job is None:
        raise NotFoundError(f"No job: {title}")
    return job


def get_id(db: Session, title: str) -> int:
    """Id of the job with this title; NotFoundError if there is none."""
    job_id = db.scalar(select(Job.id).where(Job.title == title))
    if job_id is None:
        raise NotFoundError(f"No job: {title}")
    return job_id


def update(db: Session, title: str, data: Dict[str, Any]) -> Job:
    """
    Partial update: only the fields present in `data` change.

    Data can include: {title, salary, equity, companyHandle}

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no such job
    """
    set_cols, values = sql_for_partial_update(data, JOB_COLUMNS)

    stmt = text(
        f"UPDATE jobs SET {set_cols} WHERE title = :lookup_title RETURNING id"
    ).bindparams(*typed_bindparams(Job.__table__, values), lookup_title=title)
    with rejecting_conflicts(db, "Invalid update"):
        row = db.execute(stmt).first()
        if row is None:
            db.rollback()
            raise NotFoundError(f"No job: {title}")
        db.commit()

    logger.info(f"Updated job {row.id} ({title}): {', '.join(values)}")
    return db.get(Job, row.id)


def remove(db: Session, title: str) -> None:
    """
    Delete a job by title.

    Raises:
        NotFoundError: If no such job
    """
    row = db.execute(delete(Job).where(Job.title == title).returning(Job.id)).first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No job: {title}")
    db.commit()

    logger.info(f"Deleted job {row.id}: {title}")
