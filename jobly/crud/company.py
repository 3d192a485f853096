"""
CRUD operations for the Company model.

Functions raise NotFoundError / BadRequestError instead of returning None,
so the API layer can pass results straight through.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, text
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import company_filters, rejecting_conflicts, sql_for_partial_update, typed_bindparams
from jobly.models.company import Company
from jobly.models.job import Job

logger = logging.getLogger(__name__)

# Public (camelCase) field names whose column name differs
COMPANY_COLUMNS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def create(db: Session, data: Dict[str, Any]) -> Company:
    """
    Create a new company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        Created Company instance

    Raises:
        BadRequestError: If a company with this handle already exists
    """
    handle = data["handle"]
    if db.get(Company, handle) is not None:
        raise BadRequestError(f"Duplicate company: {handle}")

    company = Company(
        handle=handle,
        name=data["name"],
        description=data["description"],
        num_employees=data.get("numEmployees"),
        logo_url=data.get("logoUrl"),
    )
    db.add(company)
    with rejecting_conflicts(db, f"Duplicate company name: {company.name}"):
        db.commit()
    db.refresh(company)

    logger.info(f"Created company {company.handle}")
    return company


def find_all(
    db: Session,
    name_like: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[Company]:
    """
    List companies ordered by name, optionally filtered.

    Args:
        name_like: Case-insensitive substring of the company name
        min_employees: Inclusive lower bound on num_employees
        max_employees: Inclusive upper bound on num_employees

    Raises:
        BadRequestError: If min_employees > max_employees
    """
    query = select(Company).where(*company_filters(name_like, min_employees, max_employees))
    return list(db.scalars(query.order_by(Company.name)))


def get(db: Session, handle: str) -> Company:
    """
    Retrieve a company by handle; its jobs are available as `company.jobs`.

    Raises:
        NotFoundError: If no such company
    """
    company = db.get(Company, handle)
    if company is None:
        raise NotFoundError(f"No company: {handle}")
    return company


def jobs(db: Session, handle: str) -> List[Job]:
    """
    Jobs posted by a company, ordered by title.

    Raises:
        NotFoundError: If no such company
    """
    get(db, handle)
    return list(db.scalars(select(Job).where(Job.company_handle == handle).order_by(Job.title)))


def update(db: Session, handle: str, data: Dict[str, Any]) -> Company:
    """
    Partial update: only the fields present in `data` change.

    Data can include: {name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no such company
    """
    set_cols, values = sql_for_partial_update(data, COMPANY_COLUMNS)

    stmt = text(
        f"UPDATE companies SET {set_cols} WHERE handle = :lookup_handle RETURNING handle"
    ).bindparams(*typed_bindparams(Company.__table__, values), lookup_handle=handle)
    with rejecting_conflicts(db, "Invalid update"):
        row = db.execute(stmt).first()
        if row is None:
            db.rollback()
            raise NotFoundError(f"No company: {handle}")
        db.commit()

    logger.info(f"Updated company {handle}: {', '.join(values)}")
    return get(db, row.handle)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no such company
    """
    row = db.execute(
        delete(Company).where(Company.handle == handle).returning(Company.handle)
    ).first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")
    db.commit()

    logger.info(f"Deleted company {handle}")
