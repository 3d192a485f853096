"""
SQL building helpers shared by the CRUD layer.

- sql_for_partial_update: turns a partial payload into the SET portion of an
  UPDATE statement plus its bind values
- typed_bindparams: attaches column types to those bind values
- company_filters / job_filters: WHERE clauses for the search endpoints
- rejecting_conflicts: turns constraint violations into 400s
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional

from sqlalchemy import Table, bindparam
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import BindParameter, ColumnElement

from jobly.core.exceptions import BadRequestError
from jobly.models.company import Company
from jobly.models.job import Job

logger = logging.getLogger(__name__)


class PartialUpdate(NamedTuple):
    """SET clause text and the values for its bind parameters."""
    set_cols: str
    values: Dict[str, Any]


def sql_for_partial_update(data_to_update: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> PartialUpdate:
    """
    Build the SET portion of an UPDATE from a partial payload.

    Keys of `data_to_update` are public field names; `js_to_sql` maps the ones
    that differ from their column name. Each column is bound under its own name:

        {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}
        => '"first_name"=:first_name, "age"=:age'
           {"first_name": "Aliya", "age": 32}

    Raises:
        BadRequestError: If there is nothing to update
    """
    if not data_to_update:
        raise BadRequestError("No data")

    cols = []
    values = {}
    for key, value in data_to_update.items():
        column = js_to_sql.get(key, key)
        cols.append(f'"{column}"=:{column}')
        values[column] = value

    return PartialUpdate(set_cols=", ".join(cols), values=values)


def typed_bindparams(table: Table, values: Mapping[str, Any]) -> List[BindParameter]:
    """
    Bind parameters carrying the column type, so the driver-level conversion
    (e.g. Decimal on SQLite) matches what the ORM would do.
    """
    return [
        bindparam(name, value, type_=table.c[name].type) if name in table.c else bindparam(name, value)
        for name, value in values.items()
    ]


def company_filters(
    name_like: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[ColumnElement]:
    """
    WHERE clauses for company search. All values are bound parameters.

    Raises:
        BadRequestError: If min_employees > max_employees
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    clauses = []
    if name_like:
        clauses.append(Company.name.ilike(f"%{name_like}%"))
    if min_employees is not None:
        clauses.append(Company.num_employees >= min_employees)
    if max_employees is not None:
        clauses.append(Company.num_employees <= max_employees)
    return clauses


def job_filters(
    title_like: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: bool = False,
) -> List[ColumnElement]:
    """
    WHERE clauses for job search. `has_equity=False` means "don't filter".

    Raises:
        BadRequestError: If min_salary is negative
    """
    if min_salary is not None and min_salary < 0:
        raise BadRequestError("minSalary cannot be negative")

    clauses = []
    if title_like:
        clauses.append(Job.title.ilike(f"%{title_like}%"))
    if min_salary is not None:
        clauses.append(Job.salary >= min_salary)
    if has_equity:
        clauses.append(Job.equity > 0)
    return clauses


@contextmanager
def rejecting_conflicts(db: Session, message: str) -> Iterator[None]:
    """
    Roll back and raise BadRequestError when a statement in the block violates
    a constraint (unique name, NOT NULL, CHECK, foreign key).
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"{message}: {e.orig}")
        raise BadRequestError(message) from e
