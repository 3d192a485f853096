"""
CRUD operations for users, authentication and job applications.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import delete, select, text
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import rejecting_conflicts, sql_for_partial_update, typed_bindparams
from jobly.models.job import Job
from jobly.models.user import Application, User

logger = logging.getLogger(__name__)

USER_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user doesn't exist or the password is wrong
    """
    user = db.get(User, username)
    if user is None or not verify_password(password, user.password):
        logger.warning(f"Failed login for {username}")
        raise UnauthorizedError("Invalid username/password")
    return user


def register(db: Session, data: Dict[str, Any]) -> User:
    """
    Create a user with a hashed password.

    Args:
        data: {username, password, firstName, lastName, email, isAdmin}

    Raises:
        BadRequestError: If the username is taken
    """
    username = data["username"]
    if db.get(User, username) is not None:
        raise BadRequestError(f"Duplicate username: {username}")

    user = User(
        username=username,
        password=get_password_hash(data["password"]),
        first_name=data["firstName"],
        last_name=data["lastName"],
        email=data["email"],
        is_admin=data.get("isAdmin", False),
    )
    db.add(user)
    with rejecting_conflicts(db, f"Duplicate username: {username}"):
        db.commit()
    db.refresh(user)

    logger.info(f"Registered user {username} (admin: {user.is_admin})")
    return user


def find_all(db: Session) -> List[User]:
    """All users ordered by username."""
    return list(db.scalars(select(User).order_by(User.username)))


def get(db: Session, username: str) -> User:
    """
    Retrieve a user by username.

    Raises:
        NotFoundError: If no such user
    """
    user = db.get(User, username)
    if user is None:
        raise NotFoundError(f"No user: {username}")
    return user


def applied_job_ids(db: Session, username: str) -> List[int]:
    """Ids of the jobs a user has applied to, ascending."""
    query = select(Application.job_id).where(Application.username == username).order_by(Application.job_id)
    return list(db.scalars(query))


def update(db: Session, username: str, data: Dict[str, Any]) -> User:
    """
    Partial update of a user's profile. A new password is hashed first.

    Data can include: {firstName, lastName, password, email, isAdmin}

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no such user
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])

    set_cols, values = sql_for_partial_update(data, USER_COLUMNS)

    stmt = text(
        f"UPDATE users SET {set_cols} WHERE username = :lookup_username RETURNING username"
    ).bindparams(*typed_bindparams(User.__table__, values), lookup_username=username)
    with rejecting_conflicts(db, "Invalid update"):
        row = db.execute(stmt).first()
        if row is None:
            db.rollback()
            raise NotFoundError(f"No user: {username}")
        db.commit()

    logger.info(f"Updated user {username}: {', '.join(values)}")
    return get(db, row.username)


def remove(db: Session, username: str) -> None:
    """
    Delete a user (their applications go with them).

    Raises:
        NotFoundError: If no such user
    """
    row = db.execute(
        delete(User).where(User.username == username).returning(User.username)
    ).first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No user: {username}")
    db.commit()

    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the user or job doesn't exist
        BadRequestError: If the user already applied
    """
    get(db, username)
    if db.get(Job, job_id) is None:
        raise NotFoundError(f"No job: {job_id}")
    if db.get(Application, (username, job_id)) is not None:
        raise BadRequestError(f"{username} already applied to job {job_id}")

    db.add(Application(username=username, job_id=job_id))
    db.commit()

    logger.info(f"User {username} applied to job {job_id}")
