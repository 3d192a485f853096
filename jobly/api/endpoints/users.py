"""
User management endpoints.

Admins can manage every account; a logged-in user can read, edit, delete
and apply to jobs only as themselves.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require_admin, require_correct_user_or_admin
from jobly.core.security import create_token
from jobly.crud import job as job_crud
from jobly.crud import user as user_crud
from jobly.schemas.base import DeletedResponse
from jobly.schemas.user import (
    ApplicationResponse,
    UserCreateRequest,
    UserCreateResponse,
    UserDetail,
    UserDetailResponse,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=UserCreateResponse)
def create_user(
    request: UserCreateRequest,
    admin: dict = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Add a new user. Unlike /auth/register, this can create admins.

    Returns the new user and a token for them.

    Authorization required: admin
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    logger.info(f"Admin {admin['sub']} created user {user.username}")
    return {"user": user, "token": create_token({"username": user.username, "is_admin": user.is_admin})}


@router.get("", response_model=UserListResponse, dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    """
    All users, ordered by username.

    Authorization required: admin
    """
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailResponse, dependencies=[Depends(require_correct_user_or_admin)])
def get_user(username: str, db: Session = Depends(get_db)):
    """
    A user's profile plus the ids of jobs they applied to.

    Authorization required: admin or same user
    """
    user = user_crud.get(db, username)
    detail = UserDetail.model_validate(user)
    detail.jobs = user_crud.applied_job_ids(db, username)
    return {"user": detail}


@router.patch("/{username}", response_model=UserResponse, dependencies=[Depends(require_correct_user_or_admin)])
def update_user(username: str, request: UserUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a profile: any of firstName, lastName, password, email.

    Authorization required: admin or same user
    """
    user = user_crud.update(db, username, request.model_dump(exclude_unset=True, by_alias=True))
    return {"user": user}


@router.delete("/{username}", response_model=DeletedResponse, dependencies=[Depends(require_correct_user_or_admin)])
def delete_user(username: str, db: Session = Depends(get_db)):
    """
    Delete a user.

    Authorization required: admin or same user
    """
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post(
    "/{username}/jobs/{title}",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_correct_user_or_admin)],
)
def apply_to_job(username: str, title: str, db: Session = Depends(get_db)):
    """
    Apply a user to the job with this title. Returns {"applied": <job id>}.

    Authorization required: admin or same user
    """
    job_id = job_crud.get_id(db, title)
    user_crud.apply_to_job(db, username, job_id)
    return {"applied": job_id}
