"""User endpoints.

Creating and listing users is for admins; everything under /users/{username}
is open to admins and to that user.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.api.deps import ensure_admin, ensure_admin_or_correct_user
from jobly.api.schemas import (
    UserDetailEnvelope,
    UserEnvelope,
    UserListResponse,
    UserNew,
    UserTokenResponse,
    UserUpdate,
)
from jobly.db import get_db
from jobly.errors import ForbiddenError
from jobly.models import application
from jobly.models import user as user_model
from jobly.security import create_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserTokenResponse, status_code=201, dependencies=[Depends(ensure_admin)])
def create_user(data: UserNew, db: Session = Depends(get_db)):
    """Add a user, possibly an admin. Returns the user and a token for them."""
    user = user_model.register(db, data.model_dump(by_alias=True))
    return {"user": user, "token": create_token(user)}


@router.get("", response_model=UserListResponse, dependencies=[Depends(ensure_admin)])
def list_users(db: Session = Depends(get_db)):
    users = user_model.find_all(db)
    logger.info(f"Listed {len(users)} users")
    return {"users": users}


@router.get("/{username}", response_model=UserDetailEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    _: dict = Depends(ensure_admin_or_correct_user),
):
    """Get a user and the ids of the jobs they applied to."""
    return {"user": user_model.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_admin_or_correct_user),
):
    """Change some of a user's fields. Only admins may change isAdmin."""
    changes = data.model_dump(by_alias=True, exclude_unset=True)
    if "isAdmin" in changes and not current_user.get("isAdmin"):
        raise ForbiddenError("Only admins can change admin status")
    return {"user": user_model.update(db, username, changes)}


@router.delete("/{username}")
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    _: dict = Depends(ensure_admin_or_correct_user),
):
    user_model.remove(db, username)
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}")
def apply_to_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    _: dict = Depends(ensure_admin_or_correct_user),
):
    """Apply the user to a job."""
    application.apply(db, username, job_id)
    return {"applied": job_id}


@router.delete("/{username}/jobs/{job_id}")
def withdraw_from_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    _: dict = Depends(ensure_admin_or_correct_user),
):
    """Withdraw the user's application to a job."""
    application.withdraw(db, username, job_id)
    return {"withdrawn": job_id}
