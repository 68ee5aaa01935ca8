"""Authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.api.limiter import limiter
from jobly.api.schemas import TokenResponse, UserAuth, UserRegister
from jobly.config import settings
from jobly.db import get_db
from jobly.models import user as user_model
from jobly.security import create_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
def get_token(request: Request, data: UserAuth, db: Session = Depends(get_db)):
    """Exchange a username/password for a token."""
    user = user_model.authenticate(db, data.username, data.password)
    return {"token": create_token(user)}


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(data: UserRegister, db: Session = Depends(get_db)):
    """Register a new (non-admin) user and return their token."""
    user = user_model.register(db, {**data.model_dump(by_alias=True), "isAdmin": False})
    return {"token": create_token(user)}
