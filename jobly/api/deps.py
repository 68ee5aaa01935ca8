"""FastAPI dependencies: authentication, authorization and query parsing."""

import logging

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ValidationError

from jobly.errors import BadRequestError, ForbiddenError, UnauthorizedError
from jobly.security import decode_token

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def validation_message(errors: list[dict]) -> str:
    """Flatten pydantic error details into one readable message."""
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query"))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> dict | None:
    """
    Token payload ({ username, isAdmin }) of the caller, or None.

    A missing or invalid token makes the caller anonymous; the guards below
    decide whether that is acceptable.
    """
    if credentials is None:
        return None
    try:
        return decode_token(credentials.credentials)
    except jwt.PyJWTError as e:
        logger.info(f"Ignoring invalid token: {e}")
        return None


def ensure_logged_in(user: dict | None = Depends(get_current_user)) -> dict:
    """Require any valid token."""
    if not user:
        raise UnauthorizedError()
    return user


def ensure_admin(user: dict = Depends(ensure_logged_in)) -> dict:
    """Require a token of an admin user."""
    if not user.get("isAdmin"):
        raise ForbiddenError("Admin access required")
    return user


def ensure_admin_or_correct_user(username: str, user: dict = Depends(ensure_logged_in)) -> dict:
    """Require an admin token, or the token of the user named in the path."""
    if not (user.get("isAdmin") or user.get("username") == username):
        raise ForbiddenError()
    return user


def parse_query(model: type[BaseModel], request: Request) -> dict:
    """
    Validate the query string against model.

    Returns the provided filters keyed by their camelCase names.
    Raises BadRequestError on unknown keys or bad values.
    """
    try:
        search = model.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise BadRequestError(validation_message(e.errors())) from e
    return search.model_dump(by_alias=True, exclude_none=True)
