"""User access functions."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from jobly.db import run_query, write_transaction
from jobly.errors import BadRequestError, NotFoundError, UnauthorizedError
from jobly.helpers.sql import SqlParams, sql_for_partial_update
from jobly.models import application
from jobly.security import dummy_password_hash, hash_password, verify_password

logger = logging.getLogger(__name__)

# Record field -> column, where they differ
COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

USER_FIELDS = 'username, first_name AS "firstName", last_name AS "lastName", email, is_admin AS "isAdmin"'


def _record(row: dict) -> dict:
    """Normalize a user row (SQLite hands booleans back as 0/1)."""
    row["isAdmin"] = bool(row["isAdmin"])
    return row


def authenticate(db: Session, username: str, password: str) -> dict:
    """
    Check a username/password pair.

    Returns { username, firstName, lastName, email, isAdmin }

    Raises UnauthorizedError if the user is unknown or the password is wrong;
    the two cases are indistinguishable to the caller.
    """
    rows = run_query(db, f"SELECT {USER_FIELDS}, password FROM users WHERE username = $1", [username])
    user = rows[0] if rows else None

    hashed = user.pop("password") if user else dummy_password_hash()
    if verify_password(password, hashed) and user is not None:
        return _record(user)

    logger.info(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: dict[str, Any]) -> dict:
    """
    Create a user.

    data should be { username, password, firstName, lastName, email, isAdmin }

    Returns { username, firstName, lastName, email, isAdmin }

    Raises BadRequestError on a duplicate username.
    """
    username = data["username"]

    with write_transaction(db, f"Duplicate username: {username}"):
        if run_query(db, "SELECT username FROM users WHERE username = $1", [username]):
            raise BadRequestError(f"Duplicate username: {username}")

        rows = run_query(
            db,
            f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {USER_FIELDS}""",
            [
                username,
                hash_password(data["password"]),
                data["firstName"],
                data["lastName"],
                data["email"],
                bool(data.get("isAdmin", False)),
            ],
        )

    logger.info(f"Registered user {username}")
    return _record(rows[0])


def find_all(db: Session) -> list[dict]:
    """Returns [{ username, firstName, lastName, email, isAdmin }, ...] ordered by username."""
    rows = run_query(db, f"SELECT {USER_FIELDS} FROM users ORDER BY username")
    return [_record(r) for r in rows]


def get(db: Session, username: str) -> dict:
    """
    Get a user and the jobs they applied to.

    Returns { username, firstName, lastName, email, isAdmin, applications }
      where applications is [jobId, ...]

    Raises NotFoundError if not found.
    """
    rows = run_query(db, f"SELECT {USER_FIELDS} FROM users WHERE username = $1", [username])
    if not rows:
        raise NotFoundError(f"No user: {username}")

    user = _record(rows[0])
    user["applications"] = application.job_ids_for(db, username)
    return user


def update(db: Session, username: str, data: dict[str, Any]) -> dict:
    """
    Partially update a user; only the fields present in data change.

    data can include: { firstName, lastName, password, email, isAdmin }

    A new password is hashed before it is stored. Callers must make sure the
    requester may change the password or admin flag.

    Returns { username, firstName, lastName, email, isAdmin }

    Raises BadRequestError on empty data, NotFoundError if not found.
    """
    if data.get("password"):
        data = {**data, "password": hash_password(data["password"])}

    set_cols, values = sql_for_partial_update(data, COLUMNS)
    params = SqlParams(values)
    username_idx = params.add(username)

    with write_transaction(db):
        rows = run_query(
            db,
            f"""UPDATE users
                SET {set_cols}
                WHERE username = {username_idx}
                RETURNING {USER_FIELDS}""",
            params.values,
        )
        if not rows:
            raise NotFoundError(f"No user: {username}")

    logger.info(f"Updated user {username}: {', '.join(data)}")
    return _record(rows[0])


def remove(db: Session, username: str) -> None:
    """Delete a user (and, by cascade, their applications). Raises NotFoundError if not found."""
    with write_transaction(db):
        rows = run_query(db, "DELETE FROM users WHERE username = $1 RETURNING username", [username])
        if not rows:
            raise NotFoundError(f"No user: {username}")

    logger.info(f"Deleted user {username}")
