"""Company access functions."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from jobly.db import run_query, write_transaction
from jobly.errors import BadRequestError, NotFoundError
from jobly.helpers.sql import SqlParams, company_filter_clause, sql_for_partial_update

logger = logging.getLogger(__name__)

# Record field -> column, where they differ
COLUMNS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_FIELDS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


def create(db: Session, data: dict[str, Any]) -> dict:
    """
    Create a company.

    data should be { handle, name, description, numEmployees, logoUrl }

    Returns { handle, name, description, numEmployees, logoUrl }

    Raises BadRequestError if the handle (or name) is already taken.
    """
    handle = data["handle"]

    with write_transaction(db, f"Duplicate company: {handle}"):
        if run_query(db, "SELECT handle FROM companies WHERE handle = $1", [handle]):
            raise BadRequestError(f"Duplicate company: {handle}")

        rows = run_query(
            db,
            f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_FIELDS}""",
            [
                handle,
                data["name"],
                data.get("description"),
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )

    logger.info(f"Created company {handle}")
    return rows[0]


def find_all(db: Session, filters: dict[str, Any] | None = None) -> list[dict]:
    """
    List companies ordered by name, optionally filtered.

    filters (all optional):
    - minEmployees
    - maxEmployees (must not be below minEmployees)
    - name (case-insensitive, partial match)

    Returns [{ handle, name, description, numEmployees, logoUrl }, ...]
    """
    filters = filters or {}
    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("Min employees cannot be greater than max")

    where, values = company_filter_clause(filters)

    query = f"SELECT {COMPANY_FIELDS} FROM companies"
    if where:
        query += f" WHERE {where}"
    query += " ORDER BY name"

    return run_query(db, query, values)


def get(db: Session, handle: str) -> dict:
    """
    Get a company and its jobs.

    Returns { handle, name, description, numEmployees, logoUrl, jobs }
      where jobs is [{ id, title, salary, equity }, ...]

    Raises NotFoundError if not found.
    """
    rows = run_query(db, f"SELECT {COMPANY_FIELDS} FROM companies WHERE handle = $1", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = run_query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    )
    return company


def update(db: Session, handle: str, data: dict[str, Any]) -> dict:
    """
    Partially update a company; only the fields present in data change.

    data can include: { name, description, numEmployees, logoUrl }

    Returns { handle, name, description, numEmployees, logoUrl }

    Raises BadRequestError on empty data, NotFoundError if not found.
    """
    set_cols, values = sql_for_partial_update(data, COLUMNS)
    params = SqlParams(values)
    handle_idx = params.add(handle)

    with write_transaction(db, f"Company name already taken: {data.get('name')}"):
        rows = run_query(
            db,
            f"""UPDATE companies
                SET {set_cols}
                WHERE handle = {handle_idx}
                RETURNING {COMPANY_FIELDS}""",
            params.values,
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """Delete a company (and, by cascade, its jobs). Raises NotFoundError if not found."""
    with write_transaction(db):
        rows = run_query(db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
        if not rows:
            raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
