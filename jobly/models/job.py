"""Job access functions."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from jobly.db import run_query, write_transaction
from jobly.errors import BadRequestError, NotFoundError
from jobly.helpers.sql import SqlParams, job_filter_clause, sql_for_partial_update
from jobly.models.company import COMPANY_FIELDS

logger = logging.getLogger(__name__)

# Record field -> column, where they differ.
# companyHandle is immutable; the API refuses it before an update gets here.
COLUMNS = {
    "companyHandle": "company_handle",
}

JOB_FIELDS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def create(db: Session, data: dict[str, Any]) -> dict:
    """
    Create a job.

    data should be { title, salary, equity, companyHandle }

    Returns { id, title, salary, equity, companyHandle }

    Raises BadRequestError if the company does not exist.
    """
    handle = data["companyHandle"]

    with write_transaction(db, f"No company: {handle}"):
        if not run_query(db, "SELECT handle FROM companies WHERE handle = $1", [handle]):
            raise BadRequestError(f"No company: {handle}")

        rows = run_query(
            db,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_FIELDS}""",
            [data["title"], data.get("salary"), data.get("equity"), handle],
        )

    job = rows[0]
    logger.info(f"Created job {job['id']} ({job['title']}) at {handle}")
    return job


def find_all(db: Session, filters: dict[str, Any] | None = None) -> list[dict]:
    """
    List jobs ordered by title, optionally filtered.

    filters (all optional):
    - minSalary
    - hasEquity (true: only jobs with non-zero equity)
    - title (case-insensitive, partial match)

    Returns [{ id, title, salary, equity, companyHandle, companyName }, ...]
    """
    where, values = job_filter_clause(filters)

    query = """SELECT j.id,
                      j.title,
                      j.salary,
                      j.equity,
                      j.company_handle AS "companyHandle",
                      c.name AS "companyName"
               FROM jobs AS j
               LEFT JOIN companies AS c ON c.handle = j.company_handle"""
    if where:
        query += f" WHERE {where}"
    query += " ORDER BY j.title, j.id"

    return run_query(db, query, values)


def get(db: Session, job_id: int) -> dict:
    """
    Get a job and the company posting it.

    Returns { id, title, salary, equity, company }
      where company is { handle, name, description, numEmployees, logoUrl }

    Raises NotFoundError if not found.
    """
    rows = run_query(db, f"SELECT {JOB_FIELDS} FROM jobs WHERE id = $1", [job_id])
    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    job = rows[0]
    handle = job.pop("companyHandle")
    companies = run_query(db, f"SELECT {COMPANY_FIELDS} FROM companies WHERE handle = $1", [handle])
    job["company"] = companies[0] if companies else None
    return job


def update(db: Session, job_id: int, data: dict[str, Any]) -> dict:
    """
    Partially update a job; only the fields present in data change.

    data can include: { title, salary, equity }

    Returns { id, title, salary, equity, companyHandle }

    Raises BadRequestError on empty data, NotFoundError if not found.
    """
    set_cols, values = sql_for_partial_update(data, COLUMNS)
    params = SqlParams(values)
    id_idx = params.add(job_id)

    with write_transaction(db):
        rows = run_query(
            db,
            f"""UPDATE jobs
                SET {set_cols}
                WHERE id = {id_idx}
                RETURNING {JOB_FIELDS}""",
            params.values,
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, job_id: int) -> dict:
    """
    Delete a job.

    Returns { id, title } of the deleted job.

    Raises NotFoundError if not found.
    """
    with write_transaction(db):
        rows = run_query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id, title", [job_id])
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Deleted job {job_id}")
    return rows[0]
