"""Application (user -> job) access functions."""

import logging

from sqlalchemy.orm import Session

from jobly.db import run_query, write_transaction
from jobly.errors import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


def apply(db: Session, username: str, job_id: int) -> dict:
    """
    Record that a user applied to a job.

    Returns { username, jobId }

    Raises NotFoundError if the user or job does not exist,
    BadRequestError if the user already applied to this job.
    """
    duplicate = f"The user {username} has already applied to the job with id {job_id}"

    with write_transaction(db, duplicate):
        if not run_query(db, "SELECT username FROM users WHERE username = $1", [username]):
            raise NotFoundError(f"No user: {username}")

        if not run_query(db, "SELECT id FROM jobs WHERE id = $1", [job_id]):
            raise NotFoundError(f"No job: {job_id}")

        if run_query(
            db,
            "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
            [username, job_id],
        ):
            raise BadRequestError(duplicate)

        rows = run_query(
            db,
            'INSERT INTO applications (username, job_id) VALUES ($1, $2) RETURNING username, job_id AS "jobId"',
            [username, job_id],
        )

    logger.info(f"{username} applied to job {job_id}")
    return rows[0]


def job_ids_for(db: Session, username: str) -> list[int]:
    """Ids of the jobs a user has applied to, ascending."""
    rows = run_query(
        db,
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        [username],
    )
    return [r["job_id"] for r in rows]


def withdraw(db: Session, username: str, job_id: int) -> None:
    """Remove an application. Raises NotFoundError if there is none."""
    with write_transaction(db):
        rows = run_query(
            db,
            "DELETE FROM applications WHERE username = $1 AND job_id = $2 RETURNING job_id",
            [username, job_id],
        )
        if not rows:
            raise NotFoundError(f"No application by {username} to job {job_id}")

    logger.info(f"{username} withdrew from job {job_id}")
