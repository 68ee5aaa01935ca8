"""Job endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.api.deps import ensure_admin, parse_query
from jobly.api.schemas import (
    JobDetailEnvelope,
    JobEnvelope,
    JobListResponse,
    JobNew,
    JobSearch,
    JobUpdate,
)
from jobly.db import get_db
from jobly.models import job as job_model

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=JobEnvelope, status_code=201, dependencies=[Depends(ensure_admin)])
def create_job(data: JobNew, db: Session = Depends(get_db)):
    """Post a job for an existing company."""
    return {"job": job_model.create(db, data.model_dump(by_alias=True))}


@router.get("", response_model=JobListResponse)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """List jobs, filtered by title, minSalary and hasEquity."""
    filters = parse_query(JobSearch, request)
    jobs = job_model.find_all(db, filters)
    logger.info(f"Listed {len(jobs)} jobs (filters: {filters})")
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Get a job and the company posting it."""
    return {"job": job_model.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(ensure_admin)])
def update_job(job_id: int, data: JobUpdate, db: Session = Depends(get_db)):
    """Change a job's title, salary or equity."""
    job = job_model.update(db, job_id, data.model_dump(by_alias=True, exclude_unset=True))
    return {"job": job}


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """Delete a job."""
    return {"deleted": job_model.remove(db, job_id)}
