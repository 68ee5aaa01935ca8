"""Company endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.api.deps import ensure_logged_in, parse_query
from jobly.api.schemas import (
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyNew,
    CompanySearch,
    CompanyUpdate,
)
from jobly.db import get_db
from jobly.models import company as company_model

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=CompanyEnvelope, status_code=201, dependencies=[Depends(ensure_logged_in)])
def create_company(data: CompanyNew, db: Session = Depends(get_db)):
    """Create a company."""
    company = company_model.create(db, data.model_dump(by_alias=True))
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """List companies, filtered by name, minEmployees and maxEmployees."""
    filters = parse_query(CompanySearch, request)
    companies = company_model.find_all(db, filters)
    logger.info(f"Listed {len(companies)} companies (filters: {filters})")
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Get a company and its jobs."""
    return {"company": company_model.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(ensure_logged_in)])
def update_company(handle: str, data: CompanyUpdate, db: Session = Depends(get_db)):
    """Change some of a company's fields; the handle cannot change."""
    company = company_model.update(db, handle, data.model_dump(by_alias=True, exclude_unset=True))
    return {"company": company}


@router.delete("/{handle}", dependencies=[Depends(ensure_logged_in)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """Delete a company and its jobs."""
    company_model.remove(db, handle)
    return {"deleted": handle}
