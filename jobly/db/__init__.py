"""Database package."""

from jobly.db.base import Base, create_db_engine, get_db, init_db, run_query, write_transaction
from jobly.db.tables import Application, Company, Job, User

__all__ = [
    "Base",
    "create_db_engine",
    "get_db",
    "init_db",
    "run_query",
    "write_transaction",
    "Company",
    "Job",
    "User",
    "Application",
]
