"""Shared fixtures: a fresh seeded SQLite database per test and an API client."""

import os

os.environ["DATABASE_URL"] = ""
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["BCRYPT_WORK_FACTOR"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from jobly.api.app import app  # noqa: E402
from jobly.db import create_db_engine, get_db, init_db, run_query  # noqa: E402
from jobly.models import application, company, job, user  # noqa: E402
from jobly.security import create_token  # noqa: E402


def seed(db):
    for n in (1, 2, 3):
        company.create(
            db,
            {
                "handle": f"c{n}",
                "name": f"C{n}",
                "numEmployees": n,
                "description": f"Desc{n}",
                "logoUrl": f"http://c{n}.img",
            },
        )

    user.register(
        db,
        {
            "username": "u1",
            "password": "password1",
            "firstName": "U1F",
            "lastName": "U1L",
            "email": "u1@email.com",
            "isAdmin": True,
        },
    )
    user.register(
        db,
        {
            "username": "u2",
            "password": "password2",
            "firstName": "U2F",
            "lastName": "U2L",
            "email": "u2@email.com",
            "isAdmin": False,
        },
    )

    job.create(db, {"title": "j1", "salary": 100, "equity": 0.6, "companyHandle": "c1"})
    job.create(db, {"title": "j2", "salary": 150, "equity": 0.5, "companyHandle": "c2"})
    job.create(db, {"title": "j3", "salary": 200, "equity": 0, "companyHandle": "c3"})
    job.create(db, {"title": "j4", "salary": 50, "equity": 0, "companyHandle": "c1"})


@pytest.fixture
def session_factory():
    """In-memory database shared by every session of one test."""
    engine = create_db_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = factory()
    seed(db)
    db.close()

    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def job_ids(db):
    """Seeded job ids by title."""
    return {r["title"]: r["id"] for r in run_query(db, "SELECT id, title FROM jobs")}


@pytest.fixture
def applied(db, job_ids):
    """u1 has applied to j1."""
    application.apply(db, "u1", job_ids["j1"])
    return job_ids["j1"]


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def u1_headers():
    """Admin."""
    token = create_token({"username": "u1", "isAdmin": True})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def u2_headers():
    """Regular user."""
    token = create_token({"username": "u2", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}
