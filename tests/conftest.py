"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- An in-memory database seeded with companies c1-c3, jobs j1-j3,
  users u1-u3 and an admin
- FastAPI test client with the database dependency overridden
- Tokens for a regular user and an admin
"""

import os

# Must be set before jobly.core.config is imported
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jobly.models  # noqa: F401
from jobly.core.database import Base, get_db
from jobly.core.security import create_token
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.crud import user as user_crud
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed(db):
    """Common fixture data shared by model and route tests."""
    for n in (1, 2, 3):
        company_crud.create(db, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "numEmployees": n,
            "description": f"Desc{n}",
            "logoUrl": f"http://c{n}.img",
        })

    job_crud.create(db, {"title": "j1", "salary": 14, "equity": Decimal("0"), "companyHandle": "c1"})
    job_crud.create(db, {"title": "j2", "salary": 1000, "equity": Decimal("0.5"), "companyHandle": "c2"})
    job_crud.create(db, {"title": "j3", "salary": 405000, "equity": Decimal("0.2"), "companyHandle": "c3"})

    for n in (1, 2, 3):
        user_crud.register(db, {
            "username": f"u{n}",
            "firstName": f"U{n}F",
            "lastName": f"U{n}L",
            "email": f"user{n}@user.com",
            "password": f"password{n}",
            "isAdmin": False,
        })
    user_crud.register(db, {
        "username": "admin",
        "firstName": "A1F",
        "lastName": "A1L",
        "email": "admin1@admin.com",
        "password": "admin1password",
        "isAdmin": True,
    })


@pytest.fixture
def db_session():
    """
    Create a fresh, seeded database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        seed(db)
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def u1_token():
    return create_token({"username": "u1", "is_admin": False})


@pytest.fixture
def admin_token():
    return create_token({"username": "admin", "is_admin": True})


@pytest.fixture
def u1_headers(u1_token):
    return {"Authorization": f"Bearer {u1_token}"}


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
