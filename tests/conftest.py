# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import os
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Safety check to prevent tests from running against production database
if os.getenv("TESTING") != "1":
    os.environ["TESTING"] = "1"

from volunteer_scheduler.db.database import Base, configure_sqlite_engine, get_db
from volunteer_scheduler.app import app
from tests.test_helpers import auth_headers, make_user

# Create test database engine and session
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = configure_sqlite_engine(
    create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(name="db_session", scope="function")
def db_session_fixture():
    """
    Creates a new database session for each test, with all tables created.
    """
    Base.metadata.create_all(bind=test_engine)

    db = TestSessionLocal()

    try:
        yield db
    finally:
        db.close()
        # Drop all tables after the test to ensure a clean slate
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(name="client")
def client_fixture(db_session: Session):
    """
    Provides a FastAPI TestClient that overrides the get_db dependency
    to use the test database session.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(db_session: Session):
    user = make_user(db_session, email="admin@example.com", role="admin")
    return auth_headers(user)


@pytest.fixture(name="editor_headers")
def editor_headers_fixture(db_session: Session):
    user = make_user(db_session, email="editor@example.com", role="editor")
    return auth_headers(user)


@pytest.fixture(name="user_headers")
def user_headers_fixture(db_session: Session):
    user = make_user(db_session, email="viewer@example.com", role="user")
    return auth_headers(user)
