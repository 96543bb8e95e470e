"""
Shared fixtures: an in-memory SQLite database wired into the app via
dependency overrides, plus user/job factories.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.db.models.user import User
from app.db.models.job_application import JobApplication, Interview
from app.core.rate_limit import rate_limit_store
from app.core.security import hash_password, create_access_token


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    rate_limit_store.clear()
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def make_user(db_session):
    """Factory creating persisted users."""
    def _make_user(email="test@example.com", password="testpass123", **kwargs):
        user = User(
            first_name=kwargs.pop("first_name", "Test"),
            last_name=kwargs.pop("last_name", "User"),
            email=email,
            password_hash=hash_password(password),
            **kwargs
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def test_user(make_user):
    return make_user()


@pytest.fixture
def other_user(make_user):
    return make_user(email="other@example.com", first_name="Other")


@pytest.fixture
def auth_headers(test_user):
    token = create_access_token({"sub": test_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_job(db_session):
    """
    Factory creating persisted job applications.

    ``interviews`` is a list of (type, outcome) pairs or (type, outcome, date).
    """
    def _make_job(user, company="Acme", status="applied", days_ago=1, interviews=(), **kwargs):
        job = JobApplication(
            user_id=user.id,
            title=kwargs.pop("title", "Software Engineer"),
            company=company,
            status=status,
            application_date=kwargs.pop("application_date", datetime.utcnow() - timedelta(days=days_ago)),
            **kwargs
        )
        for entry in interviews:
            interview_type, outcome = entry[0], entry[1]
            when = entry[2] if len(entry) > 2 else datetime.utcnow() - timedelta(days=1)
            job.interviews.append(Interview(type=interview_type, outcome=outcome, date=when))
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job
    return _make_job
