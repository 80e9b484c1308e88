"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from pocket_ledger.api.main import create_app
from pocket_ledger.api.dependencies import get_today
from pocket_ledger.infrastructure.database.models import Base
from pocket_ledger.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed reference date for windows and reports
TODAY = date(2024, 3, 10)
USER_ID = "user_ana"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fixed today"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict:
    """Headers the authentication layer would forward"""
    return {"X-User-ID": USER_ID}


@pytest.fixture
def loan_payload() -> dict:
    """Loan transaction: 3 monthly installments of $100"""
    return {
        "description": "Car loan",
        "amount_cents": 30000,
        "type": "income",
        "category": "Loan",
        "date": "2024-02-20",
        "loan_details": {
            "loan_id": "car-2024",
            "installments": 3,
            "frequency": "monthly",
            "start_date": "2024-03-01",
            "total_cents": 30000,
        },
    }
