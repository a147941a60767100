"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from branchwatch.api.main import create_app
from branchwatch.api.dependencies import get_risk_webhook_client
from branchwatch.infrastructure.database.models import Base
from branchwatch.infrastructure.database.session import get_db
from branchwatch.domain.models import AreaClass, Branch, BranchType, PerformanceRecord


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingWebhookClient:
    """Stands in for RiskWebhookClient and keeps every event it is given"""

    def __init__(self):
        self.events = []

    async def send_risk_change_event(self, payload):
        self.events.append(payload)
        return True


def make_branch(branch_id: str = "b1", branch_type: BranchType = BranchType.MALL, **overrides) -> Branch:
    fields = dict(
        id=branch_id,
        name=f"Branch {branch_id}",
        address="Ecoland, Davao City",
        lat=7.07,
        lng=125.61,
        branch_type=branch_type,
        opening_date=date(2023, 1, 15),
    )
    fields.update(overrides)
    return Branch(**fields)


def make_record(
    month: str,
    sales: float = 200000,
    rent_cost: float = 50000,
    branch_id: str = "b1",
    **overrides,
) -> PerformanceRecord:
    fields = dict(
        branch_id=branch_id,
        month=month,
        sales=sales,
        rent_cost=rent_cost,
        staff_count=5,
        operating_hours=10,
        complaints=0,
        competitor_count=0,
        nearby_establishments=["office"],
        area_class=AreaClass.COMMERCIAL,
    )
    fields.update(overrides)
    return PerformanceRecord(**fields)


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
def webhook_client() -> RecordingWebhookClient:
    return RecordingWebhookClient()


@pytest.fixture
def client(db: Session, webhook_client: RecordingWebhookClient) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_risk_webhook_client] = lambda: webhook_client
    return TestClient(app)


@pytest.fixture
def struggling_history() -> List[PerformanceRecord]:
    """Three months of falling sales with heavy rent, complaints and competition"""
    return [
        make_record("2025-11", sales=180000, rent_cost=95000, complaints=12, competitor_count=7),
        make_record("2025-12", sales=165000, rent_cost=95000, complaints=12, competitor_count=7),
        make_record("2026-01", sales=150000, rent_cost=95000, complaints=12, competitor_count=7),
    ]


@pytest.fixture
def branch_payload() -> dict:
    return {
        "name": "SM City Davao Branch",
        "address": "SM City Davao, Ecoland, Davao City",
        "lat": 7.0731,
        "lng": 125.6128,
        "branch_type": "mall",
        "opening_date": "2023-01-15",
    }


@pytest.fixture
def record_payload() -> dict:
    return {
        "month": "2026-01",
        "sales": 450000,
        "rent_cost": 120000,
        "staff_count": 8,
        "operating_hours": 12,
        "complaints": 3,
        "competitor_count": 3,
        "nearby_establishments": ["mall", "office"],
        "area_class": "commercial",
    }
