"""Pytest fixtures for testing"""

import uuid
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Dict, Generator, List, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from payments_gateway.api.main import create_app
from payments_gateway.infrastructure.database.models import Base
from payments_gateway.infrastructure.database.session import get_db
from payments_gateway.domain.models import PaymentRecord, PaymentType
from payments_gateway.domain.tokens import ContinuationToken


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BASE_TIME = datetime(2018, 3, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryPaymentStore:
    """PaymentStore backed by a dict, ordered the same way as the SQL repository"""

    def __init__(self):
        self.payments: Dict[uuid.UUID, PaymentRecord] = {}
        self.calls: List[str] = []

    def add(self, payment: PaymentRecord) -> PaymentRecord:
        self.payments[payment.id] = payment
        return payment

    def _sorted(self) -> List[PaymentRecord]:
        return sorted(self.payments.values(), key=lambda p: p.sort_key)

    def count(self) -> int:
        self.calls.append("count")
        return len(self.payments)

    def list_ordered(
        self,
        after: Optional[ContinuationToken],
        before: Optional[datetime],
        limit: int,
    ) -> List[PaymentRecord]:
        self.calls.append("list_ordered")
        rows = self._sorted()
        if after is not None:
            rows = [p for p in rows if p.sort_key > (after.timestamp, after.id)]
        if before is not None:
            rows = [p for p in rows if p.date_occurred < before]
        return rows[:limit]

    def list_between(self, start: datetime, end: datetime) -> List[PaymentRecord]:
        self.calls.append("list_between")
        return [p for p in self._sorted() if start <= p.date_occurred < end]


@pytest.fixture
def store() -> InMemoryPaymentStore:
    return InMemoryPaymentStore()


@pytest.fixture
def make_payment() -> Callable[..., PaymentRecord]:
    """Build a payment `minutes` after BASE_TIME"""

    def _make(
        minutes: int = 0,
        value: str = "10.00",
        category: str = "groceries",
        type: PaymentType = PaymentType.DEBT,
        id: Optional[uuid.UUID] = None,
    ) -> PaymentRecord:
        return PaymentRecord(
            id=id or uuid.uuid4(),
            value=Decimal(value),
            category=category,
            type=type,
            date_occurred=BASE_TIME + timedelta(minutes=minutes),
        )

    return _make


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
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def base_time() -> datetime:
    """Occurrence time of a payment built with minutes=0"""
    return BASE_TIME
