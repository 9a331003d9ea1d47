"""Data access layer for payments"""

import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from payments_gateway.domain.exceptions import PaymentNotFoundError, StorageUnavailableError
from payments_gateway.domain.models import PaymentRecord, PaymentType
from payments_gateway.domain.tokens import ContinuationToken
from payments_gateway.infrastructure.database.models import Payment
from payments_gateway.infrastructure.observability.metrics import storage_failures_counter
from payments_gateway.utils.date_utils import ensure_utc


@contextmanager
def _storage_errors() -> Iterator[None]:
    """Translate driver and ORM failures into StorageUnavailableError"""
    try:
        yield
    except SQLAlchemyError as e:
        storage_failures_counter.inc()
        raise StorageUnavailableError(f"Payment store error: {e.__class__.__name__}") from e


def _to_record(row: Payment) -> PaymentRecord:
    return PaymentRecord(
        id=row.id,
        value=row.value,
        category=row.category,
        type=PaymentType(row.type),
        date_occurred=ensure_utc(row.date_occurred),
    )


class PaymentRepository:
    """Repository for payments, also the PaymentStore used by paging and stats"""

    def __init__(self, db: Session):
        self.db = db

    def _ordered(self):
        return self.db.query(Payment).order_by(Payment.date_occurred.asc(), Payment.id.asc())

    def count(self) -> int:
        with _storage_errors():
            return self.db.query(Payment).count()

    def list_ordered(
        self,
        after: Optional[ContinuationToken],
        before: Optional[datetime],
        limit: int,
    ) -> List[PaymentRecord]:
        """Keyset scan: rows strictly after the token in (date_occurred, id) order"""
        query = self._ordered()

        if after is not None:
            query = query.filter(
                or_(
                    Payment.date_occurred > after.timestamp,
                    and_(Payment.date_occurred == after.timestamp, Payment.id > after.id),
                )
            )
        if before is not None:
            query = query.filter(Payment.date_occurred < ensure_utc(before))

        with _storage_errors():
            return [_to_record(row) for row in query.limit(limit).all()]

    def list_between(self, start: datetime, end: datetime) -> List[PaymentRecord]:
        query = self._ordered().filter(
            Payment.date_occurred >= ensure_utc(start),
            Payment.date_occurred < ensure_utc(end),
        )
        with _storage_errors():
            return [_to_record(row) for row in query.all()]

    def get_payment(self, payment_id: uuid.UUID) -> PaymentRecord:
        """
        Fetch a payment by id.

        Raises:
            PaymentNotFoundError: No payment with this id
        """
        with _storage_errors():
            row = self.db.get(Payment, payment_id)
        if row is None:
            raise PaymentNotFoundError(payment_id)
        return _to_record(row)

    def save_payment(self, payment: PaymentRecord) -> PaymentRecord:
        """Insert a payment, or fully replace the one with the same id"""
        with _storage_errors():
            self.db.merge(
                Payment(
                    id=payment.id,
                    value=payment.value,
                    category=payment.category,
                    type=payment.type.value,
                    date_occurred=payment.date_occurred,
                )
            )
            self.db.flush()
        return payment

    def delete_all(self) -> int:
        """Delete every payment, returning how many were removed"""
        with _storage_errors():
            return self.db.query(Payment).delete(synchronize_session=False)
