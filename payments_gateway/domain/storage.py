"""Read interface the pagination and stats logic needs from a payment store"""

from datetime import datetime
from typing import List, Optional, Protocol

from payments_gateway.domain.models import PaymentRecord
from payments_gateway.domain.tokens import ContinuationToken


class PaymentStore(Protocol):
    def count(self) -> int:
        """Number of payments in the whole collection"""
        ...

    def list_ordered(
        self,
        after: Optional[ContinuationToken],
        before: Optional[datetime],
        limit: int,
    ) -> List[PaymentRecord]:
        """
        Up to ``limit`` payments ordered by (date_occurred, id) ascending.

        ``after`` keeps only records strictly past the token in that order;
        ``before`` keeps only records with date_occurred < before.
        """
        ...

    def list_between(self, start: datetime, end: datetime) -> List[PaymentRecord]:
        """Payments with start <= date_occurred < end, ordered by (date_occurred, id)"""
        ...
