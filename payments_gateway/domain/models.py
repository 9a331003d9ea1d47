"""Domain models - pure Python dataclasses representing business entities"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from payments_gateway.domain.tokens import ContinuationToken
from payments_gateway.utils.date_utils import ensure_utc


class PaymentType(str, Enum):
    """Direction of a payment"""

    DEBT = "DEBT"  # outgoing / expense
    CREDIT = "CREDIT"


@dataclass(frozen=True)
class PaymentRecord:
    """A single stored payment"""

    id: uuid.UUID
    value: Decimal
    category: str
    type: PaymentType
    date_occurred: datetime

    def __post_init__(self):
        object.__setattr__(self, "date_occurred", ensure_utc(self.date_occurred))

    @property
    def sort_key(self) -> tuple:
        return (self.date_occurred, self.id)

    def to_token(self) -> ContinuationToken:
        return ContinuationToken(timestamp=self.date_occurred, id=self.id)


@dataclass
class Page:
    """One slice of the ordered payment collection"""

    total_count: int
    payments: List[PaymentRecord]
    has_next: bool = False
    continuation_token: Optional[ContinuationToken] = None
    next_page_url: Optional[str] = None


@dataclass
class StatsReport:
    """Debit totals for a period, overall and per category"""

    total_debit: Decimal
    sum_by_category: Dict[str, Decimal] = field(default_factory=dict)
    percent_by_category: Dict[str, Decimal] = field(default_factory=dict)
