"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from payments_gateway.domain.models import Page, PaymentRecord, PaymentType, StatsReport
from payments_gateway.utils.date_utils import ensure_utc


class PaymentRequest(BaseModel):
    """Request body for POST /v1/payments and PUT /v1/payments/{payment_id}"""

    value: Decimal = Field(..., max_digits=14, decimal_places=2, description="Signed amount")
    category: str = Field(..., min_length=1, description="Spending category tag")
    type: PaymentType = Field(..., description="DEBT for outgoing payments, CREDIT otherwise")
    date_occurred: datetime = Field(..., description="When the payment happened")

    @field_validator("date_occurred")
    @classmethod
    def normalize_to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class PaymentResponse(BaseModel):
    """Single payment"""

    id: str
    value: float
    category: str
    type: PaymentType
    date_occurred: str

    @classmethod
    def from_record(cls, record: PaymentRecord) -> "PaymentResponse":
        return cls(
            id=str(record.id),
            value=float(record.value),
            category=record.category,
            type=record.type,
            date_occurred=record.date_occurred.isoformat(),
        )


class PageResponse(BaseModel):
    """Response for GET /v1/payments"""

    total_count: int
    has_next: bool
    continuation_token: Optional[str] = None
    next_page_url: Optional[str] = None
    payments: List[PaymentResponse]

    @classmethod
    def from_page(cls, page: Page) -> "PageResponse":
        return cls(
            total_count=page.total_count,
            has_next=page.has_next,
            continuation_token=page.continuation_token.encode() if page.continuation_token else None,
            next_page_url=page.next_page_url,
            payments=[PaymentResponse.from_record(p) for p in page.payments],
        )


class StatsResponse(BaseModel):
    """Response for GET /v1/payments/stats"""

    period_start: str
    period_end: str
    total_debit: float
    sum_by_category: Dict[str, float]
    percent_by_category: Dict[str, float]

    @classmethod
    def from_report(cls, report: StatsReport, period_start: datetime, period_end: datetime) -> "StatsResponse":
        return cls(
            period_start=period_start.isoformat(),
            period_end=period_end.isoformat(),
            total_debit=float(report.total_debit),
            sum_by_category={k: float(v) for k, v in report.sum_by_category.items()},
            percent_by_category={k: float(v) for k, v in report.percent_by_category.items()},
        )
