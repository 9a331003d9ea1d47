"""Debit spending statistics grouped by payment category"""

from collections import defaultdict
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable

from payments_gateway.domain.exceptions import InvalidStatsPeriodError
from payments_gateway.domain.models import PaymentRecord, PaymentType, StatsReport
from payments_gateway.domain.storage import PaymentStore

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def round_money(amount: Decimal) -> Decimal:
    """Round to 2 decimal places, halves away from zero"""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def summarize_debits(payments: Iterable[PaymentRecord]) -> StatsReport:
    """
    Sum debit payments overall and per category.

    Percentages are derived from the unrounded sums; sums and total are then
    rounded independently, so rounded category sums may differ from the
    rounded total by a cent. A zero total yields 0.00% for every category.
    """
    total_debit = Decimal("0")
    sum_by_category: Dict[str, Decimal] = defaultdict(Decimal)

    for payment in payments:
        if payment.type != PaymentType.DEBT:
            continue
        total_debit += payment.value
        sum_by_category[payment.category] += payment.value

    percent_by_category = {
        category: round_money(category_sum / total_debit * HUNDRED) if total_debit else round_money(Decimal("0"))
        for category, category_sum in sum_by_category.items()
    }

    return StatsReport(
        total_debit=round_money(total_debit),
        sum_by_category={category: round_money(value) for category, value in sum_by_category.items()},
        percent_by_category=percent_by_category,
    )


class StatsAggregator:
    """Computes debit statistics for a period from the payment store"""

    def __init__(self, store: PaymentStore):
        self.store = store

    def compute_stats(self, period_start: datetime, period_end: datetime) -> StatsReport:
        """
        Debit statistics over payments with period_start <= date_occurred < period_end.

        Raises:
            InvalidStatsPeriodError: period_end is not after period_start
            StorageUnavailableError: propagated from the store
        """
        if period_end <= period_start:
            raise InvalidStatsPeriodError(
                f"Stats period end {period_end.isoformat()} must be after start {period_start.isoformat()}"
            )

        return summarize_debits(self.store.list_between(period_start, period_end))
