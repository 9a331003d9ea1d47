"""GET /v1/payments/stats - Debit spending report by category"""

import time
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from payments_gateway.api.v1.schemas import StatsResponse
from payments_gateway.api.dependencies import get_request_id, get_stats_aggregator, store_unavailable
from payments_gateway.config import settings
from payments_gateway.domain.exceptions import InvalidStatsPeriodError, StorageUnavailableError
from payments_gateway.domain.stats import StatsAggregator
from payments_gateway.infrastructure.database.session import get_db
from payments_gateway.infrastructure.observability.logging import log_stats_computed
from payments_gateway.utils.date_utils import start_of_day

router = APIRouter()


@router.get("/payments/stats", response_model=StatsResponse)
def get_payment_stats(
    request: Request,
    start: Optional[date] = Query(None, description="First day of the period (inclusive)"),
    end: Optional[date] = Query(None, description="Day the period ends (exclusive)"),
    db: Session = Depends(get_db),
    aggregator: StatsAggregator = Depends(get_stats_aggregator),
):
    """
    Summarize debit payments over a date range.

    Returns:
        Total debit, debit sum per category and each category's share of the
        total in percent, all rounded to 2 decimal places
    """
    start_time = time.time()
    request_id = get_request_id(request)

    period_start = start_of_day(start or settings.stats_period_start)
    period_end = start_of_day(end or settings.stats_period_end)

    try:
        report = aggregator.compute_stats(period_start, period_end)
    except InvalidStatsPeriodError as e:
        logging.warning(f"Invalid stats period: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except StorageUnavailableError as e:
        raise store_unavailable(db, request_id, e)

    duration_ms = (time.time() - start_time) * 1000
    log_stats_computed(request_id, period_start, period_end, len(report.sum_by_category), duration_ms)

    return StatsResponse.from_report(report, period_start, period_end)
