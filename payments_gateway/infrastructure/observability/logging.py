"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from payments_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_page_served(
    request_id: str,
    page_size: int,
    returned: int,
    has_next: bool,
    resumed: bool,
    duration_ms: float,
) -> None:
    """Log structured pagination outcome"""
    logging.info(
        "Payments page served",
        extra={
            "request_id": request_id,
            "step": "page_served",
            "page_size": page_size,
            "returned": returned,
            "has_next": has_next,
            "resumed_from_token": resumed,
            "duration_ms": duration_ms,
        },
    )


def log_stats_computed(
    request_id: str,
    period_start: datetime,
    period_end: datetime,
    category_count: int,
    duration_ms: float,
) -> None:
    """Log structured stats report outcome"""
    logging.info(
        "Payment stats computed",
        extra={
            "request_id": request_id,
            "step": "stats_computed",
            "period_start": period_start.isoformat(),
            "period_end": period_end.isoformat(),
            "category_count": category_count,
            "duration_ms": duration_ms,
        },
    )
