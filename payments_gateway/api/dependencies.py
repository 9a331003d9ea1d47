"""Dependency injection for FastAPI endpoints"""

import logging
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from payments_gateway.domain.exceptions import StorageUnavailableError
from payments_gateway.domain.pagination import Pager
from payments_gateway.domain.stats import StatsAggregator
from payments_gateway.infrastructure.database.repositories import PaymentRepository
from payments_gateway.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_payment_repository(db: Session = Depends(get_db)) -> PaymentRepository:
    """Provide a repository bound to the request's session"""
    return PaymentRepository(db)


def get_pager(repository: PaymentRepository = Depends(get_payment_repository)) -> Pager:
    return Pager(repository)


def get_stats_aggregator(repository: PaymentRepository = Depends(get_payment_repository)) -> StatsAggregator:
    return StatsAggregator(repository)


def store_unavailable(db: Session, request_id: str, error: StorageUnavailableError) -> HTTPException:
    """Roll back the request's session, log the failure and build the 503 to raise"""
    db.rollback()
    logging.error(f"Payment store error: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=503, detail="Payment store unavailable")
