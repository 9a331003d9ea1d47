"""/v1/payments - create, replace, page through, count, fetch and delete payments"""

import time
import uuid
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from payments_gateway.api.v1.schemas import PageResponse, PaymentRequest, PaymentResponse
from payments_gateway.api.dependencies import get_pager, get_payment_repository, get_request_id, store_unavailable
from payments_gateway.config import settings
from payments_gateway.domain.exceptions import PaymentNotFoundError, StorageUnavailableError
from payments_gateway.domain.models import PaymentRecord
from payments_gateway.domain.pagination import Pager, parse_page_size
from payments_gateway.domain.tokens import ContinuationToken
from payments_gateway.infrastructure.database.repositories import PaymentRepository
from payments_gateway.infrastructure.database.session import get_db
from payments_gateway.infrastructure.observability.logging import log_page_served
from payments_gateway.infrastructure.observability.metrics import payment_write_counter, record_page

router = APIRouter()


def _parse_payment_id(payment_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(payment_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid payment ID format")


def _save(
    payment_id: uuid.UUID,
    body: PaymentRequest,
    operation: str,
    request: Request,
    response: Response,
    db: Session,
    repository: PaymentRepository,
) -> PaymentResponse:
    request_id = get_request_id(request)
    record = PaymentRecord(
        id=payment_id,
        value=body.value,
        category=body.category,
        type=body.type,
        date_occurred=body.date_occurred,
    )

    try:
        repository.save_payment(record)
        db.commit()
    except StorageUnavailableError as e:
        raise store_unavailable(db, request_id, e)

    payment_write_counter.labels(operation=operation).inc()
    logging.info(
        "Payment saved",
        extra={"request_id": request_id, "payment_id": str(payment_id), "operation": operation},
    )

    response.headers["Location"] = str(request.url_for("get_payment", payment_id=str(payment_id)))
    return PaymentResponse.from_record(record)


@router.post("/payments", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(
    body: PaymentRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    repository: PaymentRepository = Depends(get_payment_repository),
):
    """Store a new payment under a freshly generated ID"""
    return _save(uuid.uuid4(), body, "create", request, response, db, repository)


@router.put("/payments/{payment_id}", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def replace_payment(
    payment_id: str,
    body: PaymentRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    repository: PaymentRepository = Depends(get_payment_repository),
):
    """Create or fully replace the payment with a client-chosen ID"""
    return _save(_parse_payment_id(payment_id), body, "replace", request, response, db, repository)


@router.get("/payments", response_model=PageResponse)
def list_payments(
    request: Request,
    page_size: Optional[str] = Query(None, alias="pageSize", description="Payments per page, default 10"),
    continuation_token: Optional[str] = Query(
        None, alias="continuationToken", description="Token from the previous page"
    ),
    db: Session = Depends(get_db),
    pager: Pager = Depends(get_pager),
):
    """
    Page through all payments ordered by occurrence time, then ID.

    Follow next_page_url (or resend continuation_token) until has_next is
    false. An invalid page size falls back to the default and an unreadable
    token restarts from the first page.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    size = parse_page_size(page_size, default=settings.default_page_size, maximum=settings.max_page_size)
    token = ContinuationToken.parse(continuation_token)

    try:
        page = pager.fetch_page(token, size, base_url=str(request.url))
    except StorageUnavailableError as e:
        raise store_unavailable(db, request_id, e)

    duration_ms = (time.time() - start_time) * 1000
    record_page(len(page.payments), page.has_next)
    log_page_served(request_id, size, len(page.payments), page.has_next, token is not None, duration_ms)

    return PageResponse.from_page(page)


@router.delete("/payments", status_code=status.HTTP_204_NO_CONTENT)
def delete_all_payments(
    request: Request,
    db: Session = Depends(get_db),
    repository: PaymentRepository = Depends(get_payment_repository),
):
    """Remove every payment"""
    request_id = get_request_id(request)

    try:
        deleted = repository.delete_all()
        db.commit()
    except StorageUnavailableError as e:
        raise store_unavailable(db, request_id, e)

    payment_write_counter.labels(operation="delete_all").inc()
    logging.info("Payments deleted", extra={"request_id": request_id, "deleted": deleted})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/payments/count", response_model=int)
def count_payments(
    request: Request,
    db: Session = Depends(get_db),
    repository: PaymentRepository = Depends(get_payment_repository),
):
    """Total number of stored payments"""
    try:
        return repository.count()
    except StorageUnavailableError as e:
        raise store_unavailable(db, get_request_id(request), e)


@router.get("/payments/{payment_id}", response_model=PaymentResponse)
def get_payment(
    payment_id: str,
    request: Request,
    db: Session = Depends(get_db),
    repository: PaymentRepository = Depends(get_payment_repository),
):
    """Fetch one payment by ID"""
    payment_uuid = _parse_payment_id(payment_id)

    try:
        record = repository.get_payment(payment_uuid)
    except PaymentNotFoundError:
        raise HTTPException(status_code=404, detail="Payment not found")
    except StorageUnavailableError as e:
        raise store_unavailable(db, get_request_id(request), e)

    return PaymentResponse.from_record(record)
