"""Keyset pagination over payments using timestamp/id continuation tokens"""

from typing import Callable, Optional

from payments_gateway.domain.models import Page
from payments_gateway.domain.storage import PaymentStore
from payments_gateway.domain.tokens import ContinuationToken, build_next_page_url
from payments_gateway.utils.date_utils import utc_now

DEFAULT_PAGE_SIZE = 10


def parse_page_size(
    raw: Optional[str],
    default: int = DEFAULT_PAGE_SIZE,
    maximum: Optional[int] = None,
) -> int:
    """
    Interpret a pageSize query value.

    Missing, non-numeric, zero and negative values all fall back to the
    default; values above ``maximum`` are clamped to it.
    """
    try:
        page_size = int(raw)
    except (TypeError, ValueError):
        return default

    if page_size <= 0:
        return default
    if maximum is not None and page_size > maximum:
        return maximum
    return page_size


class Pager:
    """Serves consecutive pages of payments ordered by (date_occurred, id)"""

    def __init__(self, store: PaymentStore, clock: Callable = utc_now):
        self.store = store
        self.clock = clock

    def fetch_page(
        self,
        token: Optional[ContinuationToken],
        page_size: int,
        base_url: Optional[str] = None,
    ) -> Page:
        """
        Fetch the page following ``token`` (or the first page when absent).

        One record past the page is read ahead so a collection that ends
        exactly on a page boundary reports has_next=False. When more records
        remain the page carries a token built from its last record and, given
        ``base_url``, the URL of the next page.

        Raises:
            StorageUnavailableError: propagated from the store
        """
        if page_size <= 0:
            page_size = DEFAULT_PAGE_SIZE

        total_count = self.store.count()

        if token is None:
            payments = self.store.list_ordered(after=None, before=None, limit=page_size + 1)
        else:
            # Upper bound excludes rows written after this scan started
            payments = self.store.list_ordered(after=token, before=self.clock(), limit=page_size + 1)

        if len(payments) <= page_size:
            return Page(total_count=total_count, payments=payments)

        payments = payments[:page_size]

        next_token = payments[-1].to_token()
        next_page_url = build_next_page_url(base_url, next_token, page_size) if base_url else None

        return Page(
            total_count=total_count,
            payments=payments,
            has_next=True,
            continuation_token=next_token,
            next_page_url=next_page_url,
        )
