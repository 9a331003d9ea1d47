"""Unit tests for continuation-token pagination"""

import uuid
import pytest
from datetime import timedelta
from payments_gateway.domain.pagination import Pager, parse_page_size
from payments_gateway.domain.tokens import ContinuationToken


def _collect_all(pager: Pager, page_size: int):
    """Follow continuation tokens from the first page until has_next is false"""
    seen = []
    token = None
    for _ in range(1000):
        page = pager.fetch_page(token, page_size)
        seen.extend(page.payments)
        if not page.has_next:
            return seen
        token = ContinuationToken.parse(page.continuation_token.encode())
    raise AssertionError("pagination did not terminate")


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 10),
        ("", 10),
        ("abc", 10),
        ("2.5", 10),
        ("0", 10),
        ("-3", 10),
        ("1", 1),
        ("25", 25),
    ],
)
def test_parse_page_size_defaults(raw, expected):
    """Missing, non-numeric and non-positive sizes fall back to 10"""
    assert parse_page_size(raw) == expected


def test_parse_page_size_clamps_to_maximum():
    assert parse_page_size("5000", maximum=1000) == 1000
    assert parse_page_size("abc", default=20, maximum=1000) == 20


def test_first_page_of_25_records(store, make_payment):
    """First page of 10 from 25 records has a token for the 10th record"""
    records = [store.add(make_payment(minutes=i)) for i in range(25)]

    page = Pager(store).fetch_page(None, 10)

    assert page.total_count == 25
    assert page.payments == records[:10]
    assert page.has_next is True
    assert page.continuation_token == ContinuationToken(records[9].date_occurred, records[9].id)


def test_exactly_page_size_records_is_single_page(store, make_payment):
    """A dataset of exactly page_size records comes back whole with no token"""
    for i in range(10):
        store.add(make_payment(minutes=i))

    page = Pager(store).fetch_page(None, 10)

    assert len(page.payments) == 10
    assert page.has_next is False
    assert page.continuation_token is None
    assert page.next_page_url is None


def test_empty_collection(store):
    page = Pager(store).fetch_page(None, 10)

    assert page.total_count == 0
    assert page.payments == []
    assert page.has_next is False


@pytest.mark.parametrize("page_size", [1, 2, 3, 7, 10, 24, 25, 26, 100])
def test_following_tokens_returns_every_record_once(store, make_payment, page_size):
    """Walking every page reproduces the ordered dataset without gaps or repeats"""
    # Groups of 3 records share a timestamp to exercise the ID tie-break
    for i in range(25):
        store.add(make_payment(minutes=i // 3))
    expected = sorted(store.payments.values(), key=lambda p: (p.date_occurred, p.id))

    seen = _collect_all(Pager(store), page_size)

    assert [p.id for p in seen] == [p.id for p in expected]
    assert len({p.id for p in seen}) == 25


def test_equal_timestamps_ordered_by_id(store, make_payment):
    """Smaller ID comes first and is never returned again on a later page"""
    low = uuid.UUID("00000000-0000-0000-0000-000000000001")
    high = uuid.UUID("ffffffff-0000-0000-0000-000000000001")
    store.add(make_payment(minutes=5, id=high))
    store.add(make_payment(minutes=5, id=low))

    pager = Pager(store)
    first = pager.fetch_page(None, 1)
    second = pager.fetch_page(first.continuation_token, 1)

    assert [p.id for p in first.payments] == [low]
    assert first.continuation_token.id == low
    assert [p.id for p in second.payments] == [high]


def test_total_count_covers_whole_collection_on_later_pages(store, make_payment):
    for i in range(15):
        store.add(make_payment(minutes=i))

    pager = Pager(store)
    first = pager.fetch_page(None, 10)
    second = pager.fetch_page(first.continuation_token, 10)

    assert second.total_count == 15
    assert len(second.payments) == 5
    assert second.has_next is False


def test_resumed_scan_excludes_records_after_query_time(store, make_payment, base_time):
    """Records dated after 'now' are not served once a token is in play"""
    for i in range(4):
        store.add(make_payment(minutes=i))
    store.add(make_payment(minutes=60))

    clock = lambda: base_time + timedelta(minutes=30)
    pager = Pager(store, clock=clock)
    first = pager.fetch_page(None, 2)
    second = pager.fetch_page(first.continuation_token, 10)

    assert len(second.payments) == 2
    assert all(p.date_occurred < clock() for p in second.payments)


def test_next_page_url_built_from_base_url(store, make_payment):
    for i in range(3):
        store.add(make_payment(minutes=i))

    page = Pager(store).fetch_page(None, 2, base_url="http://testserver/v1/payments?pageSize=2")

    assert page.next_page_url.startswith("http://testserver/v1/payments?")
    assert f"continuationToken={page.continuation_token.encode()}" in page.next_page_url


def test_non_positive_page_size_uses_default(store, make_payment):
    for i in range(12):
        store.add(make_payment(minutes=i))

    page = Pager(store).fetch_page(None, 0)

    assert len(page.payments) == 10
    assert page.has_next is True
