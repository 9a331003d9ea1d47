"""Continuation tokens for timestamp/id keyset pagination

A token names the last payment a client has seen by its position in the
``(date_occurred asc, id asc)`` order. On the wire it is URL-safe base64 of
``"<iso timestamp>_<uuid>"`` with padding stripped.
"""

import base64
import binascii
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from payments_gateway.utils.date_utils import ensure_utc

CONTINUATION_TOKEN_PARAM = "continuationToken"
PAGE_SIZE_PARAM = "pageSize"

_SEPARATOR = "_"


@dataclass(frozen=True)
class ContinuationToken:
    """Sort key of the last record returned on the previous page"""

    timestamp: datetime
    id: uuid.UUID

    def __post_init__(self):
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))

    def encode(self) -> str:
        raw = f"{self.timestamp.isoformat(timespec='microseconds')}{_SEPARATOR}{self.id}"
        return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")

    def __str__(self) -> str:
        return self.encode()

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["ContinuationToken"]:
        """
        Decode a token string.

        Returns None for a missing or malformed token so callers fall back to
        the first page instead of failing.
        """
        if not raw:
            return None

        try:
            padded = raw + "=" * (-len(raw) % 4)
            decoded = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
            timestamp_part, id_part = decoded.rsplit(_SEPARATOR, 1)
            return cls(timestamp=datetime.fromisoformat(timestamp_part), id=uuid.UUID(id_part))
        except (binascii.Error, UnicodeError, ValueError):
            return None


def build_next_page_url(base_url: str, token: ContinuationToken, page_size: int) -> str:
    """Rewrite the continuation token and page size query parameters of base_url"""
    parts = urlsplit(base_url)
    params = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in (CONTINUATION_TOKEN_PARAM, PAGE_SIZE_PARAM)
    ]
    params.append((PAGE_SIZE_PARAM, str(page_size)))
    params.append((CONTINUATION_TOKEN_PARAM, token.encode()))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment))
