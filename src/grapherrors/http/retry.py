# src/grapherrors/http/retry.py
# Hints only. Whether and when to retry is up to the caller's HTTP layer.
from __future__ import annotations
from typing import Optional

from grapherrors.http.errors import ErrorKind, GraphSDKError

# Kinds worth another attempt
RETRY_KINDS = frozenset({ErrorKind.THROTTLE, ErrorKind.SERVER})

# Statuses worth another attempt when the body says nothing useful
RETRY_STATUSES = {429, 502, 503, 504}


def is_retry_candidate(err: GraphSDKError) -> bool:
    kind = getattr(err, "kind", None)
    if kind in RETRY_KINDS:
        return True
    if kind is ErrorKind.OTHER:
        return getattr(err, "http_status_code", None) in RETRY_STATUSES
    return False


def retry_after_seconds(response) -> Optional[int]:
    """Integer Retry-After header, if the response has one."""
    headers = getattr(response, "headers", None) or {}
    value = (headers.get("Retry-After") or "").strip()
    if value.isdigit():
        return int(value)
    return None
