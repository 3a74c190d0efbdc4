from __future__ import annotations

import pytest

from grapherrors.http.classifier import classify
from grapherrors.http.errors import AuthenticationError, ThrottleError
from grapherrors.http.response import GraphResponse
from grapherrors.http.retry import is_retry_candidate, retry_after_seconds


def _resp(body, status=400, headers=None):
    return GraphResponse(decoded_body=body, http_status_code=status, headers=headers or {})


@pytest.mark.parametrize("body, status, expected", [
    ({"error": {"code": 4}}, 400, True),
    ({"error": {"code": 2}}, 500, True),
    ({"error": {"code": 190}}, 401, False),
    ({"error": {"code": 200}}, 403, False),
    ({"error": {"code": 506}}, 400, False),
    ({"error": {"error_subcode": 1363030}}, 400, False),
    ({}, 503, True),
    ({}, 400, False),
])
def test_retry_candidate_follows_kind(body, status, expected):
    assert is_retry_candidate(classify(_resp(body, status))) is expected


def test_bare_variants_use_class_flag():
    assert is_retry_candidate(ThrottleError("m", 4)) is True
    assert is_retry_candidate(AuthenticationError("m", 190)) is False


def test_retry_after_integer_header():
    assert retry_after_seconds(_resp({}, 429, {"retry-after": " 5 "})) == 5


@pytest.mark.parametrize("headers", [{}, {"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}, {"Retry-After": "-1"}])
def test_retry_after_ignores_other_values(headers):
    assert retry_after_seconds(_resp({}, 429, headers)) is None
