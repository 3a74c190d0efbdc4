# src/grapherrors/http/classifier.py
"""
Map a failed Graph response to the most specific error variant.

Rules are tried top to bottom and the first match wins. Subcode rules sit
above the code rules; a subcode outside the listed groups does not stop a
recognised code from matching further down.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Tuple

from grapherrors.http.errors import (
    ErrorKind, GraphErrorVariant, GraphResponseError, ResumableUploadError, VARIANTS
)
from grapherrors.http.response import ErrorFields

# Subcodes
AUTH_SUBCODES = frozenset({458, 459, 460, 463, 464, 467})
RESUMABLE_SUBCODES = frozenset({1363030, 1363019, 1363033, 1363021, 1363041})
RESUMABLE_OFFSETS_SUBCODE = 1363037

# Codes
AUTH_CODES = frozenset({100, 102, 190})
SERVER_CODES = frozenset({1, 2})
THROTTLE_CODES = frozenset({4, 17, 32, 341, 613})
CLIENT_CODES = frozenset({506})
PERMISSION_CODE = 10
PERMISSION_RANGE = (200, 299)

OAUTH_TYPE = "OAuthException"


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Callable[[ErrorFields], bool]
    build: Callable[[ErrorFields], GraphErrorVariant]


def _variant(kind: ErrorKind) -> Callable[[ErrorFields], GraphErrorVariant]:
    cls = VARIANTS[kind]
    return lambda f: cls(f.message, f.code_or_default)


def _upload_with_offsets(f: ErrorFields) -> GraphErrorVariant:
    return ResumableUploadError(
        f.message, f.code_or_default, start_offset=f.start_offset, end_offset=f.end_offset
    )


def _is_permission(f: ErrorFields) -> bool:
    lo, hi = PERMISSION_RANGE
    return f.code == PERMISSION_CODE or (f.code is not None and lo <= f.code <= hi)


RULES: Tuple[Rule, ...] = (
    Rule("auth_subcode", lambda f: f.subcode in AUTH_SUBCODES, _variant(ErrorKind.AUTHENTICATION)),
    Rule("upload_subcode", lambda f: f.subcode in RESUMABLE_SUBCODES, _variant(ErrorKind.RESUMABLE_UPLOAD)),
    Rule("upload_offsets_subcode", lambda f: f.subcode == RESUMABLE_OFFSETS_SUBCODE, _upload_with_offsets),
    Rule("auth_code", lambda f: f.code in AUTH_CODES, _variant(ErrorKind.AUTHENTICATION)),
    Rule("server_code", lambda f: f.code in SERVER_CODES, _variant(ErrorKind.SERVER)),
    Rule("throttle_code", lambda f: f.code in THROTTLE_CODES, _variant(ErrorKind.THROTTLE)),
    Rule("client_code", lambda f: f.code in CLIENT_CODES, _variant(ErrorKind.CLIENT)),
    Rule("permission_code", _is_permission, _variant(ErrorKind.AUTHORIZATION)),
    Rule("oauth_type", lambda f: f.type == OAUTH_TYPE, _variant(ErrorKind.AUTHENTICATION)),
    Rule("fallback", lambda f: True, _variant(ErrorKind.OTHER)),
)


def select_rule(fields: ErrorFields) -> Rule:
    for rule in RULES:
        if rule.matches(fields):
            return rule
    return RULES[-1]  # unreachable while "fallback" stays last


def classify(response, *, logger=None) -> GraphResponseError:
    """
    Build the error for a failed response. `response` needs .decoded_body,
    .http_status_code and .body (GraphResponse has all three). Never raises.
    """
    fields = ErrorFields.from_payload(response.decoded_body)
    rule = select_rule(fields)
    _log_debug(logger, f"classify status={response.http_status_code} code={fields.code} "
                       f"subcode={fields.subcode} -> {rule.name}")
    return GraphResponseError(response, rule.build(fields))


def raise_for_response(response, *, logger=None):
    """Raise the classified error for a failed response, else hand the response back."""
    if response.http_status_code >= 400 or "error" in response.decoded_body:
        raise classify(response, logger=logger)
    return response


def _log_debug(logger, msg: str) -> None:
    if logger:
        try:
            logger.debug(msg)
        except Exception:
            pass
