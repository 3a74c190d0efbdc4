# src/grapherrors/http/response.py
from __future__ import annotations
import json as _json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

DEFAULT_MESSAGE = "Unknown error from Graph."
DEFAULT_CODE = -1

_INT_RE = re.compile(r"-?[0-9]+")
_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class GraphResponse:
    """
    One finished Graph exchange: decoded body, status and raw text.
    Built once by whoever did the HTTP call; everything downstream only reads it.
    """
    decoded_body: Mapping[str, Any] = field(default_factory=dict, hash=False)
    http_status_code: int = 200
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict, hash=False)

    def __post_init__(self):
        if not isinstance(self.decoded_body, Mapping):
            object.__setattr__(self, "decoded_body", {})
        if not isinstance(self.headers, CaseInsensitiveDict):
            object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers or {}))

    @classmethod
    def from_requests(cls, resp: requests.Response) -> "GraphResponse":
        text = resp.text or ""
        return cls(
            decoded_body=decode_body(text),
            http_status_code=resp.status_code,
            body=text,
            headers=CaseInsensitiveDict(resp.headers or {}),
        )

    @property
    def is_error(self) -> bool:
        return self.http_status_code >= 400 or "error" in self.decoded_body


def decode_body(text: str) -> Dict[str, Any]:
    """Decode a JSON body. Empty, invalid or non-object bodies decode to {}."""
    if not text or not text.strip():
        return {}
    try:
        data = _json.loads(text)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def normalize_payload(data: Mapping[str, Any]) -> Mapping[str, Any]:
    # Some error shapes come back without the {"error": {...}} wrapper
    if not isinstance(data, Mapping):
        return {}
    err = data.get("error")
    if isinstance(err, Mapping) and err.get("code") is not None:
        return data
    if data.get("code") is not None:
        return {"error": data}
    return data


def error_section(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    err = payload.get("error")
    return err if isinstance(err, Mapping) else {}


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        return int(value.strip())
    return None


def _as_offset(value: Any) -> Optional[int]:
    # Leading-integer parse: "12abc" -> 12, "12.5" -> 12; no leading digits -> None
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return None
    if isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        return int(m.group(1)) if m else None
    return None


@dataclass(frozen=True)
class ErrorFields:
    """The handful of error keys classification and accessors care about."""
    code: Optional[int]
    message: str
    subcode: Optional[int]
    type: str
    start_offset: Optional[int] = None
    end_offset: Optional[int] = None
    user_title: Optional[str] = None
    user_message: Optional[str] = None
    trace_id: Optional[str] = None

    @property
    def code_or_default(self) -> int:
        return self.code if self.code is not None else DEFAULT_CODE

    @property
    def subcode_or_default(self) -> int:
        return self.subcode if self.subcode is not None else DEFAULT_CODE

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ErrorFields":
        err = error_section(normalize_payload(payload))
        data = err.get("error_data")
        data = data if isinstance(data, Mapping) else {}
        message = err.get("message")
        etype = err.get("type")
        return cls(
            code=_as_int(err.get("code")),
            message=str(message) if message is not None else DEFAULT_MESSAGE,
            subcode=_as_int(err.get("error_subcode")),
            type=etype if isinstance(etype, str) else "",
            start_offset=_as_offset(data.get("start_offset")),
            end_offset=_as_offset(data.get("end_offset")),
            user_title=err.get("error_user_title"),
            user_message=err.get("error_user_msg"),
            trace_id=err.get("fbtrace_id"),
        )
