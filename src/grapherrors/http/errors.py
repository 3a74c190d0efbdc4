# src/grapherrors/http/errors.py
from __future__ import annotations
from enum import Enum
from typing import Any, Mapping, Optional

from grapherrors.http.response import DEFAULT_MESSAGE, DEFAULT_CODE, ErrorFields


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    SERVER = "server"
    THROTTLE = "throttle"
    RESUMABLE_UPLOAD = "resumable_upload"
    CLIENT = "client"
    OTHER = "other"


class GraphSDKError(Exception):
    def __init__(self, message: str = DEFAULT_MESSAGE, code: int = DEFAULT_CODE,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.code = DEFAULT_CODE if code is None else code
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class GraphErrorVariant(GraphSDKError):
    """Base of the closed set of classified errors. Branch on .kind or on the class."""
    kind = ErrorKind.OTHER
    retryable = False

    def _key(self) -> tuple:
        return (self.kind, self.message, self.code)

    def __eq__(self, other):
        if not isinstance(other, GraphErrorVariant):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code})"


class AuthenticationError(GraphErrorVariant):   # token expired, revoked or invalid
    kind = ErrorKind.AUTHENTICATION
class AuthorizationError(GraphErrorVariant):    # missing permissions
    kind = ErrorKind.AUTHORIZATION
class ServerError(GraphErrorVariant):           # server issue, possible downtime
    kind = ErrorKind.SERVER; retryable = True
class ThrottleError(GraphErrorVariant):         # API throttling
    kind = ErrorKind.THROTTLE; retryable = True
class ClientError(GraphErrorVariant):           # e.g. duplicate post
    kind = ErrorKind.CLIENT
class OtherError(GraphErrorVariant):
    kind = ErrorKind.OTHER


class ResumableUploadError(GraphErrorVariant):
    kind = ErrorKind.RESUMABLE_UPLOAD

    def __init__(self, message: str = DEFAULT_MESSAGE, code: int = DEFAULT_CODE,
                 cause: Optional[BaseException] = None, *,
                 start_offset: Optional[int] = None, end_offset: Optional[int] = None):
        super().__init__(message, code, cause)
        self.start_offset = start_offset
        self.end_offset = end_offset

    def _key(self) -> tuple:
        return super()._key() + (self.start_offset, self.end_offset)

    def __repr__(self) -> str:
        return (f"ResumableUploadError({self.message!r}, code={self.code}, "
                f"start_offset={self.start_offset}, end_offset={self.end_offset})")


VARIANTS = {
    cls.kind: cls for cls in (
        AuthenticationError, AuthorizationError, ServerError, ThrottleError,
        ResumableUploadError, ClientError, OtherError,
    )
}


class GraphResponseError(GraphSDKError):
    """
    Raised for a failed Graph call. Wraps the response it came from and carries
    the classified variant as .cause.

    Message and code are read from the response payload itself (after the
    missing-wrapper normalization), so they always match what the cause saw.
    """
    def __init__(self, response, cause: Optional[GraphErrorVariant] = None):
        self._response = response
        self._response_data = response.decoded_body
        self._fields = ErrorFields.from_payload(self._response_data)
        super().__init__(self._fields.message, self._fields.code_or_default, cause)

    @property
    def kind(self) -> ErrorKind:
        return self.cause.kind if self.cause is not None else ErrorKind.OTHER

    @property
    def retryable(self) -> bool:
        return bool(self.cause is not None and self.cause.retryable)

    @property
    def http_status_code(self) -> int:
        return self._response.http_status_code

    @property
    def sub_error_code(self) -> int:
        return self._fields.subcode_or_default

    @property
    def error_type(self) -> str:
        return self._fields.type

    @property
    def raw_response(self) -> str:
        return self._response.body

    @property
    def response_data(self) -> Mapping[str, Any]:
        return self._response_data

    @property
    def response(self):
        return self._response

    @property
    def user_title(self) -> Optional[str]:
        return self._fields.user_title

    @property
    def user_message(self) -> Optional[str]:
        return self._fields.user_message

    @property
    def trace_id(self) -> Optional[str]:
        return self._fields.trace_id

    def body_snippet(self, max_len: int = 400) -> str:
        txt = self.raw_response or ""
        return txt[:max_len]

    def _key(self) -> tuple:
        return (self.message, self.code, self.http_status_code, self.raw_response, self.cause)

    def __eq__(self, other):
        if not isinstance(other, GraphResponseError):
            return NotImplemented
        return self._key() == other._key() and self._response_data == other._response_data

    def __hash__(self):
        return hash(self._key())

    def __repr__(self) -> str:
        return (f"GraphResponseError(kind={self.kind.value}, code={self.code}, "
                f"subcode={self.sub_error_code}, status={self.http_status_code}, "
                f"message={self.message!r})")
