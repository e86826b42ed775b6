"""
ErrorClassifier - decides whether a failure is worth retrying.

TRANSIENT: expected to resolve with time (overload, timeout, dropped connection).
FATAL: retrying cannot help (bad request, bad key, not found, our own bug).

Documented result codes are matched exactly first. Substring markers on the
code or message are only a fallback for codes the service does not document.
"""

from enum import Enum

import httpx

from tourclient.services.errors import (
    ApiError,
    HttpStatusError,
    NetworkError,
    RequestFailedError,
)


class FaultKind(str, Enum):
    """Retry eligibility of a failure."""

    TRANSIENT = "TRANSIENT"
    FATAL = "FATAL"


TRANSIENT_STATUSES = frozenset({429, 500, 502, 503})

# data.go.kr gateway codes, numeric and symbolic forms
TRANSIENT_API_CODES = frozenset(
    {
        "02",
        "DB_ERROR",
        "04",
        "HTTP_ERROR",
        "05",
        "SERVICETIMEOUT_ERROR",
        "SERVICE_TIMEOUT_ERROR",
    }
)

FATAL_API_CODES = frozenset(
    {
        "01",
        "APPLICATION_ERROR",
        "03",
        "NODATA_ERROR",
        "10",
        "INVALID_REQUEST_PARAMETER_ERROR",
        "11",
        "NO_MANDATORY_REQUEST_PARAMETERS_ERROR",
        "12",
        "NO_OPENAPI_SERVICE_ERROR",
        "20",
        "SERVICE_ACCESS_DENIED_ERROR",
        "21",
        "TEMPORARILY_DISABLE_THE_SERVICEKEY_ERROR",
        "22",
        "LIMITED_NUMBER_OF_SERVICE_REQUESTS_EXCEEDS_ERROR",
        "30",
        "SERVICE_KEY_IS_NOT_REGISTERED_ERROR",
        "31",
        "DEADLINE_HAS_EXPIRED_ERROR",
        "32",
        "UNREGISTERED_IP_ERROR",
        "33",
        "UNSIGNED_CALL_ERROR",
        "MALFORMED_RESPONSE",
    }
)

TRANSIENT_MARKERS = ("TEMPORAR", "TIMEOUT", "TIME_OUT", "UNAVAILABLE")


def classify_status(status: int) -> FaultKind:
    """Classify a non-success HTTP status code."""
    if status in TRANSIENT_STATUSES:
        return FaultKind.TRANSIENT
    return FaultKind.FATAL


def classify_transport(error: BaseException) -> FaultKind:
    """Classify a transport-level exception."""
    if isinstance(error, RequestFailedError):
        return FaultKind.FATAL
    if isinstance(error, NetworkError):
        return FaultKind.TRANSIENT
    if isinstance(
        error, (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)
    ):
        return FaultKind.TRANSIENT
    # Proxy, scheme, redirect and decoding errors are configuration problems
    return FaultKind.FATAL


def classify_api_result(code: str, message: str = "") -> FaultKind:
    """Classify a non-"0000" result code from the response envelope."""
    normalized = (code or "").strip().upper()
    if normalized in TRANSIENT_API_CODES:
        return FaultKind.TRANSIENT
    if normalized in FATAL_API_CODES:
        return FaultKind.FATAL

    haystack = f"{normalized} {(message or '').upper()}"
    if any(marker in haystack for marker in TRANSIENT_MARKERS):
        return FaultKind.TRANSIENT
    return FaultKind.FATAL


def classify_error(error: BaseException) -> FaultKind:
    """Classify any exception raised by a single request attempt."""
    if isinstance(error, HttpStatusError):
        return classify_status(error.status)
    if isinstance(error, ApiError):
        return classify_api_result(error.code, error.result_msg)
    if isinstance(error, (NetworkError, RequestFailedError, httpx.RequestError)):
        return classify_transport(error)
    if isinstance(error, httpx.HTTPStatusError):
        return classify_status(error.response.status_code)
    return FaultKind.FATAL
