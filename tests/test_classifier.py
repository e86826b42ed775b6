import httpx
import pytest

from tourclient.services.classifier import (
    FaultKind,
    classify_api_result,
    classify_error,
    classify_status,
    classify_transport,
)
from tourclient.services.errors import (
    ApiError,
    HttpStatusError,
    NetworkError,
    NotFoundError,
    RequestFailedError,
    RequestTimeoutError,
    ValidationError,
)


@pytest.mark.parametrize("status", [429, 500, 502, 503])
def test_retryable_statuses_are_transient(status: int) -> None:
    assert classify_status(status) == FaultKind.TRANSIENT


@pytest.mark.parametrize("status", [400, 401, 403, 404, 405, 501, 504])
def test_other_statuses_are_fatal(status: int) -> None:
    assert classify_status(status) == FaultKind.FATAL


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("refused"),
        httpx.ReadTimeout("slow"),
        httpx.RemoteProtocolError("bad frame"),
        NetworkError("reset"),
        RequestTimeoutError("tour_api", 30.0),
    ],
)
def test_connectivity_failures_are_transient(error: Exception) -> None:
    assert classify_transport(error) == FaultKind.TRANSIENT
    assert classify_error(error) == FaultKind.TRANSIENT


@pytest.mark.parametrize(
    "error",
    [
        httpx.UnsupportedProtocol("ftp"),
        httpx.ProxyError("proxy down"),
        httpx.LocalProtocolError("bad header"),
        httpx.TooManyRedirects("loop"),
        httpx.DecodingError("gzip"),
        RequestFailedError("UnsupportedProtocol: ftp"),
    ],
)
def test_configuration_request_errors_are_fatal(error: Exception) -> None:
    assert classify_transport(error) == FaultKind.FATAL
    assert classify_error(error) == FaultKind.FATAL


@pytest.mark.parametrize("code", ["05", "SERVICETIMEOUT_ERROR", "DB_ERROR", "04"])
def test_documented_server_codes_are_transient(code: str) -> None:
    assert classify_api_result(code, "") == FaultKind.TRANSIENT


@pytest.mark.parametrize(
    "code",
    ["INVALID_REQUEST_PARAMETER_ERROR", "10", "SERVICE_KEY_IS_NOT_REGISTERED_ERROR", "30"],
)
def test_documented_client_codes_are_fatal(code: str) -> None:
    assert classify_api_result(code, "") == FaultKind.FATAL


def test_exact_code_wins_over_temporary_marker() -> None:
    assert (
        classify_api_result("TEMPORARILY_DISABLE_THE_SERVICEKEY_ERROR", "temporarily disabled")
        == FaultKind.FATAL
    )


def test_unknown_code_with_temporary_message_is_transient() -> None:
    assert classify_api_result("9999", "Temporary maintenance") == FaultKind.TRANSIENT


def test_unknown_code_without_marker_is_fatal() -> None:
    assert classify_api_result("9999", "Something odd") == FaultKind.FATAL


def test_classify_error_dispatches_on_type() -> None:
    assert classify_error(HttpStatusError(503)) == FaultKind.TRANSIENT
    assert classify_error(HttpStatusError(404)) == FaultKind.FATAL
    assert classify_error(ApiError("05", "timeout")) == FaultKind.TRANSIENT
    assert classify_error(ApiError("INVALID_REQUEST_PARAMETER_ERROR")) == FaultKind.FATAL
    assert classify_error(ValidationError("keyword")) == FaultKind.FATAL
    assert classify_error(NotFoundError("Tour detail", "1")) == FaultKind.FATAL
    assert classify_error(KeyError("bug")) == FaultKind.FATAL
