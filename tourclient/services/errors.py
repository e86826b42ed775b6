"""
Service layer exceptions.

Every failure surfaced by the tour API client is one of these classes, so
callers can branch on type and read structured detail (status, code, field)
instead of parsing messages.
"""


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, service_id: str | None = None):
        self.service_id = service_id
        self.message = message
        super().__init__(message)


class NetworkError(ServiceError):
    """Transport failure: connection refused, reset, DNS, protocol error."""

    pass


class RequestTimeoutError(NetworkError):
    """Request timed out."""

    def __init__(self, service_id: str, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Request to service '{service_id}' timed out after {timeout}s",
            service_id=service_id,
        )


class RequestFailedError(ServiceError):
    """Request failed for a reason retrying cannot fix: proxy, scheme, redirects, decoding."""

    pass


class HttpStatusError(ServiceError):
    """Non-success HTTP status returned by the service."""

    def __init__(self, status: int, detail: str = "", service_id: str | None = None):
        self.status = status
        msg = f"HTTP {status}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg, service_id=service_id)


class ApiError(ServiceError):
    """The service answered, but the envelope carries a non-success result code."""

    def __init__(self, code: str, message: str = "", service_id: str | None = None):
        self.code = code
        self.result_msg = message
        super().__init__(
            f"API error {code}: {message}" if message else f"API error {code}",
            service_id=service_id,
        )


class ValidationError(ServiceError):
    """Caller supplied invalid input, or required configuration is missing."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Invalid or missing value for '{field}'")


class NotFoundError(ServiceError):
    """A single-record lookup returned zero results."""

    def __init__(self, resource: str, identifier: str, service_id: str | None = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            f"{resource} not found (contentId: {identifier})",
            service_id=service_id,
        )


_STATUS_MESSAGES = {
    400: "The request was invalid. Please check the values you entered.",
    401: "Authentication is required.",
    403: "You do not have permission to access this resource.",
    404: "The requested resource could not be found.",
    429: "Too many requests. Please try again in a moment.",
}

_SERVER_ERROR_MESSAGE = "The server ran into a problem. Please try again in a moment."
_NETWORK_MESSAGE = "Please check your network connection. You may be offline."


def format_error(error: BaseException) -> str:
    """Turn a client error into a message suitable for end users."""
    if isinstance(error, NetworkError):
        return _NETWORK_MESSAGE

    if isinstance(error, HttpStatusError):
        if error.status in (500, 502, 503):
            return _SERVER_ERROR_MESSAGE
        return _STATUS_MESSAGES.get(
            error.status, error.message or "The API request failed."
        )

    if isinstance(error, ApiError):
        return f"The tourism service reported an error: {error.result_msg or error.code}"

    if isinstance(error, (ValidationError, NotFoundError)):
        return error.message

    return str(error) or "An unknown error occurred."
