"""
Service layer infrastructure - resilience patterns for external API calls.

Provides:
- filter_params / RequestBuilder: Canonical query construction
- ServiceClient: Single-attempt async HTTP transport
- classify_error: Transient vs fatal failure classification
- RetryExecutor: Bounded retries with exponential backoff
- normalize / decode_page: Envelope decoding into typed lists
"""

from tourclient.services.errors import (
    ServiceError,
    NetworkError,
    RequestTimeoutError,
    RequestFailedError,
    HttpStatusError,
    ApiError,
    ValidationError,
    NotFoundError,
    format_error,
)
from tourclient.services.request import RequestBuilder, TourRequest, filter_params
from tourclient.services.classifier import (
    FaultKind,
    classify_api_result,
    classify_error,
    classify_status,
    classify_transport,
)
from tourclient.services.retry import RetryExecutor, RetryPhase, RetryPolicy, RetryState
from tourclient.services.normalizer import (
    Empty,
    Many,
    Page,
    Single,
    decode_items,
    decode_page,
    normalize,
)
from tourclient.services.client import ServiceClient, ServiceConfig

__all__ = [
    # Errors
    "ServiceError",
    "NetworkError",
    "RequestTimeoutError",
    "RequestFailedError",
    "HttpStatusError",
    "ApiError",
    "ValidationError",
    "NotFoundError",
    "format_error",
    # Requests
    "RequestBuilder",
    "TourRequest",
    "filter_params",
    # Classification
    "FaultKind",
    "classify_api_result",
    "classify_error",
    "classify_status",
    "classify_transport",
    # Retry
    "RetryExecutor",
    "RetryPhase",
    "RetryPolicy",
    "RetryState",
    # Normalization
    "Empty",
    "Many",
    "Page",
    "Single",
    "decode_items",
    "decode_page",
    "normalize",
    # Client
    "ServiceClient",
    "ServiceConfig",
]
