"""
ServiceClient - Async HTTP transport for the tour API.

Performs exactly one GET per call and converts every failure into the
service error taxonomy:
- httpx timeouts        -> RequestTimeoutError
- connection failures   -> NetworkError
- other httpx errors    -> RequestFailedError (proxy, scheme, redirects, decoding)
- non-2xx status        -> HttpStatusError
- undecodable body      -> ApiError (gateway XML errors keep their code)

Retrying is the caller's job (see RetryExecutor).
"""

import re
from dataclasses import dataclass, field
from typing import Any

import httpx
from loguru import logger

from tourclient.services.errors import (
    ApiError,
    HttpStatusError,
    NetworkError,
    RequestFailedError,
    RequestTimeoutError,
)
from tourclient.services.normalizer import MALFORMED_RESPONSE
from tourclient.services.request import TourRequest

_XML_REASON_CODE = re.compile(r"<returnReasonCode>\s*([^<\s]+)\s*</returnReasonCode>")
_XML_AUTH_MSG = re.compile(r"<returnAuthMsg>\s*([^<]+?)\s*</returnAuthMsg>")


@dataclass
class ServiceConfig:
    """Configuration for the HTTP transport."""

    service_id: str
    timeout: float = 30.0
    headers: dict[str, str] = field(
        default_factory=lambda: {"Accept": "application/json"}
    )


class ServiceClient:
    """
    Thin async HTTP client with lazily created connection pool.

    Usage:
        async with ServiceClient(ServiceConfig(service_id="tour")) as client:
            payload = await client.get_json(request)

    An existing httpx.AsyncClient may be injected (tests use one backed by
    httpx.MockTransport); injected clients are not closed by close().
    """

    def __init__(
        self,
        config: ServiceConfig,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def service_id(self) -> str:
        return self.config.service_id

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=True,
                headers=self.config.headers,
            )
            self._owns_client = True
        return self._http_client

    async def get_json(self, request: TourRequest) -> Any:
        """Execute one GET and return the decoded JSON body."""
        client = await self._get_http_client()
        logger.debug(f"[{self.service_id}] GET {request.masked_url()}")

        try:
            response = await client.get(
                request.url,
                params=request.params,
                timeout=self.config.timeout,
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(self.service_id, self.config.timeout) from e
        except (httpx.NetworkError, httpx.RemoteProtocolError) as e:
            raise NetworkError(
                f"{type(e).__name__}: {e}", service_id=self.service_id
            ) from e
        except httpx.RequestError as e:
            # Proxy, scheme, redirect and decoding failures will not fix themselves
            raise RequestFailedError(
                f"{type(e).__name__}: {e}", service_id=self.service_id
            ) from e

        if response.is_error:
            raise HttpStatusError(
                response.status_code,
                response.reason_phrase or response.text[:200],
                service_id=self.service_id,
            )

        try:
            return response.json()
        except ValueError as e:
            raise self._undecodable(response.text) from e

    def _undecodable(self, text: str) -> ApiError:
        # The gateway answers auth/quota failures in XML even when JSON was asked for
        code = _XML_REASON_CODE.search(text)
        if code:
            msg = _XML_AUTH_MSG.search(text)
            return ApiError(
                code.group(1),
                msg.group(1) if msg else "",
                service_id=self.service_id,
            )
        return ApiError(
            MALFORMED_RESPONSE,
            f"response is not JSON: {text[:100]!r}",
            service_id=self.service_id,
        )

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
        self._http_client = None
        logger.debug(f"ServiceClient '{self.service_id}' closed")

    async def __aenter__(self) -> "ServiceClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
