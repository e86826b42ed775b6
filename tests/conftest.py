from collections.abc import Callable
from typing import Any

import httpx
import pytest

from tourclient.datasource.tour.source import TourApiSource
from tourclient.services.client import ServiceClient, ServiceConfig
from tourclient.services.retry import RetryExecutor, RetryPolicy


def envelope(
    item: Any = None,
    *,
    total_count: int | None = None,
    page_no: int = 1,
    num_of_rows: int = 20,
    omit_item: bool = False,
) -> dict[str, Any]:
    """Successful KorService2 response wrapping `item` as-is."""
    items: Any = {} if omit_item else {"item": item}
    if total_count is None:
        total_count = len(item) if isinstance(item, list) else (0 if item is None else 1)
    return {
        "response": {
            "header": {"resultCode": "0000", "resultMsg": "OK"},
            "body": {
                "items": items,
                "numOfRows": num_of_rows,
                "pageNo": page_no,
                "totalCount": total_count,
            },
        }
    }


def error_envelope(code: str, message: str = "") -> dict[str, Any]:
    return {"response": {"header": {"resultCode": code, "resultMsg": message}}}


class SleepRecorder:
    """Stand-in for asyncio.sleep that records delays without waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class RequestLog:
    """httpx.MockTransport handler replaying scripted responses."""

    def __init__(self, responses: list[httpx.Response | Exception | Callable]):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_source(sleeper: SleepRecorder):
    """Build a TourApiSource whose HTTP traffic goes to a RequestLog."""

    def _make(
        *responses: httpx.Response | Exception,
        max_retries: int = 3,
        base_delay: float = 1.0,
    ) -> tuple[TourApiSource, RequestLog]:
        log = RequestLog(list(responses))
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(log))
        client = ServiceClient(ServiceConfig(service_id="tour_api"), http_client=http_client)
        executor = RetryExecutor(
            RetryPolicy(max_retries=max_retries, base_delay=base_delay),
            sleep=sleeper,
        )
        source = TourApiSource("test-key", client=client, executor=executor)
        return source, log

    return _make
