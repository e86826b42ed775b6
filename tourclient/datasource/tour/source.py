"""
Korea Tourism Organization API data source (KorService2).

API Documentation: https://www.data.go.kr/data/15101578/openapi.do
Get a service key at: https://www.data.go.kr/

Endpoints:
- areaCode2: region codes
- areaBasedList2: listings by region / content type
- searchKeyword2: free-text search
- detailCommon2, detailIntro2, detailImage2: single record details
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from tourclient.datasource.base import BaseDataSource
from tourclient.datasource.tour.models import (
    AreaCode,
    ContentType,
    TourDetail,
    TourImage,
    TourIntro,
    TourItem,
)
from tourclient.services.client import ServiceClient, ServiceConfig
from tourclient.services.errors import NotFoundError, ValidationError
from tourclient.services.normalizer import Page, decode_page
from tourclient.services.request import ParamValue, RequestBuilder
from tourclient.services.retry import RetryExecutor, RetryPolicy
from tourclient.settings import DEFAULT_BASE_URL, Settings, global_settings
from tourclient.utils import log_endpoint

M = TypeVar("M", bound=BaseModel)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20

DEFAULT_IDENTITY = {"MobileOS": "ETC", "MobileApp": "MyTrip", "_type": "json"}


def _required_text(value: str | None, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(field, f"'{field}' is required")
    return str(value).strip()


def _content_type(value: ContentType | str | int | None, required: bool = False) -> str | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError("contentTypeId", "'contentTypeId' is required")
        return None
    if isinstance(value, ContentType):
        return value.value
    try:
        return ContentType(str(value).strip()).value
    except ValueError:
        raise ValidationError(
            "contentTypeId", f"Unknown content type id: {value!r}"
        ) from None


def _positive(value: int, field: str) -> int:
    if not isinstance(value, int) or value < 1:
        raise ValidationError(field, f"'{field}' must be a positive integer, got {value!r}")
    return value


class TourApiSource(BaseDataSource[TourItem]):
    """
    Typed access to the KorService2 endpoints.

    Each public method validates its inputs, builds one request and runs it
    through the RetryExecutor; the retried unit is GET + envelope decoding,
    so transient API result codes are retried like transient HTTP failures.
    Requires a service key from https://www.data.go.kr/
    """

    SERVICE_ID = "tour_api"

    def __init__(
        self,
        api_key: str,
        client: ServiceClient | None = None,
        executor: RetryExecutor | None = None,
        base_url: str = DEFAULT_BASE_URL,
        identity_params: Mapping[str, str] | None = None,
    ):
        # Fails fast on a missing key, before any client is created
        self.builder = RequestBuilder(
            base_url, api_key, identity_params or DEFAULT_IDENTITY
        )
        super().__init__(
            client or ServiceClient(ServiceConfig(service_id=self.SERVICE_ID)),
            executor,
        )
        self.api_key = api_key

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        client: ServiceClient | None = None,
    ) -> "TourApiSource":
        settings = settings or global_settings
        api_key = settings.require_api_key()
        client = client or ServiceClient(
            ServiceConfig(service_id=cls.SERVICE_ID, timeout=settings.tour_api_timeout)
        )
        executor = RetryExecutor(
            RetryPolicy(
                max_retries=settings.tour_api_max_retries,
                base_delay=settings.tour_api_retry_base_delay,
            ),
            name=cls.SERVICE_ID,
        )
        return cls(
            api_key,
            client=client,
            executor=executor,
            base_url=settings.tour_api_base_url,
            identity_params=settings.identity_params(),
        )

    @property
    def service_id(self) -> str:
        return self.SERVICE_ID

    def is_configured(self) -> bool:
        return bool(self.api_key.strip())

    async def fetch(self) -> list[TourItem]:
        """Fetch the first page of the nationwide listing."""
        return await self.list_by_area()

    async def _fetch_page(
        self,
        path: str,
        params: Mapping[str, ParamValue],
        model: type[M],
    ) -> Page[M]:
        request = self.builder.build(path, params)

        async def attempt() -> Page[M]:
            payload: Any = await self.client.get_json(request)
            return decode_page(payload, model)

        return await self.executor.run(attempt, name=f"{self.SERVICE_ID}{path}")

    async def _fetch_list(
        self,
        path: str,
        params: Mapping[str, ParamValue],
        model: type[M],
    ) -> list[M]:
        page = await self._fetch_page(path, params, model)
        return page.items

    @log_endpoint
    async def list_regions(self, parent_code: str | None = None) -> list[AreaCode]:
        """Top-level regions, or the sub-regions of parent_code."""
        return await self._fetch_list("/areaCode2", {"areaCode": parent_code}, AreaCode)

    @log_endpoint
    async def list_by_area(
        self,
        area_code: str | None = None,
        content_type_id: ContentType | str | None = None,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[TourItem]:
        """Listings filtered by region and content type."""
        params = {
            "pageNo": _positive(page, "pageNo"),
            "numOfRows": _positive(page_size, "numOfRows"),
            "areaCode": area_code,
            "contentTypeId": _content_type(content_type_id),
        }
        return await self._fetch_list("/areaBasedList2", params, TourItem)

    @log_endpoint
    async def search_by_keyword(
        self,
        keyword: str,
        area_code: str | None = None,
        content_type_id: ContentType | str | None = None,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[TourItem]:
        """Free-text search. Blank keywords are rejected before any request."""
        params = {
            "keyword": _required_text(keyword, "keyword"),
            "pageNo": _positive(page, "pageNo"),
            "numOfRows": _positive(page_size, "numOfRows"),
            "areaCode": area_code,
            "contentTypeId": _content_type(content_type_id),
        }
        return await self._fetch_list("/searchKeyword2", params, TourItem)

    @log_endpoint
    async def get_detail(self, content_id: str) -> TourDetail:
        content_id = _required_text(content_id, "contentId")
        records = await self._fetch_list(
            "/detailCommon2", {"contentId": content_id}, TourDetail
        )
        if not records:
            raise NotFoundError("Tour detail", content_id, service_id=self.SERVICE_ID)
        return records[0]

    @log_endpoint
    async def get_introduction(
        self,
        content_id: str,
        content_type_id: ContentType | str,
    ) -> TourIntro:
        content_id = _required_text(content_id, "contentId")
        params = {
            "contentId": content_id,
            "contentTypeId": _content_type(content_type_id, required=True),
        }
        records = await self._fetch_list("/detailIntro2", params, TourIntro)
        if not records:
            raise NotFoundError("Tour introduction", content_id, service_id=self.SERVICE_ID)
        return records[0]

    @log_endpoint
    async def get_images(self, content_id: str) -> list[TourImage]:
        content_id = _required_text(content_id, "contentId")
        return await self._fetch_list(
            "/detailImage2", {"contentId": content_id}, TourImage
        )

    @log_endpoint
    async def count_by_area(
        self,
        area_code: str | None = None,
        content_type_id: ContentType | str | None = None,
    ) -> int:
        """Total number of listings matching the filters (fetches a single row)."""
        params = {
            "pageNo": 1,
            "numOfRows": 1,
            "areaCode": area_code,
            "contentTypeId": _content_type(content_type_id),
        }
        page = await self._fetch_page("/areaBasedList2", params, TourItem)
        return page.total_count


# Default source bound to global_settings
_default_source: TourApiSource | None = None


def get_tour_source() -> TourApiSource:
    """Get the process-wide source; raises ValidationError without a key."""
    global _default_source
    if _default_source is None:
        _default_source = TourApiSource.from_settings(global_settings)
    return _default_source


async def close_tour_source() -> None:
    """Close the process-wide source."""
    global _default_source
    if _default_source:
        await _default_source.close()
        _default_source = None


async def list_regions(parent_code: str | None = None) -> list[AreaCode]:
    return await get_tour_source().list_regions(parent_code)


async def list_by_area(
    area_code: str | None = None,
    content_type_id: ContentType | str | None = None,
    page: int = DEFAULT_PAGE,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[TourItem]:
    return await get_tour_source().list_by_area(area_code, content_type_id, page, page_size)


async def search_by_keyword(
    keyword: str,
    area_code: str | None = None,
    content_type_id: ContentType | str | None = None,
    page: int = DEFAULT_PAGE,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[TourItem]:
    return await get_tour_source().search_by_keyword(
        keyword, area_code, content_type_id, page, page_size
    )


async def get_detail(content_id: str) -> TourDetail:
    return await get_tour_source().get_detail(content_id)


async def get_introduction(content_id: str, content_type_id: ContentType | str) -> TourIntro:
    return await get_tour_source().get_introduction(content_id, content_type_id)


async def get_images(content_id: str) -> list[TourImage]:
    return await get_tour_source().get_images(content_id)


async def count_by_area(
    area_code: str | None = None,
    content_type_id: ContentType | str | None = None,
) -> int:
    return await get_tour_source().count_by_area(area_code, content_type_id)
