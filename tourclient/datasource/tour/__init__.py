"""
Korea Tourism Organization (KorService2) data source.
"""

from tourclient.datasource.tour.models import (
    CONTENT_TYPE_NAMES,
    AreaCode,
    ContentType,
    TourDetail,
    TourImage,
    TourIntro,
    TourItem,
)
from tourclient.datasource.tour.source import (
    TourApiSource,
    close_tour_source,
    count_by_area,
    get_detail,
    get_images,
    get_introduction,
    get_tour_source,
    list_by_area,
    list_regions,
    search_by_keyword,
)

__all__ = [
    "CONTENT_TYPE_NAMES",
    "AreaCode",
    "ContentType",
    "TourDetail",
    "TourImage",
    "TourIntro",
    "TourItem",
    "TourApiSource",
    "close_tour_source",
    "count_by_area",
    "get_detail",
    "get_images",
    "get_introduction",
    "get_tour_source",
    "list_by_area",
    "list_regions",
    "search_by_keyword",
]
