"""
Models for Korea Tourism Organization (KorService2) records.

Field names follow the wire format. Numeric fields are sent as strings by
some endpoints and numbers by others, so they are coerced to str.

API Documentation: https://www.data.go.kr/data/15101578/openapi.do
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ContentType(str, Enum):
    """Content type ids accepted by the contentTypeId parameter."""

    TOURIST_SPOT = "12"
    CULTURAL_FACILITY = "14"
    FESTIVAL = "15"
    TOUR_COURSE = "25"
    LEISURE_SPORTS = "28"
    ACCOMMODATION = "32"
    SHOPPING = "38"
    RESTAURANT = "39"

    @property
    def label(self) -> str:
        return CONTENT_TYPE_NAMES[self]


CONTENT_TYPE_NAMES: dict[ContentType, str] = {
    ContentType.TOURIST_SPOT: "Tourist spot",
    ContentType.CULTURAL_FACILITY: "Cultural facility",
    ContentType.FESTIVAL: "Festival / event",
    ContentType.TOUR_COURSE: "Travel course",
    ContentType.LEISURE_SPORTS: "Leisure sports",
    ContentType.ACCOMMODATION: "Accommodation",
    ContentType.SHOPPING: "Shopping",
    ContentType.RESTAURANT: "Restaurant",
}


class TourRecord(BaseModel):
    """Shared config: keep unknown fields, accept numbers for string fields."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class AreaCode(TourRecord):
    """Region code (areaCode2)."""

    code: str
    name: str
    rnum: str | None = None


class TourItem(TourRecord):
    """Listing entry (areaBasedList2, searchKeyword2)."""

    contentid: str
    contenttypeid: str
    title: str
    addr1: str = ""
    addr2: str | None = None
    areacode: str | None = None
    mapx: str | None = None
    mapy: str | None = None
    firstimage: str | None = None
    firstimage2: str | None = None
    tel: str | None = None
    cat1: str | None = None
    cat2: str | None = None
    cat3: str | None = None
    modifiedtime: str | None = None

    def coordinates(self) -> tuple[float, float] | None:
        """(lng, lat) in WGS84, or None when the record has no position."""
        return _coordinates(self.mapx, self.mapy)


class TourDetail(TourRecord):
    """Common detail record (detailCommon2)."""

    contentid: str
    contenttypeid: str | None = None
    title: str
    addr1: str | None = None
    addr2: str | None = None
    zipcode: str | None = None
    tel: str | None = None
    homepage: str | None = None
    overview: str | None = None
    firstimage: str | None = None
    firstimage2: str | None = None
    mapx: str | None = None
    mapy: str | None = None
    cat1: str | None = None
    cat2: str | None = None
    cat3: str | None = None
    createdtime: str | None = None
    modifiedtime: str | None = None

    def coordinates(self) -> tuple[float, float] | None:
        return _coordinates(self.mapx, self.mapy)


class TourIntro(TourRecord):
    """Type-specific introduction (detailIntro2). Fields vary by content type."""

    contentid: str
    contenttypeid: str
    infocenter: str | None = None
    restdate: str | None = None
    usetime: str | None = None
    parking: str | None = None
    chkpet: str | None = None
    expguide: str | None = None
    expagerange: str | None = None
    eventstartdate: str | None = None
    eventenddate: str | None = None
    eventplace: str | None = None
    openperiod: str | None = None
    checkintime: str | None = None
    checkouttime: str | None = None
    opentimefood: str | None = None
    reservationfood: str | None = None


class TourImage(TourRecord):
    """Image entry (detailImage2)."""

    contentid: str
    imagename: str | None = None
    originimgurl: str | None = None
    smallimageurl: str | None = None
    serialnum: str | None = None


def _coordinates(mapx: str | None, mapy: str | None) -> tuple[float, float] | None:
    # The service already reports WGS84 longitude/latitude
    if not mapx or not mapy:
        return None
    try:
        return float(mapx), float(mapy)
    except ValueError:
        return None
