"""
ResponseNormalizer - Decodes the service envelope into typed lists.

The `item` field of a successful envelope arrives in three shapes: missing,
a single object, or an array. It is decoded into the ItemPayload union once,
here, so callers only ever see list[T].
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from tourclient.services.errors import ApiError

T = TypeVar("T", bound=BaseModel)

SUCCESS_CODE = "0000"
MALFORMED_RESPONSE = "MALFORMED_RESPONSE"


class EnvelopeHeader(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    result_code: str = Field(alias="resultCode")
    result_msg: str = Field(default="", alias="resultMsg")


class EnvelopeItems(BaseModel):
    item: Any = None


class EnvelopeBody(BaseModel):
    items: EnvelopeItems | None = None
    num_of_rows: int = Field(default=0, alias="numOfRows")
    page_no: int = Field(default=1, alias="pageNo")
    total_count: int = Field(default=0, alias="totalCount")

    @field_validator("items", mode="before")
    @classmethod
    def _empty_items(cls, value: Any) -> Any:
        # Zero-result pages send "items": ""
        if value is None or value == "":
            return None
        return value


class Envelope(BaseModel):
    header: EnvelopeHeader
    body: EnvelopeBody | None = None

    @property
    def is_success(self) -> bool:
        return self.header.result_code == SUCCESS_CODE


# ItemPayload: Empty | Single | Many


@dataclass(frozen=True)
class Empty:
    def to_list(self) -> list[Any]:
        return []


@dataclass(frozen=True)
class Single:
    value: Any

    def to_list(self) -> list[Any]:
        return [self.value]


@dataclass(frozen=True)
class Many:
    values: list[Any] = field(default_factory=list)

    def to_list(self) -> list[Any]:
        return list(self.values)


ItemPayload = Empty | Single | Many


class Page(BaseModel, Generic[T]):
    """One page of normalized results with pagination metadata."""

    items: list[T]
    page_no: int = 1
    num_of_rows: int = 0
    total_count: int = 0


def decode_items(raw: Any) -> ItemPayload:
    """Decode the raw `item` field into the ItemPayload union."""
    if raw is None or raw == "":
        return Empty()
    if isinstance(raw, list):
        return Many(raw)
    if isinstance(raw, dict):
        return Single(raw)
    raise ApiError(MALFORMED_RESPONSE, f"unexpected item type {type(raw).__name__}")


def parse_envelope(payload: Any) -> Envelope:
    """Validate the outer `response` object and check the result code."""
    if not isinstance(payload, dict) or "response" not in payload:
        raise ApiError(MALFORMED_RESPONSE, "response envelope missing")

    try:
        envelope = Envelope.model_validate(payload["response"])
    except pydantic.ValidationError as e:
        raise ApiError(MALFORMED_RESPONSE, f"invalid envelope: {e.error_count()} errors") from e

    if not envelope.is_success:
        raise ApiError(envelope.header.result_code, envelope.header.result_msg)
    return envelope


def _validate_items(raw_items: list[Any], model: type[T]) -> list[T]:
    try:
        return TypeAdapter(list[model]).validate_python(raw_items)
    except pydantic.ValidationError as e:
        raise ApiError(
            MALFORMED_RESPONSE, f"invalid {model.__name__} item: {e.error_count()} errors"
        ) from e


def decode_page(payload: Any, model: type[T]) -> Page[T]:
    """Decode a full envelope into a Page of validated models."""
    envelope = parse_envelope(payload)
    body = envelope.body or EnvelopeBody()
    raw = body.items.item if body.items else None
    items = _validate_items(decode_items(raw).to_list(), model)

    return Page[model](
        items=items,
        page_no=body.page_no,
        num_of_rows=body.num_of_rows,
        total_count=body.total_count,
    )


def normalize(payload: Any, model: type[T]) -> list[T]:
    """Decode a full envelope into list[model]."""
    return decode_page(payload, model).items
