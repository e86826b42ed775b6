import pytest

from tests.conftest import envelope, error_envelope
from tourclient.datasource.tour.models import AreaCode, TourItem
from tourclient.services.errors import ApiError
from tourclient.services.normalizer import (
    MALFORMED_RESPONSE,
    Empty,
    Many,
    Single,
    decode_items,
    decode_page,
    normalize,
)


def _item(content_id: str) -> dict:
    return {"contentid": content_id, "contenttypeid": "12", "title": f"Place {content_id}"}


def test_decode_items_tags_each_shape() -> None:
    assert decode_items(None) == Empty()
    assert decode_items("") == Empty()
    assert decode_items({"id": "A1"}) == Single({"id": "A1"})
    assert decode_items([{"id": "A1"}, {"id": "A2"}]) == Many([{"id": "A1"}, {"id": "A2"}])


def test_decode_items_rejects_scalars() -> None:
    with pytest.raises(ApiError) as exc_info:
        decode_items(42)

    assert exc_info.value.code == MALFORMED_RESPONSE


def test_single_object_becomes_one_element_list() -> None:
    result = normalize(envelope(_item("A1")), TourItem)

    assert [r.contentid for r in result] == ["A1"]


def test_array_order_is_preserved() -> None:
    ids = ["3", "1", "2"]

    result = normalize(envelope([_item(i) for i in ids]), TourItem)

    assert [r.contentid for r in result] == ids


def test_missing_item_is_empty_list() -> None:
    assert normalize(envelope(omit_item=True), TourItem) == []
    assert normalize(envelope(None), TourItem) == []


def test_empty_string_items_is_empty_list() -> None:
    payload = envelope(None)
    payload["response"]["body"]["items"] = ""

    assert normalize(payload, TourItem) == []


def test_error_code_raises_api_error() -> None:
    with pytest.raises(ApiError) as exc_info:
        normalize(error_envelope("INVALID_REQUEST_PARAMETER_ERROR", "bad param"), TourItem)

    assert exc_info.value.code == "INVALID_REQUEST_PARAMETER_ERROR"
    assert exc_info.value.result_msg == "bad param"


def test_page_carries_pagination_metadata() -> None:
    page = decode_page(
        envelope([_item("1")], total_count=321, page_no=4, num_of_rows=1), TourItem
    )

    assert page.total_count == 321
    assert page.page_no == 4
    assert page.num_of_rows == 1
    assert len(page.items) == 1


def test_numeric_fields_are_coerced_to_strings() -> None:
    result = normalize(envelope({"code": 1, "name": "Seoul", "rnum": 1}), AreaCode)

    assert result[0].code == "1"
    assert result[0].rnum == "1"


@pytest.mark.parametrize(
    "payload",
    [None, [], {"unexpected": True}, {"response": {"body": {}}}],
)
def test_malformed_envelopes_raise(payload) -> None:
    with pytest.raises(ApiError) as exc_info:
        normalize(payload, TourItem)

    assert exc_info.value.code == MALFORMED_RESPONSE


def test_items_failing_validation_raise_instead_of_partial_result() -> None:
    payload = envelope([_item("1"), {"title": "no id"}])

    with pytest.raises(ApiError) as exc_info:
        normalize(payload, TourItem)

    assert exc_info.value.code == MALFORMED_RESPONSE
