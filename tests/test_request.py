import pytest

from tourclient.services.errors import ValidationError
from tourclient.services.request import RequestBuilder, filter_params

IDENTITY = {"MobileOS": "ETC", "MobileApp": "MyTrip", "_type": "json"}


def test_filter_params_drops_missing_and_blank_values() -> None:
    params = {
        "areaCode": None,
        "keyword": "",
        "contentTypeId": "   ",
        "pageNo": 1,
        "title": "Gyeongbokgung",
    }

    assert filter_params(params) == {"pageNo": "1", "title": "Gyeongbokgung"}


def test_filter_params_keeps_zero_and_order() -> None:
    params = {"b": 0, "a": "x", "c": None}

    filtered = filter_params(params)

    assert filtered == {"b": "0", "a": "x"}
    assert list(filtered) == ["b", "a"]


def test_builder_merges_identity_credential_and_call_params() -> None:
    builder = RequestBuilder("https://example.com/KorService2/", "secret", IDENTITY)

    request = builder.build("/areaBasedList2", {"areaCode": "1", "pageNo": 2, "keyword": None})

    assert request.url == "https://example.com/KorService2/areaBasedList2"
    assert request.params == {
        "MobileOS": "ETC",
        "MobileApp": "MyTrip",
        "_type": "json",
        "serviceKey": "secret",
        "areaCode": "1",
        "pageNo": "2",
    }


def test_call_params_cannot_override_credential() -> None:
    builder = RequestBuilder("https://example.com", "secret", IDENTITY)

    request = builder.build("areaCode2", {"serviceKey": "attacker"})

    assert request.params["serviceKey"] == "secret"


def test_call_params_override_identity() -> None:
    builder = RequestBuilder("https://example.com", "secret", IDENTITY)

    request = builder.build("areaCode2", {"MobileApp": "Other"})

    assert request.params["MobileApp"] == "Other"


@pytest.mark.parametrize("key", ["", "   "])
def test_builder_requires_credential(key: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        RequestBuilder("https://example.com", key, IDENTITY)

    assert exc_info.value.field == "serviceKey"


def test_masked_url_hides_credential() -> None:
    builder = RequestBuilder("https://example.com", "secret", IDENTITY)

    masked = builder.build("/areaCode2", {"areaCode": "1"}).masked_url()

    assert "secret" not in masked
    assert "serviceKey=%2A%2A%2A" in masked
    assert masked.startswith("https://example.com/areaCode2?")
