"""
Request construction for the tour API.

filter_params drops parameters that carry no value; RequestBuilder merges the
fixed service identity, the credential and the call parameters into one
query.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlencode

from tourclient.services.errors import ValidationError

SERVICE_KEY_PARAM = "serviceKey"

ParamValue = str | int | float | None


def filter_params(params: Mapping[str, ParamValue]) -> dict[str, str]:
    """Drop None, empty and whitespace-only values; stringify the rest."""
    filtered: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, str):
            if not value.strip():
                continue
            filtered[key] = value
        else:
            filtered[key] = str(value)
    return filtered


@dataclass(frozen=True)
class TourRequest:
    """Fully qualified GET request: URL plus ordered query parameters."""

    url: str
    params: dict[str, str] = field(default_factory=dict)

    def query_string(self) -> str:
        return urlencode(self.params)

    def masked_url(self) -> str:
        """URL with the credential hidden, safe to log."""
        masked = {
            k: ("***" if k == SERVICE_KEY_PARAM else v) for k, v in self.params.items()
        }
        return f"{self.url}?{urlencode(masked)}"


class RequestBuilder:
    """
    Builds TourRequest objects for a fixed base URL and credential.

    Usage:
        builder = RequestBuilder(
            base_url="https://apis.data.go.kr/B551011/KorService2",
            service_key="...",
            identity_params={"MobileOS": "ETC", "MobileApp": "MyTrip", "_type": "json"},
        )
        request = builder.build("/areaCode2", {"areaCode": "1"})
    """

    def __init__(
        self,
        base_url: str,
        service_key: str,
        identity_params: Mapping[str, str] | None = None,
    ):
        if not service_key or not service_key.strip():
            raise ValidationError(
                SERVICE_KEY_PARAM, "Tour API service key is not configured"
            )
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._identity = filter_params(identity_params or {})

    @property
    def base_url(self) -> str:
        return self._base_url

    def build(self, path: str, params: Mapping[str, ParamValue] | None = None) -> TourRequest:
        query: dict[str, str] = dict(self._identity)
        query[SERVICE_KEY_PARAM] = self._service_key
        for key, value in filter_params(params or {}).items():
            # The credential always comes from configuration
            if key == SERVICE_KEY_PARAM:
                continue
            query[key] = value

        return TourRequest(url=f"{self._base_url}/{path.lstrip('/')}", params=query)
