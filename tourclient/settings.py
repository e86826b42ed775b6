import os
from typing import Any

from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from tourclient.services.errors import ValidationError

load_dotenv()

DEFAULT_BASE_URL = "https://apis.data.go.kr/B551011/KorService2"


class Settings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Korea Tourism Organization API (KorService2)
    tour_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("TOUR_API_KEY", "NEXT_PUBLIC_TOUR_API_KEY"),
    )
    tour_api_base_url: str = Field(default=DEFAULT_BASE_URL, alias="TOUR_API_BASE_URL")
    tour_api_mobile_os: str = Field(default="ETC", alias="TOUR_API_MOBILE_OS")
    tour_api_mobile_app: str = Field(default="MyTrip", alias="TOUR_API_MOBILE_APP")
    tour_api_timeout: float = Field(default=30.0, alias="TOUR_API_TIMEOUT")

    # Retry Configuration
    tour_api_max_retries: int = Field(default=3, alias="TOUR_API_MAX_RETRIES")
    tour_api_retry_base_delay: float = Field(
        default=1.0, alias="TOUR_API_RETRY_BASE_DELAY"
    )

    @model_validator(mode="before")
    @classmethod
    def _skip_blank_primary_key(cls, data: Any) -> Any:
        # A blank TOUR_API_KEY must not shadow NEXT_PUBLIC_TOUR_API_KEY
        if isinstance(data, dict) and not str(data.get("TOUR_API_KEY") or "").strip():
            data = {k: v for k, v in data.items() if k != "TOUR_API_KEY"}
        return data

    @classmethod
    def from_env(cls) -> "Settings":
        return cls.model_validate(dict(os.environ))

    def require_api_key(self) -> str:
        """Return the credential, or fail at startup when it is missing."""
        if not self.tour_api_key.strip():
            raise ValidationError(
                "TOUR_API_KEY",
                "Tour API key is not configured. Set TOUR_API_KEY "
                "(or NEXT_PUBLIC_TOUR_API_KEY).",
            )
        return self.tour_api_key

    def identity_params(self) -> dict[str, str]:
        """Fixed service identity parameters sent with every request."""
        return {
            "MobileOS": self.tour_api_mobile_os,
            "MobileApp": self.tour_api_mobile_app,
            "_type": "json",
        }


global_settings = Settings.from_env()
