from typing import Annotated, Literal

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from daily_summary.domain.errors import ConfigurationError


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    SUPABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str

    RESEND_BASE_URL: str = "https://api.resend.com"
    RESEND_API_KEY: str
    EMAIL_FROM_ADDRESS: str
    # Comma-separated in the environment, e.g. "a@x.com,b@y.com"
    EMAIL_RECIPIENTS: Annotated[list[str], NoDecode]
    EMAIL_DRY_RUN: bool = False

    FLOOR_NUMBER: str = "06"
    REPORT_LAYOUT: Literal["summary", "by_company"] = "summary"

    HTTP_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"

    @field_validator("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "RESEND_API_KEY")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("EMAIL_FROM_ADDRESS")
    @classmethod
    def _looks_like_address(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("sender address must contain '@'")
        return value.strip()

    @field_validator("EMAIL_RECIPIENTS", mode="before")
    @classmethod
    def _split_recipients(cls, value: object) -> object:
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",")]
        if isinstance(value, list):
            value = [part for part in value if part]
            if not value:
                raise ValueError("at least one recipient is required")
        return value


def load_config(**overrides: object) -> Config:
    """Build a ``Config`` from the environment, ``.env``, and ``overrides``.

    Raises:
        ConfigurationError: if a required setting is missing or invalid.
    """
    try:
        return Config(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid or missing settings: {fields}") from exc
