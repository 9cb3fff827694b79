"""Application configuration and .env loading."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from services.errors import ConfigurationError


DEFAULT_MODEL_MAPPING: dict[str, str] = {
    "invoice": "prebuilt-invoice",
    "receipt": "prebuilt-receipt",
    "form": "prebuilt-document",
    "id": "prebuilt-idDocument",
    "business-card": "prebuilt-businessCard",
    "mixed": "prebuilt-read",
    "print": "prebuilt-read",
    "handwriting": "prebuilt-read",
    "financial": "prebuilt-document",
    "read": "prebuilt-read",
    "layout": "prebuilt-layout",
}

ContentType = Literal["application/octet-stream", "application/json"]


class Settings(BaseSettings):
    """Centralized runtime configuration."""

    docintel_endpoint: str | None = Field(
        default=None, validation_alias="DOCINTEL_ENDPOINT"
    )
    docintel_api_key: SecretStr | None = Field(
        default=None, validation_alias="DOCINTEL_API_KEY"
    )
    docintel_api_version: str = Field(
        default="2023-07-31", validation_alias="DOCINTEL_API_VERSION"
    )
    docintel_api_path: str = Field(
        default="formrecognizer", validation_alias="DOCINTEL_API_PATH"
    )
    docintel_content_type: ContentType = Field(
        default="application/octet-stream", validation_alias="DOCINTEL_CONTENT_TYPE"
    )
    request_timeout: float = Field(
        default=30.0, gt=0, validation_alias="DOCINTEL_REQUEST_TIMEOUT"
    )

    poll_interval_seconds: float = Field(
        default=2.0, ge=0, validation_alias="POLL_INTERVAL_SECONDS"
    )
    poll_max_ticks: int = Field(default=30, ge=1, validation_alias="POLL_MAX_TICKS")

    default_model: str = Field(default="mixed", validation_alias="DEFAULT_MODEL")
    fallback_model_id: str = Field(
        default="prebuilt-read", validation_alias="FALLBACK_MODEL_ID"
    )
    model_mapping: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_MODEL_MAPPING),
        validation_alias="MODEL_MAPPING",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=("settings_",),
    )

    def resolve_model_id(self, selector: str | None) -> str:
        """Map a logical model name to the service's model identifier."""
        key = (selector or self.default_model).strip()
        if key in self.model_mapping:
            return self.model_mapping[key]
        if key.startswith("prebuilt-"):
            return key
        return self.fallback_model_id


class ServiceConfig(BaseModel):
    """Connection parameters handed to the transport client."""

    endpoint: str
    api_key: SecretStr
    api_version: str = "2023-07-31"
    api_path: str = "formrecognizer"
    content_type: ContentType = "application/octet-stream"
    timeout: float = 30.0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceConfig":
        if not settings.docintel_endpoint:
            raise ConfigurationError("DOCINTEL_ENDPOINT is not configured")
        if settings.docintel_api_key is None or not settings.docintel_api_key.get_secret_value():
            raise ConfigurationError("DOCINTEL_API_KEY is not configured")
        return cls(
            endpoint=settings.docintel_endpoint,
            api_key=settings.docintel_api_key,
            api_version=settings.docintel_api_version,
            api_path=settings.docintel_api_path,
            content_type=settings.docintel_content_type,
            timeout=settings.request_timeout,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once from .env/environment."""
    return Settings()


__all__ = ["DEFAULT_MODEL_MAPPING", "ServiceConfig", "Settings", "get_settings"]
