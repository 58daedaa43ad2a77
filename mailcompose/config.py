"""Configuration management for the email compose pipeline."""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils import split_list

# Load .env early so BaseSettings can pick values up seamlessly.
load_dotenv()

DEFAULT_MAX_TOTAL_ATTACHMENT_SIZE = 15 * 1024 * 1024


class Settings(BaseSettings):
    """App configuration derived from environment variables."""

    email_api_base_url: HttpUrl = Field(..., alias="EMAIL_API_BASE_URL")
    email_api_timeout: float = Field(30.0, alias="EMAIL_API_TIMEOUT")
    default_source: str = Field("email-composer", alias="EMAIL_SOURCE")
    default_template_id: int = Field(1, alias="EMAIL_TEMPLATE_ID")

    max_total_attachment_size: int = Field(
        DEFAULT_MAX_TOTAL_ATTACHMENT_SIZE, alias="MAX_TOTAL_ATTACHMENT_SIZE"
    )
    accepted_attachment_types_raw: str = Field("", alias="ACCEPTED_ATTACHMENT_TYPES")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "email_api_timeout",
        "default_source",
        "default_template_id",
        "max_total_attachment_size",
        mode="before",
    )
    @classmethod
    def _empty_str_to_default(cls, value, info):
        if isinstance(value, str) and value.strip() == "":
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("email_api_timeout", "max_total_attachment_size")
    @classmethod
    def _must_be_positive(cls, value):
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @property
    def api_base_url(self) -> str:
        return str(self.email_api_base_url).rstrip("/")

    @property
    def accepted_attachment_types(self) -> list[str]:
        """MIME allow-list override; empty means the built-in list applies."""
        return split_list(self.accepted_attachment_types_raw, coerce_lower=True)
