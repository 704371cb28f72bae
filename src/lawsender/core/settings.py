"""
Configuration models for law-sender using Pydantic v2 Settings.

``Settings`` holds environment-driven knobs (``LAWSENDER_`` prefix, nested
groups separated by ``__``). ``SendConfig`` is the per-invocation record the
CLI and library callers pass to the resolver and collector.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)

DEFAULT_INGESTION_DOMAIN = "ods.opinsights.azure.com"
DEFAULT_API_VERSION = "2016-04-01"
LOGS_RESOURCE = "/api/logs"

# Custom log type names: letters, digits and underscore, up to 100 chars.
_TABLE_NAME_RE = re.compile(r"^[A-Za-z0-9_]{1,100}$")


def validate_table_name(value: str) -> str:
    """Return ``value`` if it is an acceptable ``Log-Type`` or raise ValueError."""
    if not _TABLE_NAME_RE.match(value or ""):
        raise ValueError(
            "table name must be 1-100 characters of letters, digits or underscore"
        )
    return value


class CoreSettings(BaseModel):
    """Process-level toggles."""

    internal_logging_enabled: bool = Field(
        default=False,
        description="Emit DEBUG/WARN diagnostics as JSON lines on stderr",
    )


class IngestionSettings(BaseModel):
    """Data Collector endpoint settings."""

    domain: str = Field(
        default=DEFAULT_INGESTION_DOMAIN,
        description="Ingestion domain appended to the workspace id",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        description="Value of the api-version query parameter",
    )

    @field_validator("domain")
    @classmethod
    def _strip_domain(cls, value: str) -> str:
        value = value.strip().strip(".")
        if not value or "/" in value:
            raise ValueError("domain must be a bare host name")
        return value


class HttpSettings(BaseModel):
    """HTTP client settings."""

    timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Client-wide timeout for the ingestion POST",
    )
    verify_tls: bool = Field(default=True, description="Verify TLS certificates")


class Settings(BaseSettings):
    """Top-level settings."""

    core: CoreSettings = Field(default_factory=CoreSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)

    model_config = SettingsConfigDict(
        env_prefix="LAWSENDER_",
        env_nested_delimiter="__",
        extra="ignore",
    )


class SendConfig(BaseModel):
    """Target of a single send operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    workspace_id: str = Field(description="Workspace customer id (UUID)")
    table: str = Field(description="Custom log table name (Log-Type header)")
    subscription_id: str = Field(description="Azure subscription id (UUID)")
    timestamp: datetime | None = Field(
        default=None, description="Time-generated value; defaults to now"
    )

    @field_validator("workspace_id", "subscription_id")
    @classmethod
    def _ensure_uuid(cls, value: str) -> str:
        value = value.strip()
        try:
            uuid.UUID(value)
        except ValueError as exc:
            raise ValueError(f"{value!r} is not a UUID") from exc
        return value

    @field_validator("table")
    @classmethod
    def _ensure_table(cls, value: str) -> str:
        return validate_table_name(value.strip())
