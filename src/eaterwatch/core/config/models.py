"""
Pydantic configuration models for EaterWatch.

These models provide type-safe configuration with validation for:
- The tracked page and the artifact location
- Wayback Machine capture index settings
- Fetch behaviour (timeouts, retries, politeness)
- Extraction thresholds and normalization tables
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


DEFAULT_TARGET_URL = "https://www.eater.com/maps/best-vancouver-restaurants-bc-canada"


# =============================================================================
# Archive Configuration
# =============================================================================


class ArchiveConfig(BaseModel):
    """Wayback Machine capture index and retrieval settings."""

    enabled: bool = Field(
        default=True,
        description="Walk archived captures before the live page",
    )
    cdx_endpoint: str = Field(
        default="https://web.archive.org/cdx/search/cdx",
        description="Capture index (CDX) endpoint",
    )
    snapshot_template: str = Field(
        default="https://web.archive.org/web/{timestamp}id_/{url}",
        description="Retrieval URL template for one capture",
    )
    from_year: int | None = Field(
        default=2017,
        ge=1996,
        description="Ignore captures before this year",
    )
    collapse: str | None = Field(
        default="timestamp:6",
        description="CDX collapse rule (timestamp:6 keeps one capture per month)",
    )

    @field_validator("snapshot_template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        """Ensure the template has both placeholders."""
        if "{timestamp}" not in v or "{url}" not in v:
            raise ValueError("snapshot_template must contain {timestamp} and {url}")
        return v


# =============================================================================
# Fetch Configuration
# =============================================================================


class FetchConfig(BaseModel):
    """HTTP fetch and politeness settings."""

    timeout_seconds: float = Field(
        default=60.0,
        ge=1.0,
        le=600.0,
        description="Request timeout in seconds",
    )
    max_attempts: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts per request (1 disables retries)",
    )
    user_agent: str = Field(
        default="eaterwatch/0.1 (+https://github.com/eaterwatch/eaterwatch)",
        description="User-Agent header sent with every request",
    )
    min_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Minimum delay between requests to the same host",
    )
    max_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Maximum delay between requests to the same host",
    )

    @field_validator("max_delay_ms")
    @classmethod
    def validate_max_delay(cls, v: int, info) -> int:
        """Ensure max_delay >= min_delay."""
        min_delay = info.data.get("min_delay_ms", 0)
        if v < min_delay:
            return min_delay
        return v


# =============================================================================
# Extraction / Normalization Configuration
# =============================================================================


class ExtractionConfig(BaseModel):
    """Extraction thresholds."""

    min_restaurants: int = Field(
        default=30,
        ge=1,
        description="Snapshots with fewer records are treated as broken captures",
    )


class CanonicalAlias(BaseModel):
    """Canonical identity an alias slug resolves to."""

    slug: str
    name: str


class NormalizationConfig(BaseModel):
    """Address and identity normalization settings."""

    default_city: str = Field(
        default="Vancouver",
        description="City injected into addresses that only carry street and province",
    )
    aliases: dict[str, CanonicalAlias] = Field(
        default_factory=dict,
        description="Extra alias slug -> canonical identity entries",
    )
    phone_overrides: dict[str, str] = Field(
        default_factory=dict,
        description="Extra canonical slug -> phone number overrides",
    )


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    file: Path | None = Field(
        default=Path("logs/eaterwatch.log"),
        description="Log file path",
    )
    json_format: bool = Field(
        default=True,
        description="Use JSON format for file logs",
    )
    rich_console: bool = Field(
        default=True,
        description="Use Rich for console output",
    )


# =============================================================================
# Application Configuration
# =============================================================================


class AppConfig(BaseModel):
    """Root application configuration.

    This is the main configuration object loaded from app.yaml.
    """

    target_url: str = Field(
        default=DEFAULT_TARGET_URL,
        description="Live URL of the tracked list",
    )
    output_path: Path = Field(
        default=Path("data/versions.json"),
        description="Where the version history artifact is written",
    )

    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("target_url")
    @classmethod
    def validate_target_url(cls, v: str) -> str:
        """Only absolute http(s) URLs can be archived."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("target_url must be an absolute http(s) URL")
        return v
