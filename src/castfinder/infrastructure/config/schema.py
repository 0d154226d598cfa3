"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class CacheConfig(BaseModel):
    """Result cache configuration (in-process only)."""

    ttl_seconds: float = Field(
        default=300,
        description="Lifetime of a cached search page (seconds).",
    )
    cache_cast_results: bool = Field(
        default=False,
        description="Also cache enriched cast lists under the same TTL.",
    )

    @field_validator("ttl_seconds")
    @classmethod
    def _validate_ttl(cls, v: float) -> float:
        if v < 0:
            raise ValueError("cache.ttl_seconds must be >= 0")
        return v


class RateLimitConfig(BaseModel):
    """Per-caller sliding-window admission control."""

    window_seconds: float = Field(
        default=10.0,
        description="Width of the trailing window (seconds).",
    )
    max_requests: int = Field(
        default=30,
        description="Admissions per caller inside one window. 0 = unlimited.",
    )

    @field_validator("window_seconds")
    @classmethod
    def _validate_window(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("rate_limit.window_seconds must be > 0")
        return v

    @field_validator("max_requests")
    @classmethod
    def _validate_max_requests(cls, v: int) -> int:
        if v < 0:
            raise ValueError("rate_limit.max_requests must be >= 0")
        return v


class CastConfig(BaseModel):
    """Credit aggregation switches."""

    untranslated_movie_credits: bool = Field(
        default=True,
        description=(
            "Also fetch movie credits without the language parameter and merge "
            "them (best-effort)."
        ),
    )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/tmdb/cache/rate_limit/cast).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    - tmdb api key, api base url and image base url have no default: a missing
      value fails validation so the service refuses to start.
    """

    # General
    app_name: str = Field(default="castfinder", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout in seconds for TMDB requests.",
    )
    http_user_agent: str = Field(
        default="castfinder/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # TMDB (YAML section: tmdb.*)
    tmdb_api_key: str = Field(
        validation_alias=AliasChoices(
            "tmdb_api_key",
            AliasPath("tmdb", "api_key"),
        ),
        description="TMDB API key (sent as the api_key query parameter).",
    )
    tmdb_api_base_url: str = Field(
        validation_alias=AliasChoices(
            "tmdb_api_base_url",
            AliasPath("tmdb", "api_base_url"),
        ),
        description="TMDB REST base URL, e.g. https://api.themoviedb.org/3",
    )
    tmdb_image_base_url: str = Field(
        validation_alias=AliasChoices(
            "tmdb_image_base_url",
            AliasPath("tmdb", "image_base_url"),
        ),
        description="Prefix for image paths, e.g. https://image.tmdb.org/t/p/w500",
    )
    tmdb_language: str = Field(
        default="en-US",
        validation_alias=AliasChoices(
            "tmdb_language",
            AliasPath("tmdb", "language"),
        ),
        description="Locale sent with localized TMDB requests.",
    )
    placeholder_image_url: str = Field(
        default="https://via.placeholder.com/500x750?text=No+Image+Available",
        validation_alias=AliasChoices(
            "placeholder_image_url",
            AliasPath("tmdb", "placeholder_image_url"),
        ),
        description="Image shown for cast members without a profile picture.",
    )

    cache: CacheConfig = Field(default_factory=CacheConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    cast: CastConfig = Field(default_factory=CastConfig)

    @field_validator("tmdb_api_key", "tmdb_api_base_url", "tmdb_image_base_url")
    @classmethod
    def _validate_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read CASTFINDER_* variables, converts
    them to a dict of set values and merges that over YAML/defaults before
    validating AppConfig.

    Supported env var examples (flat, explicit):
    - CASTFINDER_TMDB_API_KEY
    - CASTFINDER_TMDB_API_BASE_URL
    - CASTFINDER_TMDB_IMAGE_BASE_URL
    - CASTFINDER_LOG_LEVEL
    - CASTFINDER_CACHE_CAST_RESULTS
    """

    model_config = SettingsConfigDict(
        env_prefix="CASTFINDER_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    tmdb_api_key: Optional[str] = None
    tmdb_api_base_url: Optional[str] = None
    tmdb_image_base_url: Optional[str] = None
    tmdb_language: Optional[str] = None
    placeholder_image_url: Optional[str] = None

    cache_ttl_seconds: Optional[float] = None
    cache_cast_results: Optional[bool] = None

    rate_limit_window_seconds: Optional[float] = None
    rate_limit_max_requests: Optional[int] = None

    untranslated_movie_credits: Optional[bool] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
