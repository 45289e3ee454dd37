"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FQ_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Freight Quote API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for persisted quote outputs.")
    pricing_config_file: Path = Field(
        default=Path("config/pricing.json"),
        description="JSON pricing document (rates, trailers, tiers, zones).",
    )
    allow_default_pricing: bool = Field(
        default=True,
        description="Use the packaged default tariff when the pricing file does not exist.",
    )
    directions_base_url: str = Field(
        default="https://maps.googleapis.com/maps/api",
        description="Base URL of the directions provider.",
    )
    directions_api_key: Optional[str] = Field(
        default=None,
        description="API key for the directions provider (GOOGLE_MAPS_API_KEY equivalent).",
    )
    directions_language: str = "nl"
    directions_timeout_seconds: float = Field(default=15.0, gt=0.0)
    directions_max_retries: int = Field(default=0, ge=0)
    directions_backoff_seconds: float = Field(default=1.0, ge=0.0)
    depot_address: Optional[str] = Field(
        default=None,
        description="Home depot. When set, approach time is measured from here to the pickup address.",
    )
    persist_quotes: bool = Field(default=False, description="Archive every quote under data_root/outputs.")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "pricing_config_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
