"""Configuration management for bundleresolver.

Uses pydantic-settings to load runtime settings from environment
variables, and an immutable OutputConfig built once per run from the
command-line flags.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field as PydanticField, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError
from .models import Field

DEFAULT_FIELDS = "name,publisher,url"


def _find_env_file() -> Path | None:
    """Search for a .env file in the working directory and its parents."""
    check_dir = Path.cwd()
    for _ in range(5):
        if (check_dir / ".env").exists():
            return check_dir / ".env"
        parent = check_dir.parent
        if parent == check_dir:
            break
        check_dir = parent
    return None


_env_file = _find_env_file()


class Settings(BaseSettings):
    """Runtime settings loaded from BUNDLERESOLVER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BUNDLERESOLVER_",
        env_file=str(_env_file) if _env_file else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================
    # HTTP
    # =========================
    http_timeout: float = PydanticField(default=10.0, gt=0)
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9"

    # =========================
    # Store endpoints
    # =========================
    itunes_lookup_url: str = "https://itunes.apple.com/lookup"
    ios_app_url: str = "https://apps.apple.com/app/id{app_id}"
    play_base_url: str = "https://play.google.com"

    # Countries tried in order when the default lookup returns no results
    ios_fallback_countries: list[str] = ["jp"]

    # =========================
    # Logging
    # =========================
    log_level: str = "WARNING"
    log_format: Literal["json", "text"] = "text"

    @field_validator("ios_fallback_countries")
    @classmethod
    def _normalize_countries(cls, value: list[str]) -> list[str]:
        return [c.strip().lower() for c in value if c and c.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class OutputConfig(BaseModel):
    """Immutable output options for a single run."""

    fields: tuple[Field, ...] = (Field.NAME, Field.PUBLISHER, Field.URL)
    output_format: Literal["tsv", "csv"] = "tsv"
    header: bool = True
    skip_errors: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("fields")
    @classmethod
    def _require_fields(cls, value: tuple[Field, ...]) -> tuple[Field, ...]:
        if not value:
            raise ValueError("no valid fields specified")
        if len(set(value)) != len(value):
            raise ValueError("duplicate fields")
        return value


def parse_fields(value: str) -> tuple[Field, ...]:
    """Parse a comma-separated field list.

    Order is preserved, duplicates are dropped and blank entries are
    ignored.

    Args:
        value: Field list such as "name,publisher,url"

    Returns:
        Tuple of fields in the order given

    Raises:
        ConfigurationError: If a field is unknown or none remain
    """
    result: list[Field] = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            field = Field(part)
        except ValueError:
            raise ConfigurationError(f"unknown field {part!r}") from None
        if field in result:
            continue
        result.append(field)

    if not result:
        raise ConfigurationError("no valid fields specified")
    return tuple(result)
