"""Application configuration using pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from image_cdn.web.constants import (
    ALLOWED_EXTENSIONS,
    DEFAULT_MAX_AGE,
    OPTIONAL_EXTENSIONS,
)


class Settings(BaseSettings):
    """Settings for one image server instance."""

    model_config = SettingsConfigDict(
        env_prefix="IMAGE_CDN_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    image_dir: Path = Path("images")
    url_prefix: str = "/cdn"
    listing_path: str = "/cdn-list"
    public_base_url: Optional[str] = None

    include_size: bool = False
    include_ico: bool = False
    cache_max_age: int = DEFAULT_MAX_AGE

    log_requests: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("url_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().strip("/")
        return f"/{value}" if value else ""

    @field_validator("listing_path")
    @classmethod
    def _normalize_listing_path(cls, value: str) -> str:
        value = value.strip().strip("/")
        if not value:
            raise ValueError("listing_path must not be empty")
        return f"/{value}"

    @field_validator("public_base_url")
    @classmethod
    def _strip_base_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.rstrip("/") or None

    @property
    def image_root(self) -> Path:
        return self.image_dir.expanduser().resolve()

    @property
    def allowed_extensions(self) -> tuple[str, ...]:
        if self.include_ico:
            return ALLOWED_EXTENSIONS + OPTIONAL_EXTENSIONS
        return ALLOWED_EXTENSIONS

    @property
    def listing_token(self) -> str:
        """Listing route without its leading slash."""
        return self.listing_path.lstrip("/")


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
