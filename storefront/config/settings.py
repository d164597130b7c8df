"""Application settings for the storefront catalog.

Environment variables are loaded from a ``.env`` file using ``python-dotenv``
and exposed through an immutable Pydantic settings object.
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_DB_PATH = os.path.join("data", "storefront.sqlite3")
DEFAULT_PAGE_SIZE = 6
MAX_PAGE_SIZE = 50
DEFAULT_CART_SHARDS = 16


class Settings(BaseModel):
    """Immutable settings object used across the application."""

    db_path: str = DEFAULT_DB_PATH
    default_page_size: int = Field(DEFAULT_PAGE_SIZE, gt=0)
    max_page_size: int = Field(MAX_PAGE_SIZE, gt=0)
    cart_ttl_seconds: Optional[float] = Field(None, gt=0)
    cart_shards: int = Field(DEFAULT_CART_SHARDS, gt=0)

    model_config = ConfigDict(frozen=True)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {value}")
    return value


def _build_settings() -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    db_path = os.getenv("STOREFRONT_DB_PATH") or DEFAULT_DB_PATH
    default_page_size = _int_env("STOREFRONT_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    max_page_size = _int_env("STOREFRONT_MAX_PAGE_SIZE", MAX_PAGE_SIZE)
    cart_shards = _int_env("STOREFRONT_CART_SHARDS", DEFAULT_CART_SHARDS)

    if default_page_size > max_page_size:
        raise RuntimeError(
            "STOREFRONT_DEFAULT_PAGE_SIZE cannot exceed STOREFRONT_MAX_PAGE_SIZE"
            f" ({default_page_size} > {max_page_size})"
        )

    cart_ttl_seconds: Optional[float] = None
    raw_ttl = os.getenv("STOREFRONT_CART_TTL_SECONDS")
    if raw_ttl is not None and raw_ttl.strip():
        try:
            cart_ttl_seconds = float(raw_ttl)
        except ValueError:
            raise RuntimeError(
                f"STOREFRONT_CART_TTL_SECONDS must be a number, got {raw_ttl!r}"
            ) from None
        if cart_ttl_seconds <= 0:
            raise RuntimeError("STOREFRONT_CART_TTL_SECONDS must be positive")

    return Settings(
        db_path=db_path,
        default_page_size=default_page_size,
        max_page_size=max_page_size,
        cart_ttl_seconds=cart_ttl_seconds,
        cart_shards=cart_shards,
    )


# Public settings instance
settings = _build_settings()
