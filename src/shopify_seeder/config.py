"""Environment-driven settings for the seeder."""
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .shopify.exceptions import ConfigurationError


DEFAULT_API_VERSION = "2025-04"


class SeederSettings(BaseModel):
    """Store connection settings."""

    shop_domain: str = Field(..., description="e.g., mystore.myshopify.com")
    access_token: str = Field(..., repr=False)
    api_version: str = DEFAULT_API_VERSION


def _first_env(*keys: str) -> str:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value.strip()
    return ""


def load_settings(env_file: Optional[Union[str, Path]] = None) -> SeederSettings:
    """Load settings from the environment, reading a .env file first.

    Variables already set in the environment take precedence over the file.

    Raises:
        ConfigurationError: If the store domain or access token is missing
    """
    load_dotenv(dotenv_path=env_file, override=False)

    shop_domain = _first_env("SHOPIFY_STORE_DOMAIN", "SHOP")
    access_token = _first_env("SHOPIFY_ADMIN_ACCESS_TOKEN", "TOKEN")

    missing = []
    if not shop_domain:
        missing.append("SHOPIFY_STORE_DOMAIN (or SHOP)")
    if not access_token:
        missing.append("SHOPIFY_ADMIN_ACCESS_TOKEN (or TOKEN)")
    if missing:
        raise ConfigurationError(missing)

    return SeederSettings(
        shop_domain=shop_domain,
        access_token=access_token,
        api_version=_first_env("SHOPIFY_API_VERSION") or DEFAULT_API_VERSION,
    )
