"""Configuration loaded from a .env file and the process environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values
from pydantic import BaseModel, Field

from store_cart.features import FeatureFlags
from store_cart.transport import DEFAULT_API_VERSION

ENV_PATH = Path(".env")
ENV_PREFIX = "SHOPWARE_"


class ConfigError(Exception):
    """Raised when required configuration is missing."""


class Settings(BaseModel):
    """Connection settings for the admin API."""

    base_url: str
    client_id: str
    client_secret: str
    api_version: int = DEFAULT_API_VERSION
    sales_channel_id: str = ""
    features: list[str] = Field(default_factory=list)

    def feature_flags(self) -> FeatureFlags:
        return FeatureFlags(self.features)


_REQUIRED = ("base_url", "client_id", "client_secret")


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from ``path`` with environment variables taking precedence."""
    values = {
        key: value
        for key, value in dotenv_values(path or ENV_PATH).items()
        if value is not None
    }
    values.update(os.environ if environ is None else environ)

    raw = {}
    for field in Settings.model_fields:
        key = ENV_PREFIX + field.upper()
        if values.get(key):
            raw[field] = values[key]

    missing = [ENV_PREFIX + name.upper() for name in _REQUIRED if name not in raw]
    if missing:
        raise ConfigError(f"Missing configuration: {', '.join(missing)}")

    if "features" in raw:
        raw["features"] = sorted(FeatureFlags.from_string(raw["features"]).active)
    return Settings.model_validate(raw)


def write_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to a .env file."""
    content = (
        f"SHOPWARE_BASE_URL={settings.base_url}\n"
        f"SHOPWARE_CLIENT_ID={settings.client_id}\n"
        f"SHOPWARE_CLIENT_SECRET={settings.client_secret}\n"
        f"SHOPWARE_API_VERSION={settings.api_version}\n"
        f"SHOPWARE_SALES_CHANNEL_ID={settings.sales_channel_id}\n"
    )
    if settings.features:
        content += f"SHOPWARE_FEATURES={','.join(settings.features)}\n"
    (path or ENV_PATH).write_text(content)
