# src/oae_rest/config/settings.py
"""
Client settings (Pydantic).

Settings are loaded from `src/oae_rest/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `OAE_REST_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (e.g., `OAE_REST_HOST`, `OAE_REST_USERNAME`, `OAE_REST_PASSWORD`)

Design rule:
- Connection defaults live in YAML; wrapper modules never read the environment directly.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from oae_rest.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `oae_rest.config`."""
    text = resources.files("oae_rest.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "oae-rest"
    log_level: str = "INFO"
    # None keeps the httpx default timeout.
    http_timeout_seconds: float | None = None


class RestSettings(BaseModel):
    host: str = "http://localhost:2001"
    username: str | None = None
    password: str | None = None
    host_header: str | None = None
    referer_header: str | None = None
    strict_ssl: bool = True
    follow_redirects: bool = True
    tenant_settle_seconds: float = Field(0.1, ge=0)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    rest: RestSettings = Field(default_factory=RestSettings)


_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "OAE_REST_LOG_LEVEL": ("app", "log_level"),
    "OAE_REST_HOST": ("rest", "host"),
    "OAE_REST_USERNAME": ("rest", "username"),
    "OAE_REST_PASSWORD": ("rest", "password"),
    "OAE_REST_HOST_HEADER": ("rest", "host_header"),
}


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: the whitelist is kept small; anything else must come from a YAML file.
    """
    load_dotenv_if_present()
    data = dict(data)
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            data.setdefault(section, {})[key] = value
    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("OAE_REST_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
