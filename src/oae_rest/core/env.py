"""
Environment helpers.

Scripts and test suites driving an OAE tenant usually keep the target host and
admin credentials in a local `.env` file. This module loads it once so settings
can pick those values up through the normal environment-variable overrides.

- `OAE_REST_ENV_FILE` points at an explicit env file.
- Otherwise the nearest `.env` found from the working directory upwards is used.
- Variables already present in the process environment are never overridden.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load a `.env` file once if present; returns the loaded env path (or None)."""
    explicit = os.getenv("OAE_REST_ENV_FILE")
    if explicit:
        env_path = Path(explicit).expanduser().resolve()
        if env_path.is_file():
            load_dotenv(dotenv_path=env_path, override=False)
            return env_path
        return None

    found = find_dotenv(usecwd=True)
    if not found:
        return None
    load_dotenv(dotenv_path=found, override=False)
    return Path(found)
