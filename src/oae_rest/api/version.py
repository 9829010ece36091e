from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, perform_rest_request


def get_version(ctx: RestContext) -> Any:
    """Version information of the server (and its submodules)."""
    return perform_rest_request(ctx, "/api/version", HTTP_GET)
