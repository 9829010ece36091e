"""Server-side API documentation endpoints."""

from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, encode_uri_component, perform_rest_request


def get_modules(ctx: RestContext, doc_type: str) -> Any:
    """List documented modules; `doc_type` is `backend` or `frontend`."""
    return perform_rest_request(ctx, f"/api/doc/{encode_uri_component(doc_type)}", HTTP_GET)


def get_module_documentation(ctx: RestContext, doc_type: str, module_id: str) -> Any:
    path = f"/api/doc/{encode_uri_component(doc_type)}/{encode_uri_component(module_id)}"
    return perform_rest_request(ctx, path, HTTP_GET)
