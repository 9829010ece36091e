from __future__ import annotations

from typing import Any, Iterable, Mapping

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, HTTP_POST, encode_uri_component, perform_rest_request


def search(
    ctx: RestContext,
    search_type: str,
    path_params: Iterable[Any] | None = None,
    options: Mapping[str, Any] | None = None,
) -> Any:
    """Run a search.

    `path_params` are appended to `/api/search/<type>` as encoded path segments
    (e.g. the library owner for `content-library`); `options` become the query string
    (`q`, `start`, `limit`, `resourceTypes`, `sort`, ...).
    """
    path = f"/api/search/{encode_uri_component(search_type)}"
    segments = "/".join(encode_uri_component(param) for param in (path_params or []))
    if segments:
        path += f"/{segments}"
    return perform_rest_request(ctx, path, HTTP_GET, dict(options or {}))


def refresh(ctx: RestContext) -> Any:
    """Force the search index to refresh so freshly indexed documents are visible."""
    return perform_rest_request(ctx, "/api/search/_refresh", HTTP_POST)


def reindex_all(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/search/reindexAll", HTTP_POST)
