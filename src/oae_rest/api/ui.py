"""UI endpoints: widget manifests, static file batches, skins and logos."""

from __future__ import annotations

from typing import Any, Iterable

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, HTTP_POST, as_list, perform_rest_request


def get_widget_manifests(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/ui/widgets", HTTP_GET)


def get_static_batch(ctx: RestContext, files: str | Iterable[str]) -> Any:
    """Fetch several static UI files in one call; the result maps each path to its body."""
    return perform_rest_request(ctx, "/api/ui/staticbatch", HTTP_GET, {"files": as_list(files)})


def get_skin(ctx: RestContext) -> Any:
    """The tenant's compiled CSS skin (returned as text)."""
    return perform_rest_request(ctx, "/api/ui/skin", HTTP_GET)


def get_logo(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/ui/logo", HTTP_GET)


def get_skin_variables(ctx: RestContext, tenant_alias: str | None = None) -> Any:
    return perform_rest_request(ctx, "/api/ui/skin/variables", HTTP_GET, {"tenant": tenant_alias})


def upload_logo(ctx: RestContext, file: Any, tenant_alias: str | None = None) -> Any:
    return perform_rest_request(
        ctx, "/api/ui/skin/logo", HTTP_POST, {"file": file, "tenantAlias": tenant_alias}
    )
