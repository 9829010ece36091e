"""Tenant configuration endpoints. A missing tenant alias targets the context's own tenant."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, HTTP_POST, encode_uri_component, perform_rest_request


def _config_path(tenant_alias: str | None) -> str:
    path = "/api/config"
    if tenant_alias:
        path += f"/{encode_uri_component(tenant_alias)}"
    return path


def get_schema(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/config/schema", HTTP_GET)


def get_tenant_config(ctx: RestContext, tenant_alias: str | None = None) -> Any:
    return perform_rest_request(ctx, _config_path(tenant_alias), HTTP_GET)


def update_config(ctx: RestContext, tenant_alias: str | None, update: Mapping[str, Any]) -> Any:
    """Apply config values keyed `module/feature/element` (e.g. `oae-principals/recaptcha/enabled`)."""
    return perform_rest_request(ctx, _config_path(tenant_alias), HTTP_POST, update)


def clear_config(ctx: RestContext, tenant_alias: str | None, config_fields: str | Iterable[str]) -> Any:
    """Reset the given config keys to their inherited value."""
    if isinstance(config_fields, str):
        config_fields = [config_fields]
    return perform_rest_request(
        ctx,
        _config_path(tenant_alias) + "/clear",
        HTTP_POST,
        {"configFields": list(config_fields)},
    )
