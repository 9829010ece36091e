"""
Tenant and tenant network endpoints (global administrator).

Creating, updating, starting and stopping a tenant returns before every app server
has picked up the change, so those calls pause for `rest.tenant_settle_seconds`
after a successful response.
"""

from __future__ import annotations

import time
from typing import Any, Iterable, Mapping

from oae_rest.config.settings import get_settings
from oae_rest.core.context import RestContext
from oae_rest.core.http import (
    HTTP_DELETE,
    HTTP_GET,
    HTTP_POST,
    as_list,
    encode_uri_component,
    perform_rest_request,
)


def _settle() -> None:
    delay = float(get_settings().rest.tenant_settle_seconds)
    if delay > 0:
        time.sleep(delay)


def _tenant_path(alias: str | None) -> str:
    path = "/api/tenant"
    if alias:
        path += f"/{encode_uri_component(alias)}"
    return path


def create_tenant_network(ctx: RestContext, display_name: str) -> Any:
    return perform_rest_request(ctx, "/api/tenantNetwork/create", HTTP_POST, {"displayName": display_name})


def get_tenant_networks(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/tenantNetworks", HTTP_GET)


def update_tenant_network(ctx: RestContext, network_id: str, display_name: str) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/tenantNetwork/{encode_uri_component(network_id)}",
        HTTP_POST,
        {"displayName": display_name},
    )


def delete_tenant_network(ctx: RestContext, network_id: str) -> Any:
    return perform_rest_request(ctx, f"/api/tenantNetwork/{encode_uri_component(network_id)}", HTTP_DELETE)


def add_tenant_aliases(ctx: RestContext, tenant_network_id: str, tenant_aliases: str | Iterable[str]) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/tenantNetwork/{encode_uri_component(tenant_network_id)}/addTenants",
        HTTP_POST,
        {"alias": as_list(tenant_aliases)},
    )


def remove_tenant_aliases(ctx: RestContext, tenant_network_id: str, tenant_aliases: str | Iterable[str]) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/tenantNetwork/{encode_uri_component(tenant_network_id)}/removeTenants",
        HTTP_POST,
        {"alias": as_list(tenant_aliases)},
    )


def get_tenants(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/tenants", HTTP_GET)


def get_tenants_by_email_address(ctx: RestContext, emails: str | Iterable[str]) -> Any:
    """Map each email address to the tenant its domain belongs to."""
    return perform_rest_request(ctx, "/api/tenantsByEmail", HTTP_GET, {"emails": as_list(emails)})


def get_tenant(ctx: RestContext, alias: str | None = None) -> Any:
    """Get a tenant by alias, or the context's current tenant when `alias` is empty."""
    return perform_rest_request(ctx, _tenant_path(alias), HTTP_GET)


def create_tenant(
    ctx: RestContext,
    alias: str,
    display_name: str,
    host: str,
    options: Mapping[str, Any] | None = None,
) -> Any:
    """Create a tenant; `options` may hold `emailDomains` and `countryCode`."""
    options = options or {}
    params = {
        "alias": alias,
        "displayName": display_name,
        "host": host,
        "emailDomains": options.get("emailDomains"),
        "countryCode": options.get("countryCode"),
    }
    tenant = perform_rest_request(ctx, "/api/tenant/create", HTTP_POST, params)
    _settle()
    return tenant


def update_tenant(ctx: RestContext, alias: str | None, tenant_updates: Mapping[str, Any] | None) -> Any:
    tenant_updates = tenant_updates or {}
    params = {
        "displayName": tenant_updates.get("displayName"),
        "host": tenant_updates.get("host"),
        "emailDomains": tenant_updates.get("emailDomains"),
        "countryCode": tenant_updates.get("countryCode"),
    }
    result = perform_rest_request(ctx, _tenant_path(alias), HTTP_POST, params)
    _settle()
    return result


def stop_tenant(ctx: RestContext, alias: str) -> Any:
    result = perform_rest_request(ctx, "/api/tenant/stop", HTTP_POST, {"aliases": [alias]})
    _settle()
    return result


def start_tenant(ctx: RestContext, alias: str) -> Any:
    result = perform_rest_request(ctx, "/api/tenant/start", HTTP_POST, {"aliases": [alias]})
    _settle()
    return result


def get_landing_page(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/tenant/landingPage", HTTP_GET)
