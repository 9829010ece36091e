"""Usage statistics collected through the Mixpanel integration (global admin only)."""

from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, encode_uri_component, perform_rest_request


def get_uploaded_files_file_size(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/mixpanel/stats/fileSize", HTTP_GET)


def get_uploaded_files_file_size_for_tenant(ctx: RestContext, tenant_alias: str) -> Any:
    return perform_rest_request(
        ctx, f"/api/mixpanel/stats/fileSize/{encode_uri_component(tenant_alias)}", HTTP_GET
    )


def get_unique_users(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/mixpanel/stats/uniqueUsers", HTTP_GET)


def get_unique_users_for_tenant(ctx: RestContext, tenant_alias: str) -> Any:
    return perform_rest_request(
        ctx, f"/api/mixpanel/stats/uniqueUsers/{encode_uri_component(tenant_alias)}", HTTP_GET
    )
