"""
Administration endpoints.

Besides user import, this module implements the signed-authentication hand-off an
administrator uses to act on another tenant (or as another user):

1. the admin context asks its own tenant for signed request info (`url` + `body`),
2. a fresh anonymous context for the target tenant POSTs that body to `/api/auth/signed`,
3. the server answers 302 and sets the session cookie on the fresh context.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import urlsplit

from oae_rest.core.context import RestContext
from oae_rest.core.errors import RestError
from oae_rest.core.http import (
    HTTP_GET,
    HTTP_POST,
    encode_uri_component,
    perform_rest_request,
    perform_rest_request_with_response,
)

logger = logging.getLogger(__name__)


def get_signed_tenant_authentication_request_info(ctx: RestContext, tenant_alias: str) -> Any:
    """Signed request info a global admin uses to log in on `tenant_alias`."""
    return perform_rest_request(ctx, "/api/auth/signed/tenant", HTTP_GET, {"tenant": tenant_alias})


def get_signed_become_user_authentication_request_info(ctx: RestContext, become_user_id: str) -> Any:
    """Signed request info an admin uses to impersonate `become_user_id`."""
    return perform_rest_request(
        ctx, "/api/auth/signed/become", HTTP_GET, {"becomeUserId": become_user_id}
    )


def do_signed_authentication(ctx: RestContext, body: Mapping[str, Any]) -> None:
    """POST signed authentication parameters; success is a 302 redirect."""
    _, response = perform_rest_request_with_response(ctx, "/api/auth/signed", HTTP_POST, body)
    if response.status_code != 302:
        raise RestError(response.status_code, "Unexpected response code")


def _authenticate_with_request_info(
    request_info: Mapping[str, Any],
    internal_base_url: str | None,
    strict_ssl: bool,
) -> RestContext:
    parsed = urlsplit(str(request_info["url"]))
    base_url = internal_base_url or f"{parsed.scheme}://{parsed.netloc}"
    authenticating_ctx = RestContext(base_url, host_header=parsed.netloc, strict_ssl=strict_ssl)
    do_signed_authentication(authenticating_ctx, request_info.get("body") or {})
    logger.info("Signed authentication succeeded on %s", parsed.netloc)
    return authenticating_ctx


def login_as_user(
    ctx: RestContext, become_user_id: str, target_internal_base_url: str | None = None
) -> RestContext:
    """Return a new context authenticated as `become_user_id`.

    `target_internal_base_url` overrides where requests are sent (e.g. `http://localhost:2001`)
    while the tenant is still selected through the `Host` header.
    """
    request_info = get_signed_become_user_authentication_request_info(ctx, become_user_id)
    return _authenticate_with_request_info(request_info, target_internal_base_url, ctx.strict_ssl)


def login_on_tenant(
    ctx: RestContext, tenant_alias: str, target_internal_base_url: str | None = None
) -> RestContext:
    """Return a new context authenticated as the global admin on `tenant_alias`."""
    request_info = get_signed_tenant_authentication_request_info(ctx, tenant_alias)
    return _authenticate_with_request_info(request_info, target_internal_base_url, ctx.strict_ssl)


def import_users(
    ctx: RestContext,
    tenant_alias: str | None,
    csv_file: Any,
    authentication_strategy: str,
    force_profile_update: bool = False,
) -> Any:
    """Import users from a CSV stream (or a callable returning one).

    For the local strategy the columns are `externalId, password, lastName, firstName, email`;
    other strategies drop the password column.
    """
    params = {
        "tenantAlias": tenant_alias,
        "authenticationStrategy": authentication_strategy,
        "forceProfileUpdate": force_profile_update,
        "file": csv_file,
    }
    return perform_rest_request(ctx, "/api/user/import", HTTP_POST, params)


def get_all_users_for_tenant(ctx: RestContext, tenant_alias: str) -> Any:
    return perform_rest_request(
        ctx, f"/api/tenants/{encode_uri_component(tenant_alias)}/users", HTTP_GET, {}
    )
