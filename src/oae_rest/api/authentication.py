"""
Authentication endpoints: local login, password management and the external
strategies (Twitter, Facebook, Google, CAS, Shibboleth, LDAP).

`login` should be called on an anonymous context: the session cookie it earns is
stored in that context's cookie jar and used for every later call on it.
"""

from __future__ import annotations

from typing import Any, Mapping

from oae_rest.core.context import RestContext
from oae_rest.core.http import (
    HTTP_GET,
    HTTP_POST,
    encode_uri_component,
    perform_rest_request,
)


def login(ctx: RestContext, username: str, password: str) -> Any:
    """Log a user in with the local strategy.

    `username` is the login id a person types (e.g. `nm417`), not the global user id.
    """
    return perform_rest_request(
        ctx, "/api/auth/login", HTTP_POST, {"username": username, "password": password}
    )


def logout(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/auth/logout", HTTP_POST)


def change_password(ctx: RestContext, user_id: str, old_password: str, new_password: str) -> Any:
    params = {"oldPassword": old_password, "newPassword": new_password}
    return perform_rest_request(
        ctx, f"/api/user/{encode_uri_component(user_id)}/password", HTTP_POST, params
    )


def exists(ctx: RestContext, username: str) -> Any:
    """Check whether a login id is taken on the current tenant (404 when free)."""
    return perform_rest_request(ctx, f"/api/auth/exists/{encode_uri_component(username)}", HTTP_GET)


def exists_on_tenant(ctx: RestContext, tenant_alias: str, username: str) -> Any:
    path = f"/api/auth/{encode_uri_component(tenant_alias)}/exists/{encode_uri_component(username)}"
    return perform_rest_request(ctx, path, HTTP_GET)


def get_user_login_ids(ctx: RestContext, user_id: str) -> Any:
    return perform_rest_request(ctx, f"/api/auth/loginIds/{encode_uri_component(user_id)}", HTTP_GET)


def twitter_redirect(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/auth/twitter", HTTP_POST)


def twitter_callback(ctx: RestContext, params: Mapping[str, Any] | None) -> Any:
    return perform_rest_request(ctx, "/api/auth/twitter/callback", HTTP_GET, params)


def facebook_redirect(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/auth/facebook", HTTP_POST)


def facebook_callback(ctx: RestContext, params: Mapping[str, Any] | None) -> Any:
    return perform_rest_request(ctx, "/api/auth/facebook/callback", HTTP_GET, params)


def google_redirect(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/auth/google", HTTP_POST)


def google_callback(ctx: RestContext, params: Mapping[str, Any] | None) -> Any:
    return perform_rest_request(ctx, "/api/auth/google/callback", HTTP_GET, params)


def cas_redirect(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/auth/cas", HTTP_POST)


def cas_callback(ctx: RestContext, params: Mapping[str, Any] | None) -> Any:
    return perform_rest_request(ctx, "/api/auth/cas/callback", HTTP_GET, params)


def shibboleth_tenant_redirect(ctx: RestContext, redirect_url: str | None = None) -> Any:
    """Start the Shibboleth flow on a tenant; the server redirects to the SP host."""
    return perform_rest_request(
        ctx, "/api/auth/shibboleth", HTTP_POST, {"redirectUrl": redirect_url}
    )


def shibboleth_sp_redirect(ctx: RestContext, params: Mapping[str, Any] | None) -> Any:
    return perform_rest_request(ctx, "/api/auth/shibboleth/sp", HTTP_GET, params)


def shibboleth_sp_callback(ctx: RestContext, attributes: Mapping[str, Any]) -> Any:
    """Hit the SP callback as if mod_shib had authenticated the user.

    The identity provider's attributes travel as request headers for this one call.
    """
    previous = ctx.additional_headers
    ctx.additional_headers = {str(k): str(v) for k, v in attributes.items()}
    try:
        return perform_rest_request(ctx, "/api/auth/shibboleth/sp/callback", HTTP_GET)
    finally:
        ctx.additional_headers = previous


def shibboleth_tenant_callback(ctx: RestContext, params: Mapping[str, Any] | None) -> Any:
    return perform_rest_request(ctx, "/api/auth/shibboleth/callback", HTTP_GET, params)


def ldap_login(ctx: RestContext, username: str, password: str) -> Any:
    return perform_rest_request(
        ctx, "/api/auth/ldap", HTTP_POST, {"username": username, "password": password}
    )


def get_reset_password_secret(ctx: RestContext, username: str) -> Any:
    return perform_rest_request(
        ctx, f"/api/auth/local/reset/secret/{encode_uri_component(username)}", HTTP_GET
    )


def reset_password(ctx: RestContext, username: str, secret: str, new_password: str) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/auth/local/reset/password/{encode_uri_component(username)}",
        HTTP_POST,
        {"secret": secret, "newPassword": new_password},
    )
