"""
User endpoints: account creation (regular users and administrators), profiles,
profile pictures, terms and conditions, email verification and data export.
"""

from __future__ import annotations

from typing import Any, Mapping

from oae_rest.api import crop
from oae_rest.core.context import RestContext
from oae_rest.core.errors import RestError
from oae_rest.core.http import (
    HTTP_DELETE,
    HTTP_GET,
    HTTP_POST,
    encode_uri_component,
    perform_rest_request,
)


def _account_params(
    username: str,
    password: str,
    display_name: str,
    email: str | None,
    options: Mapping[str, Any] | None,
) -> dict[str, Any]:
    # Explicit arguments win over anything passed in `options`.
    params = dict(options or {})
    params.update(
        {
            "username": username,
            "password": password,
            "displayName": display_name,
            "email": email,
        }
    )
    return params


def create_global_admin_user(
    ctx: RestContext,
    username: str,
    password: str,
    display_name: str,
    email: str | None,
    options: Mapping[str, Any] | None = None,
) -> Any:
    """Create a global administrator. Only global administrators may do this."""
    params = _account_params(username, password, display_name, email, options)
    return perform_rest_request(ctx, "/api/user/createGlobalAdminUser", HTTP_POST, params)


def _create_tenant_admin_user(
    ctx: RestContext,
    tenant_alias: str | None,
    username: str,
    password: str,
    display_name: str,
    email: str | None,
    options: Mapping[str, Any] | None,
) -> Any:
    path = "/api/user/createTenantAdminUser"
    if tenant_alias:
        path = f"/api/user/{encode_uri_component(tenant_alias)}/createTenantAdminUser"
    params = _account_params(username, password, display_name, email, options)
    return perform_rest_request(ctx, path, HTTP_POST, params)


def create_tenant_admin_user(
    ctx: RestContext,
    username: str,
    password: str,
    display_name: str,
    email: str | None,
    options: Mapping[str, Any] | None = None,
) -> Any:
    """Create a tenant administrator on the context's own tenant."""
    return _create_tenant_admin_user(ctx, None, username, password, display_name, email, options)


def create_tenant_admin_user_on_tenant(
    ctx: RestContext,
    tenant_alias: str,
    username: str,
    password: str,
    display_name: str,
    email: str | None,
    options: Mapping[str, Any] | None = None,
) -> Any:
    """Create a tenant administrator on `tenant_alias` (global admin context)."""
    return _create_tenant_admin_user(
        ctx, tenant_alias, username, password, display_name, email, options
    )


def _create_user(
    ctx: RestContext,
    tenant_alias: str | None,
    username: str,
    password: str,
    display_name: str,
    email: str | None,
    options: Mapping[str, Any] | None,
) -> Any:
    path = "/api/user/create"
    if tenant_alias:
        path = f"/api/user/{encode_uri_component(tenant_alias)}/create"
    params = _account_params(username, password, display_name, email, options)
    return perform_rest_request(ctx, path, HTTP_POST, params)


def create_user(
    ctx: RestContext,
    username: str,
    password: str,
    display_name: str,
    email: str | None,
    options: Mapping[str, Any] | None = None,
) -> Any:
    """Create a local user account.

    `options` may carry optional profile fields (`visibility`, `locale`, `timezone`,
    `publicAlias`, `acceptedTC`, `emailPreference`, `recaptchaChallenge`, ...).
    """
    return _create_user(ctx, None, username, password, display_name, email, options)


def create_user_on_tenant(
    ctx: RestContext,
    tenant_alias: str,
    username: str,
    password: str,
    display_name: str,
    email: str | None,
    options: Mapping[str, Any] | None = None,
) -> Any:
    return _create_user(ctx, tenant_alias, username, password, display_name, email, options)


def delete_user(ctx: RestContext, user_id: str) -> Any:
    return perform_rest_request(ctx, f"/api/user/{encode_uri_component(user_id)}", HTTP_DELETE)


def restore_user(ctx: RestContext, user_id: str) -> Any:
    return perform_rest_request(
        ctx, f"/api/user/{encode_uri_component(user_id)}/restore", HTTP_POST
    )


def get_me(ctx: RestContext) -> Any:
    """Return the `me` feed: the current user, or an anonymous marker."""
    return perform_rest_request(ctx, "/api/me", HTTP_GET)


def get_user(ctx: RestContext, user_id: str) -> Any:
    return perform_rest_request(ctx, f"/api/user/{encode_uri_component(user_id)}", HTTP_GET)


def update_user(ctx: RestContext, user_id: str, params: Mapping[str, Any]) -> Any:
    return perform_rest_request(
        ctx, f"/api/user/{encode_uri_component(user_id)}", HTTP_POST, params
    )


def upload_picture(
    ctx: RestContext,
    user_id: str,
    file: Any,
    selected_area: Mapping[str, Any] | None = None,
) -> Any:
    """Upload a profile picture, then crop it when `selected_area` is given.

    `file` is a binary stream, or a callable returning one.
    """
    path = f"/api/user/{encode_uri_component(user_id)}/picture"
    result = perform_rest_request(ctx, path, HTTP_POST, {"file": file})
    if selected_area:
        return crop.crop_picture(ctx, user_id, selected_area)
    return result


def download_picture(ctx: RestContext, user_id: str, size: str | None) -> Any:
    """Download one size (`small`, `medium`, `large`) of a user's picture."""
    if not size:
        raise RestError(400, "Missing size parameter")

    user = get_user(ctx, user_id)
    picture = (user or {}).get("picture") or {}
    url = picture.get(size)
    if not url:
        raise RestError(404, "This user has no picture.")
    return perform_rest_request(ctx, url, HTTP_GET)


def set_tenant_admin(ctx: RestContext, user_id: str, value: bool) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/user/{encode_uri_component(user_id)}/admin",
        HTTP_POST,
        {"admin": value is True},
    )


def get_timezones(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/timezones", HTTP_GET)


def get_terms_and_conditions(ctx: RestContext, locale: str | None = None) -> Any:
    return perform_rest_request(
        ctx, "/api/user/termsAndConditions", HTTP_GET, {"locale": locale}
    )


def accept_terms_and_conditions(ctx: RestContext, user_id: str) -> Any:
    path = f"/api/user/{encode_uri_component(user_id)}/termsAndConditions"
    return perform_rest_request(ctx, path, HTTP_POST, {})


def verify_email(ctx: RestContext, user_id: str, token: str) -> Any:
    path = f"/api/user/{encode_uri_component(user_id)}/email/verify"
    return perform_rest_request(ctx, path, HTTP_POST, {"token": token})


def resend_email_token(ctx: RestContext, user_id: str) -> Any:
    path = f"/api/user/{encode_uri_component(user_id)}/email/resend"
    return perform_rest_request(ctx, path, HTTP_POST, {})


def get_email_token(ctx: RestContext, user_id: str) -> Any:
    path = f"/api/user/{encode_uri_component(user_id)}/email/token"
    return perform_rest_request(ctx, path, HTTP_GET, {})


def delete_email_token(ctx: RestContext, user_id: str) -> Any:
    path = f"/api/user/{encode_uri_component(user_id)}/email/token"
    return perform_rest_request(ctx, path, HTTP_DELETE, {})


def get_recently_visited_groups(ctx: RestContext, user_id: str) -> Any:
    path = f"/api/user/{encode_uri_component(user_id)}/groups/recent"
    return perform_rest_request(ctx, path, HTTP_GET, {})


def export_personal_data(ctx: RestContext, user_id: str, export_type: str) -> Any:
    """Export a user's data; `export_type` is `personal-data`, `content` or `shared`."""
    path = (
        f"/api/user/{encode_uri_component(user_id)}"
        f"/export/{encode_uri_component(export_type)}"
    )
    return perform_rest_request(ctx, path, HTTP_GET, {})
