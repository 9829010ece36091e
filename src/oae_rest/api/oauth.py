"""OAuth client registrations owned by a user."""

from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import (
    HTTP_DELETE,
    HTTP_GET,
    HTTP_POST,
    encode_uri_component,
    perform_rest_request,
)


def _clients_path(user_id: str, client_id: str | None = None) -> str:
    path = f"/api/auth/oauth/clients/{encode_uri_component(user_id)}"
    if client_id is not None:
        path += f"/{encode_uri_component(client_id)}"
    return path


def create_client(ctx: RestContext, user_id: str, display_name: str) -> Any:
    return perform_rest_request(ctx, _clients_path(user_id), HTTP_POST, {"displayName": display_name})


def get_clients(ctx: RestContext, user_id: str) -> Any:
    return perform_rest_request(ctx, _clients_path(user_id), HTTP_GET)


def update_client(
    ctx: RestContext,
    user_id: str,
    client_id: str,
    display_name: str | None = None,
    secret: str | None = None,
) -> Any:
    """Rename a client and/or rotate its secret; omitted fields are left unchanged."""
    params = {"displayName": display_name, "secret": secret}
    return perform_rest_request(ctx, _clients_path(user_id, client_id), HTTP_POST, params)


def delete_client(ctx: RestContext, user_id: str, client_id: str) -> Any:
    return perform_rest_request(ctx, _clients_path(user_id, client_id), HTTP_DELETE)
