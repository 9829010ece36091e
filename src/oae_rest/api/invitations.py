"""Email invitation endpoints for content, discussions, folders and groups."""

from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, HTTP_POST, encode_uri_component, perform_rest_request


def get_invitations(ctx: RestContext, resource_type: str, resource_id: str) -> Any:
    """Pending invitations on a resource; `resource_type` is e.g. `content` or `group`."""
    path = f"/api/{encode_uri_component(resource_type)}/{encode_uri_component(resource_id)}/invitations"
    return perform_rest_request(ctx, path, HTTP_GET)


def resend_invitation(ctx: RestContext, resource_type: str, resource_id: str, email: str) -> Any:
    path = (
        f"/api/{encode_uri_component(resource_type)}/{encode_uri_component(resource_id)}"
        f"/invitations/{encode_uri_component(email)}/resend"
    )
    return perform_rest_request(ctx, path, HTTP_POST)


def accept_invitation(ctx: RestContext, token: str) -> Any:
    return perform_rest_request(ctx, "/api/invitation/accept", HTTP_POST, {"token": token})
