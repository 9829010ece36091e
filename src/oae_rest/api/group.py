"""
Group endpoints: group profiles, membership, pictures and join requests.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from oae_rest.api import crop
from oae_rest.core.context import RestContext
from oae_rest.core.errors import RestError
from oae_rest.core.http import (
    HTTP_DELETE,
    HTTP_GET,
    HTTP_POST,
    HTTP_PUT,
    as_list,
    encode_uri_component,
    perform_rest_request,
)


def _group_path(group_id: str, suffix: str = "") -> str:
    return f"/api/group/{encode_uri_component(group_id)}{suffix}"


def create_group(
    ctx: RestContext,
    display_name: str,
    description: str | None = None,
    visibility: str | None = None,
    joinable: str | None = None,
    managers: Iterable[str] | None = None,
    members: Iterable[str] | None = None,
) -> Any:
    """Create a group.

    `joinable` is one of `yes`, `no` or `request`.
    """
    params = {
        "displayName": display_name,
        "description": description,
        "visibility": visibility,
        "joinable": joinable,
        "managers": as_list(managers),
        "members": as_list(members),
    }
    return perform_rest_request(ctx, "/api/group/create", HTTP_POST, params)


def delete_group(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, _group_path(group_id), HTTP_DELETE)


def restore_group(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, _group_path(group_id, "/restore"), HTTP_POST)


def get_group(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, _group_path(group_id), HTTP_GET)


def update_group(ctx: RestContext, group_id: str, profile_fields: Mapping[str, Any]) -> Any:
    return perform_rest_request(ctx, _group_path(group_id), HTTP_POST, profile_fields)


def get_group_members(ctx: RestContext, group_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx, _group_path(group_id, "/members"), HTTP_GET, {"start": start, "limit": limit}
    )


def set_group_members(ctx: RestContext, group_id: str, members: Mapping[str, Any]) -> Any:
    """Map principal ids to roles (`member`, `manager`); `False` removes the principal."""
    return perform_rest_request(ctx, _group_path(group_id, "/members"), HTTP_POST, members)


def join_group(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, _group_path(group_id, "/join"), HTTP_POST)


def leave_group(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, _group_path(group_id, "/leave"), HTTP_POST)


def get_memberships_library(ctx: RestContext, user_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/user/{encode_uri_component(user_id)}/memberships",
        HTTP_GET,
        {"start": start, "limit": limit},
    )


def upload_picture(
    ctx: RestContext,
    group_id: str,
    file: Any,
    selected_area: Mapping[str, Any] | None = None,
) -> Any:
    """Upload a group picture, then crop it when `selected_area` is given."""
    result = perform_rest_request(ctx, _group_path(group_id, "/picture"), HTTP_POST, {"file": file})
    if selected_area:
        return crop.crop_picture(ctx, group_id, selected_area)
    return result


def download_picture(ctx: RestContext, group_id: str, size: str | None) -> Any:
    if not size:
        raise RestError(400, "Missing size parameter")

    group = get_group(ctx, group_id)
    picture = (group or {}).get("picture") or {}
    url = picture.get(size)
    if not url:
        raise RestError(404, "This group has no picture.")
    return perform_rest_request(ctx, url, HTTP_GET)


def create_request_join_group(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, _group_path(group_id, "/join-request"), HTTP_POST)


def get_join_group_request(ctx: RestContext, group_id: str) -> Any:
    """The current user's pending join request for the group, if any."""
    return perform_rest_request(ctx, _group_path(group_id, "/join-request/mine"), HTTP_GET)


def get_join_group_requests(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(
        ctx, _group_path(group_id, "/join-request/all"), HTTP_GET, {"start": None, "limit": None}
    )


def update_join_group_by_request(ctx: RestContext, join_request: Mapping[str, Any]) -> Any:
    """Accept or reject a join request.

    `join_request` keys: `groupId`, `principalId`, `role`, `status` (`accept` / `reject`).
    """
    params = {
        "principalId": join_request.get("principalId"),
        "role": join_request.get("role"),
        "status": join_request.get("status"),
    }
    return perform_rest_request(
        ctx, _group_path(join_request["groupId"], "/join-request"), HTTP_PUT, params
    )
