"""Discussion endpoints: discussion profiles, members, libraries and messages."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from oae_rest.core.context import RestContext
from oae_rest.core.http import (
    HTTP_DELETE,
    HTTP_GET,
    HTTP_POST,
    as_list,
    encode_uri_component,
    perform_rest_request,
)


def _discussion_path(discussion_id: str, suffix: str = "") -> str:
    return f"/api/discussion/{encode_uri_component(discussion_id)}{suffix}"


def create_discussion(
    ctx: RestContext,
    display_name: str,
    description: str | None = None,
    visibility: str | None = None,
    managers: Iterable[str] | None = None,
    members: Iterable[str] | None = None,
) -> Any:
    params = {
        "displayName": display_name,
        "description": description,
        "visibility": visibility,
        "managers": as_list(managers),
        "members": as_list(members),
    }
    return perform_rest_request(ctx, "/api/discussion/create", HTTP_POST, params)


def get_discussion(ctx: RestContext, discussion_id: str) -> Any:
    return perform_rest_request(ctx, _discussion_path(discussion_id), HTTP_GET)


def update_discussion(ctx: RestContext, discussion_id: str, profile_fields: Mapping[str, Any]) -> Any:
    return perform_rest_request(ctx, _discussion_path(discussion_id), HTTP_POST, profile_fields)


def delete_discussion(ctx: RestContext, discussion_id: str) -> Any:
    return perform_rest_request(ctx, _discussion_path(discussion_id), HTTP_DELETE)


def get_discussions_library(
    ctx: RestContext, principal_id: str, start: str | None = None, limit: int | None = None
) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/discussion/library/{encode_uri_component(principal_id)}",
        HTTP_GET,
        {"start": start, "limit": limit},
    )


def remove_discussion_from_library(ctx: RestContext, principal_id: str, discussion_id: str) -> Any:
    path = (
        f"/api/discussion/library/{encode_uri_component(principal_id)}"
        f"/{encode_uri_component(discussion_id)}"
    )
    return perform_rest_request(ctx, path, HTTP_DELETE)


def get_discussion_members(
    ctx: RestContext, discussion_id: str, start: str | None = None, limit: int | None = None
) -> Any:
    return perform_rest_request(
        ctx, _discussion_path(discussion_id, "/members"), HTTP_GET, {"start": start, "limit": limit}
    )


def update_discussion_members(ctx: RestContext, discussion_id: str, member_updates: Mapping[str, Any]) -> Any:
    return perform_rest_request(ctx, _discussion_path(discussion_id, "/members"), HTTP_POST, member_updates)


def share_discussion(ctx: RestContext, discussion_id: str, principal_ids: Iterable[str]) -> Any:
    return perform_rest_request(
        ctx, _discussion_path(discussion_id, "/share"), HTTP_POST, {"members": as_list(principal_ids)}
    )


def create_message(ctx: RestContext, discussion_id: str, body: str, reply_to: str | None = None) -> Any:
    return perform_rest_request(
        ctx, _discussion_path(discussion_id, "/messages"), HTTP_POST, {"body": body, "replyTo": reply_to}
    )


def get_messages(ctx: RestContext, discussion_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx, _discussion_path(discussion_id, "/messages"), HTTP_GET, {"start": start, "limit": limit}
    )


def delete_message(ctx: RestContext, discussion_id: str, created: str) -> Any:
    return perform_rest_request(
        ctx, _discussion_path(discussion_id, f"/messages/{encode_uri_component(created)}"), HTTP_DELETE
    )
