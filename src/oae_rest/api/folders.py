"""Folder endpoints: folder profiles, members, libraries, contained content and messages."""

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


def _folder_path(folder_id: str, suffix: str = "") -> str:
    return f"/api/folder/{encode_uri_component(folder_id)}{suffix}"


def get_folder(ctx: RestContext, folder_id: str) -> Any:
    return perform_rest_request(ctx, _folder_path(folder_id), HTTP_GET)


def create_folder(
    ctx: RestContext,
    display_name: str,
    description: str | None = None,
    visibility: str | None = None,
    managers: Iterable[str] | None = None,
    viewers: Iterable[str] | None = None,
) -> Any:
    params = {
        "displayName": display_name,
        "description": description,
        "visibility": visibility,
        "managers": as_list(managers),
        "viewers": as_list(viewers),
    }
    return perform_rest_request(ctx, "/api/folder", HTTP_POST, params)


def update_folder(ctx: RestContext, folder_id: str, updates: Mapping[str, Any]) -> Any:
    return perform_rest_request(ctx, _folder_path(folder_id), HTTP_POST, updates)


def update_folder_content_visibility(ctx: RestContext, folder_id: str, visibility: str) -> Any:
    """Apply `visibility` to every content item in the folder."""
    return perform_rest_request(
        ctx, _folder_path(folder_id, "/contentvisibility"), HTTP_POST, {"visibility": visibility}
    )


def delete_folder(ctx: RestContext, folder_id: str, delete_content: bool = False) -> Any:
    """Delete a folder; with `delete_content` the items it holds are deleted too."""
    return perform_rest_request(
        ctx, _folder_path(folder_id), HTTP_DELETE, {"deleteContent": delete_content}
    )


def share_folder(ctx: RestContext, folder_id: str, principal_ids: Iterable[str]) -> Any:
    return perform_rest_request(
        ctx, _folder_path(folder_id, "/share"), HTTP_POST, {"viewers": as_list(principal_ids)}
    )


def update_folder_members(ctx: RestContext, folder_id: str, member_updates: Mapping[str, Any]) -> Any:
    return perform_rest_request(ctx, _folder_path(folder_id, "/members"), HTTP_POST, member_updates)


def get_folder_members(ctx: RestContext, folder_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx, _folder_path(folder_id, "/members"), HTTP_GET, {"start": start, "limit": limit}
    )


def get_folders_library(ctx: RestContext, principal_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/folder/library/{encode_uri_component(principal_id)}",
        HTTP_GET,
        {"start": start, "limit": limit},
    )


def get_managed_folders(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/folder/managed", HTTP_GET)


def remove_folder_from_library(ctx: RestContext, principal_id: str, folder_id: str) -> Any:
    path = (
        f"/api/folder/library/{encode_uri_component(principal_id)}"
        f"/{encode_uri_component(folder_id)}"
    )
    return perform_rest_request(ctx, path, HTTP_DELETE)


def add_content_items_to_folder(ctx: RestContext, folder_id: str, content_ids: Iterable[str]) -> Any:
    return perform_rest_request(
        ctx, _folder_path(folder_id, "/library"), HTTP_POST, {"contentIds": as_list(content_ids)}
    )


def remove_content_items_from_folder(ctx: RestContext, folder_id: str, content_ids: Iterable[str]) -> Any:
    return perform_rest_request(
        ctx, _folder_path(folder_id, "/library"), HTTP_DELETE, {"contentIds": as_list(content_ids)}
    )


def get_folder_content_library(
    ctx: RestContext, folder_id: str, start: str | None = None, limit: int | None = None
) -> Any:
    return perform_rest_request(
        ctx, _folder_path(folder_id, "/library"), HTTP_GET, {"start": start, "limit": limit}
    )


def create_message(ctx: RestContext, folder_id: str, body: str, reply_to: str | None = None) -> Any:
    return perform_rest_request(
        ctx, _folder_path(folder_id, "/messages"), HTTP_POST, {"body": body, "replyTo": reply_to}
    )


def get_messages(ctx: RestContext, folder_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx, _folder_path(folder_id, "/messages"), HTTP_GET, {"start": start, "limit": limit}
    )


def delete_message(ctx: RestContext, folder_id: str, message_created: str) -> Any:
    return perform_rest_request(
        ctx,
        _folder_path(folder_id, f"/messages/{encode_uri_component(message_created)}"),
        HTTP_DELETE,
    )
