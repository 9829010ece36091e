"""
Content endpoints: links, files, collaborative documents and spreadsheets, their
members, comments, revisions, previews and downloads.

Files are uploaded by passing a binary stream (or a callable returning one) as the
`file` value; the dispatch layer switches to a multipart request on its own.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from oae_rest.core.context import RestContext
from oae_rest.core.errors import RestError
from oae_rest.core.http import (
    HTTP_DELETE,
    HTTP_GET,
    HTTP_POST,
    as_list,
    encode_uri_component,
    perform_rest_request,
    stream_rest_request,
)

logger = logging.getLogger(__name__)

FILE = "file"
LINK = "link"
COLLABDOC = "collabdoc"
COLLABSHEET = "collabsheet"


def _content_path(content_id: str, suffix: str = "") -> str:
    return f"/api/content/{encode_uri_component(content_id)}{suffix}"


def _revision_path(content_id: str, revision_id: str, suffix: str = "") -> str:
    return _content_path(content_id, f"/revisions/{encode_uri_component(revision_id)}{suffix}")


def get_content(ctx: RestContext, content_id: str) -> Any:
    return perform_rest_request(ctx, _content_path(content_id), HTTP_GET)


def create_link(ctx: RestContext, link_details: Mapping[str, Any]) -> Any:
    """Create a link item.

    `link_details` keys: `displayName`, `description`, `visibility`, `link`,
    `managers`, `viewers`, `folders`.
    """
    params = {
        "resourceSubType": LINK,
        "displayName": link_details.get("displayName"),
        "description": link_details.get("description"),
        "visibility": link_details.get("visibility"),
        "link": link_details.get("link"),
        "managers": link_details.get("managers"),
        "viewers": link_details.get("viewers"),
        "folders": link_details.get("folders"),
    }
    return perform_rest_request(ctx, "/api/content/create", HTTP_POST, params)


def create_file(ctx: RestContext, file_details: Mapping[str, Any]) -> Any:
    """Create a file item; `file_details["file"]` is the stream to upload."""
    params = {
        "resourceSubType": FILE,
        "displayName": file_details.get("displayName"),
        "description": file_details.get("description"),
        "visibility": file_details.get("visibility"),
        "file": file_details.get("file"),
        "managers": file_details.get("managers"),
        "viewers": file_details.get("viewers"),
        "folders": file_details.get("folders"),
    }
    return perform_rest_request(ctx, "/api/content/create", HTTP_POST, params)


def _create_collab_item(
    ctx: RestContext,
    sub_type: str,
    display_name: str,
    description: str | None,
    visibility: str | None,
    managers: Iterable[str] | None,
    editors: Iterable[str] | None,
    viewers: Iterable[str] | None,
    folders: Iterable[str] | None,
) -> Any:
    params = {
        "resourceSubType": sub_type,
        "displayName": display_name,
        "description": description,
        "visibility": visibility,
        "managers": as_list(managers),
        "editors": as_list(editors),
        "viewers": as_list(viewers),
        "folders": as_list(folders),
    }
    return perform_rest_request(ctx, "/api/content/create", HTTP_POST, params)


def create_collab_doc(
    ctx: RestContext,
    display_name: str,
    description: str | None = None,
    visibility: str | None = None,
    managers: Iterable[str] | None = None,
    editors: Iterable[str] | None = None,
    viewers: Iterable[str] | None = None,
    folders: Iterable[str] | None = None,
) -> Any:
    return _create_collab_item(
        ctx, COLLABDOC, display_name, description, visibility, managers, editors, viewers, folders
    )


def create_collabsheet(
    ctx: RestContext,
    display_name: str,
    description: str | None = None,
    visibility: str | None = None,
    managers: Iterable[str] | None = None,
    editors: Iterable[str] | None = None,
    viewers: Iterable[str] | None = None,
    folders: Iterable[str] | None = None,
) -> Any:
    return _create_collab_item(
        ctx, COLLABSHEET, display_name, description, visibility, managers, editors, viewers, folders
    )


def update_content(ctx: RestContext, content_id: str, params: Mapping[str, Any]) -> Any:
    return perform_rest_request(ctx, _content_path(content_id), HTTP_POST, params)


def delete_content(ctx: RestContext, content_id: str) -> Any:
    return perform_rest_request(ctx, _content_path(content_id), HTTP_DELETE)


def get_members(ctx: RestContext, content_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx, _content_path(content_id, "/members"), HTTP_GET, {"start": start, "limit": limit}
    )


def update_members(ctx: RestContext, content_id: str, updated_members: Mapping[str, Any]) -> Any:
    """Set roles for principals; a role of `False` removes the principal."""
    return perform_rest_request(ctx, _content_path(content_id, "/members"), HTTP_POST, updated_members)


def share_content(ctx: RestContext, content_id: str, principals: Iterable[str]) -> Any:
    return perform_rest_request(
        ctx, _content_path(content_id, "/share"), HTTP_POST, {"viewers": as_list(principals)}
    )


def create_comment(ctx: RestContext, content_id: str, body: str, reply_to: str | None = None) -> Any:
    return perform_rest_request(
        ctx, _content_path(content_id, "/messages"), HTTP_POST, {"body": body, "replyTo": reply_to}
    )


def delete_comment(ctx: RestContext, content_id: str, created: str) -> Any:
    return perform_rest_request(
        ctx, _content_path(content_id, f"/messages/{encode_uri_component(created)}"), HTTP_DELETE
    )


def get_comments(ctx: RestContext, content_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx, _content_path(content_id, "/messages"), HTTP_GET, {"start": start, "limit": limit}
    )


def get_library(ctx: RestContext, principal_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/content/library/{encode_uri_component(principal_id)}",
        HTTP_GET,
        {"start": start, "limit": limit},
    )


def remove_content_from_library(ctx: RestContext, principal_id: str, content_id: str) -> Any:
    path = (
        f"/api/content/library/{encode_uri_component(principal_id)}"
        f"/{encode_uri_component(content_id)}"
    )
    return perform_rest_request(ctx, path, HTTP_DELETE)


def get_revisions(ctx: RestContext, content_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx, _content_path(content_id, "/revisions"), HTTP_GET, {"start": start, "limit": limit}
    )


def get_revision(ctx: RestContext, content_id: str, revision_id: str) -> Any:
    return perform_rest_request(ctx, _revision_path(content_id, revision_id), HTTP_GET)


def restore_revision(ctx: RestContext, content_id: str, revision_id: str) -> Any:
    return perform_rest_request(ctx, _revision_path(content_id, revision_id, "/restore"), HTTP_POST)


def update_file_body(ctx: RestContext, content_id: str, file: Any) -> Any:
    """Upload a new version of a file item."""
    return perform_rest_request(ctx, _content_path(content_id, "/newversion"), HTTP_POST, {"file": file})


def download(
    ctx: RestContext,
    content_id: str,
    revision_id: str | None,
    path: str | Path,
) -> int:
    """Download a file item (optionally a specific revision) to `path`.

    Returns the HTTP status code.

    Raises:
        RestError: `(status, "Unable to download the file.")` unless the server answers 200/204.
    """
    url = _content_path(content_id, "/download")
    if revision_id:
        url += f"/{encode_uri_component(revision_id)}"

    with stream_rest_request(ctx, url) as response:
        status = response.status_code
        if status not in (200, 204):
            response.read()
            raise RestError(status, "Unable to download the file.")
        with open(path, "wb") as out:
            for chunk in response.iter_bytes():
                out.write(chunk)

    logger.debug("Downloaded content %s to %s", content_id, path)
    return status


def join_collab_doc(ctx: RestContext, content_id: str) -> Any:
    return perform_rest_request(ctx, _content_path(content_id, "/join"), HTTP_POST)


def set_preview_items(
    ctx: RestContext,
    content_id: str,
    revision_id: str,
    status: str,
    files: Mapping[str, Any],
    sizes: Mapping[str, str],
    content_metadata: Mapping[str, Any] | None = None,
    preview_metadata: Mapping[str, Any] | None = None,
) -> Any:
    """Store preview items for a revision (used by the preview processor).

    `files` maps preview filenames to either a stream (uploaded as a part of that name)
    or a string (stored as a link). `sizes` maps the same filenames to a size label.
    """
    links: dict[str, str] = {}
    size_map: dict[str, Any] = {}
    params: dict[str, Any] = {"status": status}

    for filename, value in files.items():
        if isinstance(value, str):
            links[filename] = value
        else:
            params[filename] = value
        if filename in sizes:
            size_map[filename] = sizes[filename]

    params["sizes"] = json.dumps(size_map)
    params["links"] = json.dumps(links)
    params["contentMetadata"] = json.dumps(dict(content_metadata or {}))
    params["previewMetadata"] = json.dumps(dict(preview_metadata or {}))
    return perform_rest_request(
        ctx, _revision_path(content_id, revision_id, "/previews"), HTTP_POST, params
    )


def get_preview_items(ctx: RestContext, content_id: str, revision_id: str) -> Any:
    return perform_rest_request(ctx, _revision_path(content_id, revision_id, "/previews"), HTTP_GET, {})


def download_preview_item(
    ctx: RestContext,
    content_id: str,
    revision_id: str,
    preview_item: str,
    signature: Mapping[str, Any],
) -> Any:
    """Fetch one preview file using the signature returned by `get_preview_items`."""
    params = {
        "signature": signature.get("signature"),
        "expires": signature.get("expires"),
        "lastmodified": signature.get("lastModified"),
    }
    path = _revision_path(content_id, revision_id, f"/previews/{encode_uri_component(preview_item)}")
    return perform_rest_request(ctx, path, HTTP_GET, params)
