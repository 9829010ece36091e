"""Activity streams and notifications."""

from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, HTTP_POST, encode_uri_component, perform_rest_request


def _paging(start: str | None, limit: int | None, activity_format: str | None = None) -> dict[str, Any]:
    return {"start": start, "limit": limit, "format": activity_format}


def get_current_user_activity_stream(
    ctx: RestContext,
    start: str | None = None,
    limit: int | None = None,
    activity_format: str | None = None,
) -> Any:
    """Activities for the current user; `activity_format` is `activitystreams` or `internal`."""
    return perform_rest_request(ctx, "/api/activity", HTTP_GET, _paging(start, limit, activity_format))


def get_activity_stream(
    ctx: RestContext,
    principal_id: str,
    start: str | None = None,
    limit: int | None = None,
    activity_format: str | None = None,
) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/activity/{encode_uri_component(principal_id)}",
        HTTP_GET,
        _paging(start, limit, activity_format),
    )


def get_notification_stream(ctx: RestContext, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(ctx, "/api/notifications", HTTP_GET, {"start": start, "limit": limit})


def mark_notifications_read(ctx: RestContext) -> Any:
    return perform_rest_request(ctx, "/api/notifications/markRead", HTTP_POST)
