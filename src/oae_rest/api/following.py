from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, HTTP_POST, encode_uri_component, perform_rest_request


def get_followers(ctx: RestContext, user_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/following/{encode_uri_component(user_id)}/followers",
        HTTP_GET,
        {"start": start, "limit": limit},
    )


def get_following(ctx: RestContext, user_id: str, start: str | None = None, limit: int | None = None) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/following/{encode_uri_component(user_id)}/following",
        HTTP_GET,
        {"start": start, "limit": limit},
    )


def follow(ctx: RestContext, user_id: str) -> Any:
    return perform_rest_request(ctx, f"/api/following/{encode_uri_component(user_id)}/follow", HTTP_POST)


def unfollow(ctx: RestContext, user_id: str) -> Any:
    return perform_rest_request(ctx, f"/api/following/{encode_uri_component(user_id)}/unfollow", HTTP_POST)
