from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, HTTP_POST, encode_uri_component, perform_rest_request


def get_embed_code(ctx: RestContext, content_id: str) -> Any:
    return perform_rest_request(
        ctx, f"/api/mediacore/embed/{encode_uri_component(content_id)}", HTTP_GET
    )


def notify_encoding_complete(ctx: RestContext, media_id: str) -> Any:
    """Tell the server MediaCore finished encoding `media_id` (mimics the MediaCore callback)."""
    return perform_rest_request(
        ctx, "/api/mediacore/encodingCallback", HTTP_POST, {"mediaId": media_id}
    )
