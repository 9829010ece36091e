"""LTI tool endpoints. Tools are attached to a group."""

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


def create_lti_tool(
    ctx: RestContext,
    group_id: str,
    url: str,
    secret: str,
    key: str,
    display_name: str | None = None,
    description: str | None = None,
) -> Any:
    """Register an LTI tool launch URL with its OAuth consumer key and secret."""
    params = {
        "url": url,
        "secret": secret,
        "key": key,
        "displayName": display_name,
        "description": description,
    }
    return perform_rest_request(
        ctx, f"/api/lti/{encode_uri_component(group_id)}/create", HTTP_POST, params
    )


def delete_lti_tool(ctx: RestContext, group_id: str, tool_id: str) -> Any:
    path = f"/api/lti/{encode_uri_component(group_id)}/{encode_uri_component(tool_id)}"
    return perform_rest_request(ctx, path, HTTP_DELETE)


def get_lti_tool(ctx: RestContext, group_id: str, tool_id: str) -> Any:
    """Launch data for a tool; the response carries the signed launch parameters."""
    path = f"/api/lti/{encode_uri_component(group_id)}/{encode_uri_component(tool_id)}"
    return perform_rest_request(ctx, path, HTTP_GET)


def get_lti_tools(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, f"/api/lti/{encode_uri_component(group_id)}", HTTP_GET)
