"""Group meetup (BigBlueButton) endpoints."""

from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, HTTP_POST, encode_uri_component, perform_rest_request

API_ENDPOINT = "/api/meetups"


def _meetup_path(group_id: str, action: str) -> str:
    return f"{API_ENDPOINT}/{encode_uri_component(group_id)}/{action}"


def join_meetup(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, _meetup_path(group_id, "join"), HTTP_GET)


def end_meetup(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, _meetup_path(group_id, "end"), HTTP_POST)


def is_meeting_running(ctx: RestContext, group_id: str) -> Any:
    return perform_rest_request(ctx, _meetup_path(group_id, "isMeetingRunning"), HTTP_GET)


def create_meetup_recording_link(ctx: RestContext, group_id: str, signed_parameters: str) -> Any:
    return perform_rest_request(
        ctx, _meetup_path(group_id, "recording"), HTTP_POST, {"signedParameters": signed_parameters}
    )
