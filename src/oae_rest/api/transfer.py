"""
Account transfer endpoints.

A transfer moves the content and memberships of one account (identified by its
email address) to another account; it is confirmed with an emailed code.
"""

from __future__ import annotations

from typing import Any

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_GET, HTTP_POST, HTTP_PUT, encode_uri_component, perform_rest_request

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
STATUS_CANCELED = "canceled"


def initiate_transfer(
    ctx: RestContext, original_user_id: str, original_email: str, target_email: str
) -> Any:
    params = {
        "originalUserId": original_user_id,
        "originalEmail": original_email,
        "targetEmail": target_email,
    }
    return perform_rest_request(ctx, "/api/transfer", HTTP_POST, params)


def get_transfer_by_id(ctx: RestContext, original_user_id: str) -> Any:
    return perform_rest_request(
        ctx,
        f"/api/transfer/{encode_uri_component(original_user_id)}",
        HTTP_GET,
        {"originalUserId": original_user_id},
    )


def complete_transfer(
    ctx: RestContext, original_email: str, code: str, target_email: str, target_user_id: str
) -> Any:
    params = {
        "originalEmail": original_email,
        "code": code,
        "targetEmail": target_email,
        "status": STATUS_COMPLETED,
    }
    return perform_rest_request(
        ctx, f"/api/transfer/{encode_uri_component(target_user_id)}", HTTP_PUT, params
    )


def cancel_transfer(ctx: RestContext, original_email: str, code: str, original_user_id: str) -> None:
    params = {
        "originalEmail": original_email,
        "code": code,
        "originalUserId": original_user_id,
        "status": STATUS_CANCELED,
    }
    perform_rest_request(
        ctx, f"/api/transfer/{encode_uri_component(original_user_id)}", HTTP_PUT, params
    )
