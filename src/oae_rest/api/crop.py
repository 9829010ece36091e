from __future__ import annotations

from typing import Any, Mapping

from oae_rest.core.context import RestContext
from oae_rest.core.http import HTTP_POST, perform_rest_request


def crop_picture(ctx: RestContext, principal_id: str, selected_area: Mapping[str, Any]) -> Any:
    """Crop a principal's uploaded picture to a square and regenerate its sizes.

    `selected_area` holds `x`, `y` and `width` in pixels of the original picture.
    """
    params = {
        "principalId": principal_id,
        "x": selected_area.get("x"),
        "y": selected_area.get("y"),
        "width": selected_area.get("width"),
    }
    return perform_rest_request(ctx, "/api/crop", HTTP_POST, params)
