"""Python client for the Open Academic Environment REST API."""

from oae_rest.core.context import RestContext
from oae_rest.core.errors import RestError
from oae_rest.core.http import encode_uri_component, fill_cookie_jar, perform_rest_request

__all__ = [
    "RestContext",
    "RestError",
    "encode_uri_component",
    "fill_cookie_jar",
    "perform_rest_request",
]

__version__ = "0.1.0"
