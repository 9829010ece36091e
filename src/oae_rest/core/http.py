"""
HTTP dispatch helpers.

Every wrapper in `oae_rest.api` funnels through `perform_rest_request`, which:
- establishes a session on the context before its first request (login into the cookie jar),
- adds the tenant routing headers (`Host`, `Referer`) and any extra headers,
- serializes parameters (query string for GET, form body otherwise, multipart when a
  stream is being uploaded),
- raises `RestError` on transport errors or HTTP status >= 400,
- returns the decoded JSON body, or the raw text when the body is not JSON.

Nothing here retries: a failed call is reported once and the caller decides what to do.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from http.cookiejar import CookieJar
from typing import Any
from urllib.parse import quote

import httpx

from oae_rest.core.context import RestContext
from oae_rest.core.errors import RestError

logger = logging.getLogger(__name__)

HTTP_GET = "GET"
HTTP_POST = "POST"
HTTP_PUT = "PUT"
HTTP_DELETE = "DELETE"

LOGIN_PATH = "/api/auth/login"

DEFAULT_USER_AGENT = "oae-rest/0.1.0"

# Characters JavaScript's encodeURIComponent leaves alone; the server decodes with the same rules.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: Any) -> str:
    """Percent-encode a single URL path segment. `None` encodes to an empty string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def as_list(values: Any) -> list[Any] | None:
    """Wrap a single value in a list; `None` stays `None` so the parameter is dropped."""
    if values is None:
        return None
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        return [values]
    return list(values)


def _is_stream(value: Any) -> bool:
    return callable(getattr(value, "read", None))


def _resolve(value: Any) -> Any:
    # Callables open their stream only now, right before the request goes out.
    if callable(value) and not _is_stream(value):
        return value()
    return value


def normalize_params(data: Mapping[str, Any] | None) -> tuple[dict[str, Any], bool]:
    """Resolve lazy values and drop unspecified ones.

    Returns `(params, has_stream)`. The input mapping is never modified.
    - `None` values are removed.
    - List/tuple values keep only truthy items and are removed when nothing is left.
    - `has_stream` is True when any value (or list item) is a readable stream.
    """
    params: dict[str, Any] = {}
    has_stream = False

    for key, value in (data or {}).items():
        if isinstance(value, (list, tuple)):
            items = [_resolve(item) for item in value]
            if any(_is_stream(item) for item in items):
                has_stream = True
            items = [item for item in items if _is_stream(item) or item]
            if items:
                params[key] = items
            continue

        value = _resolve(value)
        if value is None:
            continue
        if _is_stream(value):
            has_stream = True
        params[key] = value

    return params, has_stream


def _multipart_value(value: Any) -> str | bytes:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value
    return str(value)


def _upload_filename(key: str, stream: Any) -> str:
    name = getattr(stream, "name", None)
    if isinstance(name, str) and name:
        return os.path.basename(name)
    return key


def _build_multipart(params: Mapping[str, Any]) -> tuple[dict[str, list[str | bytes]], list[tuple[str, Any]]]:
    """Split params into multipart text fields and file parts (lists unrolled per item)."""
    fields: dict[str, list[str | bytes]] = {}
    files: list[tuple[str, Any]] = []
    for key, value in params.items():
        values = value if isinstance(value, list) else [value]
        for item in values:
            if _is_stream(item):
                files.append((key, (_upload_filename(key, item), item)))
            else:
                fields.setdefault(key, []).append(_multipart_value(item))
    return fields, files


def _parse_response(method: str, url: str, response: httpx.Response) -> tuple[Any, httpx.Response]:
    if response.status_code >= 400:
        logger.warning("%s %s failed with status=%s", method, url, response.status_code)
        raise RestError(response.status_code, response.text)

    try:
        body: Any = response.json()
    except ValueError:
        body = response.text

    logger.debug("%s %s -> %s", method, url, response.status_code)
    return body, response


def do_request(
    client: httpx.Client,
    method: str,
    url: str,
    data: Mapping[str, Any] | None = None,
    *,
    headers: Mapping[str, str] | None = None,
    follow_redirects: bool = False,
) -> tuple[Any, httpx.Response]:
    """Send one request and return `(body, response)`.

    Raises:
        RestError: code 500 on transport errors, the HTTP status for responses >= 400.
    """
    method = method.upper()
    params, has_stream = normalize_params(data)

    kwargs: dict[str, Any] = {"headers": dict(headers or {}), "follow_redirects": follow_redirects}
    if params:
        if method == HTTP_GET:
            kwargs["params"] = params
        elif has_stream:
            fields, files = _build_multipart(params)
            kwargs["data"] = fields
            kwargs["files"] = files
        else:
            kwargs["data"] = params

    try:
        response = client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        logger.warning("%s %s could not be sent: %s", method, url, exc)
        raise RestError(
            500, f"Something went wrong trying to contact the server:\n{exc!r}"
        ) from exc

    return _parse_response(method, url, response)


def build_headers(ctx: RestContext) -> dict[str, str]:
    """Headers sent with every request on `ctx` (extra headers, tenant `Host`, `Referer`)."""
    headers = {"User-Agent": DEFAULT_USER_AGENT}
    if ctx.additional_headers:
        headers.update({str(k): str(v) for k, v in ctx.additional_headers.items()})

    referer = f"{ctx.host}/"
    if ctx.host_header:
        # The app server picks the tenant from the Host header.
        headers["Host"] = ctx.host_header
        scheme = ctx.host.split(":", 1)[0]
        referer = f"{scheme}://{ctx.host_header}/"

    if ctx.referer_header is not None:
        referer = ctx.referer_header

    headers["Referer"] = referer
    return headers


def _client(ctx: RestContext) -> httpx.Client:
    kwargs: dict[str, Any] = {
        # A CookieJar instance is shared (not copied), so cookies set by responses land on ctx.
        "cookies": ctx.cookie_jar,
        "verify": ctx.strict_ssl,
        "transport": ctx.transport,
        "event_hooks": ctx.event_hooks,
    }
    if ctx.timeout_seconds is not None:
        kwargs["timeout"] = ctx.timeout_seconds
    return httpx.Client(**kwargs)


def _perform_rest_request(
    ctx: RestContext, path: str, method: str, data: Mapping[str, Any] | None
) -> tuple[Any, httpx.Response]:
    method = method.upper()
    url = ctx.host + path
    logger.debug("%s %s", method, url)
    with _client(ctx) as client:
        return do_request(
            client,
            method,
            url,
            data,
            headers=build_headers(ctx),
            follow_redirects=ctx.follow_redirects and method == HTTP_GET,
        )


def fill_cookie_jar(ctx: RestContext) -> Any:
    """Log the context's user in so the session cookie lands in `ctx.cookie_jar`.

    Anonymous contexts have nothing to log in with and are left alone.
    """
    if ctx.cookie_jar is None:
        ctx.cookie_jar = CookieJar()
    if ctx.is_anonymous:
        return None

    body, _ = _perform_rest_request(
        ctx,
        LOGIN_PATH,
        HTTP_POST,
        {"username": ctx.username, "password": ctx.user_password},
    )
    logger.info("Logged in as %s on %s", ctx.username, ctx.host)
    return body


def ensure_session(ctx: RestContext) -> None:
    """Create the context's cookie jar and log in, once per context."""
    with ctx.session_lock:
        if ctx.cookie_jar is not None:
            return
        ctx.cookie_jar = CookieJar()
        try:
            fill_cookie_jar(ctx)
        except RestError:
            ctx.reset_session()
            raise


def perform_rest_request_with_response(
    ctx: RestContext, path: str, method: str, data: Mapping[str, Any] | None = None
) -> tuple[Any, httpx.Response]:
    """Like `perform_rest_request`, but also return the `httpx.Response`."""
    ensure_session(ctx)
    return _perform_rest_request(ctx, path, method, data)


def perform_rest_request(
    ctx: RestContext, path: str, method: str, data: Mapping[str, Any] | None = None
) -> Any:
    """Perform a REST request on behalf of the context's user and return the parsed body.

    Args:
        ctx: Tenant host, credentials and session state.
        path: Endpoint path relative to `ctx.host` (e.g. `/api/me`).
        method: HTTP method.
        data: Query parameters (GET) or body fields (other methods). Values may be
            streams, or callables returning streams, to upload files.

    Raises:
        RestError: On transport errors or HTTP status >= 400.
    """
    body, _ = perform_rest_request_with_response(ctx, path, method, data)
    return body


@contextmanager
def stream_rest_request(
    ctx: RestContext, path: str, params: Mapping[str, Any] | None = None
) -> Iterator[httpx.Response]:
    """Open a streaming GET on `path`; the status is left for the caller to check."""
    ensure_session(ctx)
    url = ctx.host + path
    query, _ = normalize_params(params)
    logger.debug("GET %s (stream)", url)
    with _client(ctx) as client:
        try:
            with client.stream(
                HTTP_GET,
                url,
                params=query or None,
                headers=build_headers(ctx),
                follow_redirects=ctx.follow_redirects,
            ) as response:
                yield response
        except httpx.HTTPError as exc:
            logger.warning("GET %s could not be completed: %s", url, exc)
            raise RestError(
                500, f"Something went wrong trying to contact the server:\n{exc!r}"
            ) from exc
