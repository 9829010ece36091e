import threading
import time
from urllib.parse import parse_qs

import httpx
import pytest

from oae_rest.core.context import RestContext
from oae_rest.core.errors import RestError
from oae_rest.core.http import (
    encode_uri_component,
    normalize_params,
    perform_rest_request,
    perform_rest_request_with_response,
)

HOST = "http://cam.oae.test"


def _context(handler, **kwargs):
    seen: list[httpx.Request] = []

    def _handle(request: httpx.Request) -> httpx.Response:
        request.read()
        seen.append(request)
        return handler(request)

    ctx = RestContext(HOST, transport=httpx.MockTransport(_handle), **kwargs)
    return ctx, seen


def _form(request: httpx.Request) -> dict[str, list[str]]:
    return parse_qs(request.content.decode("utf-8"))


def test_encode_uri_component_matches_javascript_rules():
    assert encode_uri_component("u:cam:abc def") == "u%3Acam%3Aabc%20def"
    assert encode_uri_component("a/b?c=d&e") == "a%2Fb%3Fc%3Dd%26e"
    assert encode_uri_component("-_.!~*'()") == "-_.!~*'()"
    assert encode_uri_component(None) == ""
    assert encode_uri_component(12) == "12"
    assert encode_uri_component(True) == "true"
    assert encode_uri_component(False) == "false"


def test_normalize_params_drops_unspecified_values_without_mutating_input():
    data = {
        "displayName": "Test",
        "description": None,
        "managers": [None, "u:cam:a", ""],
        "viewers": [None],
        "limit": 0,
    }

    params, has_stream = normalize_params(data)

    assert params == {"displayName": "Test", "managers": ["u:cam:a"], "limit": 0}
    assert has_stream is False
    assert data["description"] is None
    assert data["viewers"] == [None]


def test_normalize_params_resolves_callables_and_flags_streams(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"x")
    opened = []

    def _open():
        fh = path.open("rb")
        opened.append(fh)
        return fh

    params, has_stream = normalize_params({"file": _open, "other": [lambda: "resolved"]})

    assert has_stream is True
    assert params["file"] is opened[0]
    assert params["other"] == ["resolved"]
    opened[0].close()


def test_anonymous_get_sends_query_string_without_logging_in():
    ctx, seen = _context(lambda request: httpx.Response(200, json={"anon": True}))

    body = perform_rest_request(
        ctx,
        "/api/search/general",
        "GET",
        {"q": "test", "resourceTypes": ["user", "group"], "limit": None},
    )

    assert body == {"anon": True}
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/api/search/general"
    assert request.url.params.get("q") == "test"
    assert request.url.params.get_list("resourceTypes") == ["user", "group"]
    assert "limit" not in request.url.params
    assert ctx.cookie_jar is not None


def test_authenticated_context_logs_in_once_before_first_request():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/auth/login":
            return httpx.Response(
                200, headers={"set-cookie": "connect.sid=abc; Path=/"}, json={"id": "u:cam:nm417"}
            )
        return httpx.Response(200, json={"cookie": request.headers.get("cookie")})

    ctx, seen = _context(handler, username="nm417", user_password="secret")

    first = perform_rest_request(ctx, "/api/me", "GET")
    second = perform_rest_request(ctx, "/api/me", "GET")

    assert [r.url.path for r in seen] == ["/api/auth/login", "/api/me", "/api/me"]
    assert seen[0].method == "POST"
    assert _form(seen[0]) == {"username": ["nm417"], "password": ["secret"]}
    assert first == {"cookie": "connect.sid=abc"}
    assert second == {"cookie": "connect.sid=abc"}


def test_failed_login_raises_and_resets_session():
    ctx, seen = _context(
        lambda request: httpx.Response(401, text="Invalid credentials"),
        username="nm417",
        user_password="wrong",
    )

    with pytest.raises(RestError) as excinfo:
        perform_rest_request(ctx, "/api/me", "GET")

    assert excinfo.value.code == 401
    assert excinfo.value.msg == "Invalid credentials"
    assert ctx.cookie_jar is None
    assert [r.url.path for r in seen] == ["/api/auth/login"]


def test_post_without_stream_is_form_encoded():
    ctx, seen = _context(lambda request: httpx.Response(201, json={"id": "g:cam:1"}))

    perform_rest_request(
        ctx,
        "/api/group/create",
        "POST",
        {"displayName": "G", "visibility": None, "joinable": True, "managers": ["u:cam:a", "u:cam:b"]},
    )

    request = seen[0]
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert _form(request) == {
        "displayName": ["G"],
        "joinable": ["true"],
        "managers": ["u:cam:a", "u:cam:b"],
    }


def test_stream_values_switch_to_multipart(tmp_path):
    picture = tmp_path / "avatar.png"
    picture.write_bytes(b"png-bytes")
    opened = []

    def _open():
        fh = picture.open("rb")
        opened.append(fh)
        return fh

    ctx, seen = _context(lambda request: httpx.Response(200, json={}))

    perform_rest_request(
        ctx, "/api/content/create", "POST", {"file": _open, "displayName": "Avatar", "hidden": False}
    )
    opened[0].close()

    request = seen[0]
    assert request.headers["content-type"].startswith("multipart/form-data; boundary=")
    body = request.content
    assert b'name="file"; filename="avatar.png"' in body
    assert b"png-bytes" in body
    assert b'name="displayName"\r\n\r\nAvatar' in body
    assert b'name="hidden"\r\n\r\nfalse' in body


def test_error_status_raises_rest_error_with_body():
    ctx, _ = _context(lambda request: httpx.Response(404, text="Content not found"))

    with pytest.raises(RestError) as excinfo:
        perform_rest_request(ctx, "/api/content/c:cam:missing", "GET")

    assert excinfo.value.code == 404
    assert excinfo.value.msg == "Content not found"


def test_transport_error_is_reported_as_500():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    ctx, _ = _context(handler)

    with pytest.raises(RestError) as excinfo:
        perform_rest_request(ctx, "/api/me", "GET")

    assert excinfo.value.code == 500
    assert excinfo.value.msg.startswith("Something went wrong trying to contact the server")
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_non_json_body_is_returned_as_text():
    ctx, _ = _context(lambda request: httpx.Response(200, text="body { color: red; }"))

    assert perform_rest_request(ctx, "/api/ui/skin", "GET") == "body { color: red; }"


def test_default_referer_points_at_host():
    ctx, seen = _context(lambda request: httpx.Response(200, json={}))

    perform_rest_request(ctx, "/api/me", "GET")

    assert seen[0].headers["referer"] == "http://cam.oae.test/"
    assert seen[0].headers["host"] == "cam.oae.test"


def test_host_header_selects_tenant_and_rewrites_referer():
    ctx, seen = _context(
        lambda request: httpx.Response(200, json={}),
        host_header="gt.oae.test",
        additional_headers={"X-Test": "1"},
    )

    perform_rest_request(ctx, "/api/me", "GET")

    assert seen[0].headers["host"] == "gt.oae.test"
    assert seen[0].headers["referer"] == "http://gt.oae.test/"
    assert seen[0].headers["x-test"] == "1"


def test_explicit_referer_wins():
    ctx, seen = _context(
        lambda request: httpx.Response(200, json={}),
        host_header="gt.oae.test",
        referer_header="http://elsewhere.test/page",
    )

    perform_rest_request(ctx, "/api/me", "GET")

    assert seen[0].headers["referer"] == "http://elsewhere.test/page"


def test_redirects_are_not_followed_for_post():
    ctx, seen = _context(
        lambda request: httpx.Response(302, headers={"location": "/"}, text="Found")
    )

    body, response = perform_rest_request_with_response(ctx, "/api/auth/signed", "POST", {"a": "b"})

    assert response.status_code == 302
    assert body == "Found"
    assert len(seen) == 1


def test_concurrent_first_requests_share_one_login():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/auth/login":
            # Keep the login in flight long enough for every thread to queue behind it.
            time.sleep(0.2)
            return httpx.Response(200, headers={"set-cookie": "connect.sid=s1; Path=/"}, json={})
        return httpx.Response(200, json={"cookie": request.headers.get("cookie")})

    ctx, seen = _context(handler, username="nm417", user_password="secret")
    results: list = []
    errors: list = []

    def worker():
        try:
            results.append(perform_rest_request(ctx, "/api/me", "GET"))
        except Exception as exc:  # surfaced through the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert errors == []
    paths = [r.url.path for r in seen]
    assert paths.count("/api/auth/login") == 1
    assert paths.count("/api/me") == 5
    assert results == [{"cookie": "connect.sid=s1"}] * 5


def test_multipart_unrolls_lists_into_repeated_parts(tmp_path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_bytes(b"AAA")
    second.write_bytes(b"BBB")
    opened = []

    def _opener(path):
        def _open():
            fh = path.open("rb")
            opened.append(fh)
            return fh

        return _open

    ctx, seen = _context(lambda request: httpx.Response(200, json={}))

    perform_rest_request(
        ctx,
        "/api/content/create",
        "POST",
        {"file": [_opener(first), _opener(second)], "tags": ["t1", "t2"], "flag": True, "n": 0},
    )
    for fh in opened:
        fh.close()

    body = seen[0].content
    assert body.count(b'name="file"; filename=') == 2
    assert b'filename="a.txt"' in body and b"AAA" in body
    assert b'filename="b.txt"' in body and b"BBB" in body
    assert body.count(b'name="tags"\r\n\r\n') == 2
    assert b'name="tags"\r\n\r\nt1' in body
    assert b'name="tags"\r\n\r\nt2' in body
    assert b'name="flag"\r\n\r\ntrue' in body
    assert b'name="n"\r\n\r\n0' in body


def test_redirects_are_followed_for_get():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/old":
            return httpx.Response(302, headers={"location": "/api/new"})
        return httpx.Response(200, json={"moved": True})

    ctx, seen = _context(handler)

    body, response = perform_rest_request_with_response(ctx, "/api/old", "GET")

    assert body == {"moved": True}
    assert response.status_code == 200
    assert [r.url.path for r in seen] == ["/api/old", "/api/new"]


def test_get_redirects_stay_put_when_disabled():
    ctx, seen = _context(
        lambda request: httpx.Response(302, headers={"location": "/api/new"}, text="Found"),
        follow_redirects=False,
    )

    body, response = perform_rest_request_with_response(ctx, "/api/old", "GET")

    assert response.status_code == 302
    assert body == "Found"
    assert len(seen) == 1
