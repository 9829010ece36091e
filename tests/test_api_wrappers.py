import json
import sys

import pytest

from oae_rest.api import (
    activity,
    authentication,
    config,
    content,
    discussions,
    doc,
    folders,
    following,
    group,
    invitations,
    lti,
    mediacore,
    meetups,
    mixpanel,
    oauth,
    search,
    tenants,
    transfer,
    ui,
    user,
    version,
)
from oae_rest.core.context import RestContext
from oae_rest.core.errors import RestError


class FakeRequests:
    """Stands in for `perform_rest_request`, recording every call."""

    def __init__(self, responses=None):
        self.calls: list[tuple[str, str, dict | None]] = []
        self.responses = responses or {}

    def __call__(self, ctx, path, method, data=None):
        self.calls.append((path, method, data))
        return self.responses.get(path)


@pytest.fixture
def ctx():
    return RestContext("http://cam.oae.test", username="admin", user_password="admin")


def _patch(monkeypatch, module, fake):
    monkeypatch.setattr(f"{module.__name__}.perform_rest_request", fake)
    return fake


@pytest.mark.parametrize(
    ("func", "args", "path", "method", "data"),
    [
        (authentication.logout, (), "/api/auth/logout", "POST", None),
        (authentication.exists_on_tenant, ("cam", "nm417"), "/api/auth/cam/exists/nm417", "GET", None),
        (authentication.get_user_login_ids, ("u:cam:x",), "/api/auth/loginIds/u%3Acam%3Ax", "GET", None),
        (authentication.google_callback, ({"code": "c"},), "/api/auth/google/callback", "GET", {"code": "c"}),
        (
            authentication.reset_password,
            ("nm417", "s3cr3t", "newpass"),
            "/api/auth/local/reset/password/nm417",
            "POST",
            {"secret": "s3cr3t", "newPassword": "newpass"},
        ),
        (config.get_tenant_config, (), "/api/config", "GET", None),
        (config.update_config, ("cam", {"oae-x/y/z": True}), "/api/config/cam", "POST", {"oae-x/y/z": True}),
        (config.clear_config, (None, "oae-x/y/z"), "/api/config/clear", "POST", {"configFields": ["oae-x/y/z"]}),
        (content.get_members, ("c:cam:1", None, 10), "/api/content/c%3Acam%3A1/members", "GET", {"start": None, "limit": 10}),
        (content.share_content, ("c:cam:1", "u:cam:a"), "/api/content/c%3Acam%3A1/share", "POST", {"viewers": ["u:cam:a"]}),
        (
            content.restore_revision,
            ("c:cam:1", "rev:cam:2"),
            "/api/content/c%3Acam%3A1/revisions/rev%3Acam%3A2/restore",
            "POST",
            None,
        ),
        (
            content.remove_content_from_library,
            ("u:cam:a", "c:cam:1"),
            "/api/content/library/u%3Acam%3Aa/c%3Acam%3A1",
            "DELETE",
            None,
        ),
        (doc.get_module_documentation, ("backend", "oae-util"), "/api/doc/backend/oae-util", "GET", None),
        (folders.delete_folder, ("f:cam:1", True), "/api/folder/f%3Acam%3A1", "DELETE", {"deleteContent": True}),
        (
            folders.remove_content_items_from_folder,
            ("f:cam:1", ["c:cam:1", "c:cam:2"]),
            "/api/folder/f%3Acam%3A1/library",
            "DELETE",
            {"contentIds": ["c:cam:1", "c:cam:2"]},
        ),
        (folders.get_managed_folders, (), "/api/folder/managed", "GET", None),
        (following.follow, ("u:cam:a",), "/api/following/u%3Acam%3Aa/follow", "POST", None),
        (group.get_join_group_requests, ("g:cam:1",), "/api/group/g%3Acam%3A1/join-request/all", "GET", {"start": None, "limit": None}),
        (group.get_memberships_library, ("u:cam:a",), "/api/user/u%3Acam%3Aa/memberships", "GET", {"start": None, "limit": None}),
        (
            invitations.resend_invitation,
            ("group", "g:cam:1", "a@b.c"),
            "/api/group/g%3Acam%3A1/invitations/a%40b.c/resend",
            "POST",
            None,
        ),
        (lti.get_lti_tool, ("g:cam:1", "tool1"), "/api/lti/g%3Acam%3A1/tool1", "GET", None),
        (mediacore.notify_encoding_complete, ("m1",), "/api/mediacore/encodingCallback", "POST", {"mediaId": "m1"}),
        (meetups.is_meeting_running, ("g:cam:1",), "/api/meetups/g%3Acam%3A1/isMeetingRunning", "GET", None),
        (mixpanel.get_unique_users_for_tenant, ("cam",), "/api/mixpanel/stats/uniqueUsers/cam", "GET", None),
        (
            oauth.update_client,
            ("u:cam:a", "client1", "Renamed"),
            "/api/auth/oauth/clients/u%3Acam%3Aa/client1",
            "POST",
            {"displayName": "Renamed", "secret": None},
        ),
        (search.refresh, (), "/api/search/_refresh", "POST", None),
        (tenants.get_tenants_by_email_address, ("a@cam.ac.uk",), "/api/tenantsByEmail", "GET", {"emails": ["a@cam.ac.uk"]}),
        (tenants.get_tenant, (), "/api/tenant", "GET", None),
        (transfer.get_transfer_by_id, ("u:cam:a",), "/api/transfer/u%3Acam%3Aa", "GET", {"originalUserId": "u:cam:a"}),
        (ui.get_static_batch, ("/ui/index.html",), "/api/ui/staticbatch", "GET", {"files": ["/ui/index.html"]}),
        (user.set_tenant_admin, ("u:cam:a", "yes"), "/api/user/u%3Acam%3Aa/admin", "POST", {"admin": False}),
        (user.export_personal_data, ("u:cam:a", "content"), "/api/user/u%3Acam%3Aa/export/content", "GET", {}),
        (activity.get_notification_stream, (), "/api/notifications", "GET", {"start": None, "limit": None}),
        (discussions.share_discussion, ("d:cam:1", ["u:cam:a"]), "/api/discussion/d%3Acam%3A1/share", "POST", {"members": ["u:cam:a"]}),
        (version.get_version, (), "/api/version", "GET", None),
    ],
)
def test_wrapper_builds_expected_request(monkeypatch, ctx, func, args, path, method, data):
    module = sys.modules[func.__module__]
    fake = _patch(monkeypatch, module, FakeRequests())

    func(ctx, *args)

    assert fake.calls == [(path, method, data)]


def test_create_user_merges_options_and_explicit_fields_win(monkeypatch, ctx):
    fake = _patch(monkeypatch, user, FakeRequests())

    user.create_user_on_tenant(
        ctx, "gt", "nm417", "secret", "Nico", "nm417@gt.test", {"visibility": "private", "username": "ignored"}
    )

    assert fake.calls == [
        (
            "/api/user/gt/create",
            "POST",
            {
                "visibility": "private",
                "username": "nm417",
                "password": "secret",
                "displayName": "Nico",
                "email": "nm417@gt.test",
            },
        )
    ]


def test_create_tenant_admin_user_without_alias_uses_current_tenant(monkeypatch, ctx):
    fake = _patch(monkeypatch, user, FakeRequests())

    user.create_tenant_admin_user(ctx, "admin2", "pw", "Admin Two", None)

    assert fake.calls[0][0] == "/api/user/createTenantAdminUser"


def test_download_picture_requires_size(monkeypatch, ctx):
    fake = _patch(monkeypatch, user, FakeRequests())

    with pytest.raises(RestError) as excinfo:
        user.download_picture(ctx, "u:cam:a", None)

    assert (excinfo.value.code, excinfo.value.msg) == (400, "Missing size parameter")
    assert fake.calls == []


def test_download_picture_without_picture_is_404(monkeypatch, ctx):
    _patch(monkeypatch, user, FakeRequests({"/api/user/u%3Acam%3Aa": {"id": "u:cam:a", "picture": {}}}))

    with pytest.raises(RestError) as excinfo:
        user.download_picture(ctx, "u:cam:a", "small")

    assert excinfo.value.code == 404


def test_download_picture_fetches_signed_url(monkeypatch, ctx):
    signed = "/api/download/signed?uri=local%3Ax&signature=abc"
    fake = _patch(
        monkeypatch,
        user,
        FakeRequests({"/api/user/u%3Acam%3Aa": {"picture": {"small": signed}}, signed: "image-bytes"}),
    )

    assert user.download_picture(ctx, "u:cam:a", "small") == "image-bytes"
    assert fake.calls[-1] == (signed, "GET", None)


def test_upload_picture_crops_when_area_given(monkeypatch, ctx):
    fake = FakeRequests()
    monkeypatch.setattr("oae_rest.api.group.perform_rest_request", fake)
    monkeypatch.setattr("oae_rest.api.crop.perform_rest_request", fake)
    picture = object()

    group.upload_picture(ctx, "g:cam:1", picture, {"x": 10, "y": 20, "width": 50})

    assert fake.calls == [
        ("/api/group/g%3Acam%3A1/picture", "POST", {"file": picture}),
        ("/api/crop", "POST", {"principalId": "g:cam:1", "x": 10, "y": 20, "width": 50}),
    ]


def test_shibboleth_sp_callback_sends_attributes_as_headers_once(monkeypatch, ctx):
    seen_headers = []

    def fake(ctx_, path, method, data=None):
        seen_headers.append(dict(ctx_.additional_headers or {}))
        return None

    monkeypatch.setattr("oae_rest.api.authentication.perform_rest_request", fake)

    authentication.shibboleth_sp_callback(ctx, {"eppn": "nm417@cam.ac.uk", "remote_user": "nm417"})

    assert seen_headers == [{"eppn": "nm417@cam.ac.uk", "remote_user": "nm417"}]
    assert ctx.additional_headers is None


def test_set_preview_items_splits_links_and_files(monkeypatch, ctx):
    fake = _patch(monkeypatch, content, FakeRequests())
    thumbnail = object()

    content.set_preview_items(
        ctx,
        "c:cam:1",
        "rev:cam:1",
        "done",
        {"thumbnail.png": thumbnail, "page1.html": "http://cdn.test/page1.html"},
        {"thumbnail.png": "thumbnail", "page1.html": "large"},
        content_metadata={"pageCount": 1},
    )

    path, method, data = fake.calls[0]
    assert path == "/api/content/c%3Acam%3A1/revisions/rev%3Acam%3A1/previews"
    assert method == "POST"
    assert data["status"] == "done"
    assert data["thumbnail.png"] is thumbnail
    assert "page1.html" not in data
    assert json.loads(data["links"]) == {"page1.html": "http://cdn.test/page1.html"}
    assert json.loads(data["sizes"]) == {"thumbnail.png": "thumbnail", "page1.html": "large"}
    assert json.loads(data["contentMetadata"]) == {"pageCount": 1}
    assert json.loads(data["previewMetadata"]) == {}


def test_set_preview_items_leaves_out_missing_sizes(monkeypatch, ctx):
    fake = _patch(monkeypatch, content, FakeRequests())

    content.set_preview_items(
        ctx,
        "c:cam:1",
        "rev:cam:1",
        "done",
        {"thumbnail.png": object(), "page1.html": "http://cdn.test/page1.html"},
        {"thumbnail.png": "thumbnail"},
    )

    _, _, data = fake.calls[0]
    assert json.loads(data["sizes"]) == {"thumbnail.png": "thumbnail"}


def test_download_preview_item_passes_signature(monkeypatch, ctx):
    fake = _patch(monkeypatch, content, FakeRequests())

    content.download_preview_item(
        ctx, "c:cam:1", "rev:cam:1", "page 1.html", {"signature": "s", "expires": 10, "lastModified": 5}
    )

    assert fake.calls == [
        (
            "/api/content/c%3Acam%3A1/revisions/rev%3Acam%3A1/previews/page%201.html",
            "GET",
            {"signature": "s", "expires": 10, "lastmodified": 5},
        )
    ]


def test_search_joins_encoded_path_params(monkeypatch, ctx):
    fake = _patch(monkeypatch, search, FakeRequests())

    search.search(ctx, "content-library", ["u:cam:a", "extra"], {"q": "x", "limit": 5})
    search.search(ctx, "general", None, None)

    assert fake.calls == [
        ("/api/search/content-library/u%3Acam%3Aa/extra", "GET", {"q": "x", "limit": 5}),
        ("/api/search/general", "GET", {}),
    ]


def test_tenant_lifecycle_calls_wait_for_settle(monkeypatch, ctx):
    fake = _patch(monkeypatch, tenants, FakeRequests({"/api/tenant/create": {"alias": "gt"}}))
    sleeps: list[float] = []
    monkeypatch.setattr("oae_rest.api.tenants.time.sleep", lambda s: sleeps.append(float(s)))

    tenant = tenants.create_tenant(ctx, "gt", "Georgia Tech", "gt.oae.test", {"countryCode": "US"})
    tenants.stop_tenant(ctx, "gt")

    assert tenant == {"alias": "gt"}
    assert fake.calls == [
        (
            "/api/tenant/create",
            "POST",
            {
                "alias": "gt",
                "displayName": "Georgia Tech",
                "host": "gt.oae.test",
                "emailDomains": None,
                "countryCode": "US",
            },
        ),
        ("/api/tenant/stop", "POST", {"aliases": ["gt"]}),
    ]
    assert len(sleeps) == 2


def test_tenant_call_failure_skips_wait(monkeypatch, ctx):
    def fail(*_args, **_kwargs):
        raise RestError(401, "Unauthorized")

    monkeypatch.setattr("oae_rest.api.tenants.perform_rest_request", fail)
    sleeps: list[float] = []
    monkeypatch.setattr("oae_rest.api.tenants.time.sleep", lambda s: sleeps.append(float(s)))

    with pytest.raises(RestError):
        tenants.start_tenant(ctx, "gt")

    assert sleeps == []


def test_complete_and_cancel_transfer_use_put_with_status(monkeypatch, ctx):
    fake = _patch(monkeypatch, transfer, FakeRequests())

    transfer.complete_transfer(ctx, "old@cam.test", "1234", "new@cam.test", "u:cam:new")
    transfer.cancel_transfer(ctx, "old@cam.test", "1234", "u:cam:old")

    assert fake.calls[0][0:2] == ("/api/transfer/u%3Acam%3Anew", "PUT")
    assert fake.calls[0][2]["status"] == transfer.STATUS_COMPLETED
    assert fake.calls[1][0:2] == ("/api/transfer/u%3Acam%3Aold", "PUT")
    assert fake.calls[1][2]["status"] == transfer.STATUS_CANCELED


def test_update_join_group_by_request_uses_put(monkeypatch, ctx):
    fake = _patch(monkeypatch, group, FakeRequests())

    group.update_join_group_by_request(
        ctx, {"groupId": "g:cam:1", "principalId": "u:cam:a", "role": "member", "status": "accept"}
    )

    assert fake.calls == [
        (
            "/api/group/g%3Acam%3A1/join-request",
            "PUT",
            {"principalId": "u:cam:a", "role": "member", "status": "accept"},
        )
    ]
