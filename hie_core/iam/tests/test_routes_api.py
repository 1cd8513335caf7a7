# hie_core/iam/tests/test_routes_api.py
import pytest

pytestmark = pytest.mark.django_db


def _authorize(client, path):
    return client.post("/api/v1/routes/authorize/", {"path": path}, format="json")


def test_anonymous_is_sent_to_sign_in(anon_client):
    res = _authorize(anon_client, "/dashboard")
    assert res.status_code == 200
    assert res.json() == {"path": "/dashboard", "outcome": "redirect_sign_in", "redirect_to": "/login"}


def test_allowed_role_renders(moh_client):
    res = _authorize(moh_client, "/registrations/")
    assert res.status_code == 200
    assert res.json()["outcome"] == "render"
    assert res.json()["path"] == "/registrations"


def test_wrong_role_is_sent_to_unauthorized(developer_client):
    res = _authorize(developer_client, "/facilities")
    assert res.json()["outcome"] == "redirect_unauthorized"
    assert res.json()["redirect_to"] == "/unauthorized"


def test_role_pending_user_reaches_settings_only(pending_client):
    assert _authorize(pending_client, "/settings").json()["outcome"] == "render"
    assert _authorize(pending_client, "/audit").json()["outcome"] == "redirect_unauthorized"


def test_unknown_route_is_404(moh_client):
    res = _authorize(moh_client, "/does-not-exist")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "not_found"
