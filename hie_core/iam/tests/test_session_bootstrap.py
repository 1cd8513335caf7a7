# hie_core/iam/tests/test_session_bootstrap.py
import pytest
from rest_framework.test import APIClient

from hie_core.iam.api.session import SessionBootstrapView
from hie_core.iam.models import Role
from hie_core.iam.resolver import ProfileLookupError, SessionRoleResolver
from hie_core.iam.signals import session_resolved

pytestmark = pytest.mark.django_db


def test_session_bootstrap_requires_auth():
    res = APIClient().get("/api/v1/session/bootstrap/")
    assert res.status_code in (401, 403)


def test_bootstrap_for_facility_admin(facility_client, facility):
    res = facility_client.get("/api/v1/session/bootstrap/")
    assert res.status_code == 200

    body = res.json()
    assert body["profile"]["role"] == Role.FACILITY_ADMIN
    assert body["profile"]["facility_id"] == facility.id
    assert body["profile"]["state"] == "ready"
    assert body["landing_route"] == "/facility-dashboard"
    assert body["sidebar_label"] == facility.name
    assert "/facility-dashboard" in [m["url"] for m in body["menu"]]


def test_bootstrap_for_role_pending_user_is_not_an_error(pending_client):
    res = pending_client.get("/api/v1/session/bootstrap/")
    assert res.status_code == 200

    body = res.json()
    assert body["profile"]["role"] is None
    assert body["profile"]["state"] == "pending_provisioning"
    assert body["landing_route"] == "/pending-setup"
    assert body["menu"] == []


def test_bootstrap_sends_session_resolved(moh_client, moh_user):
    received = []

    def handler(sender, session, **kwargs):
        received.append(session)

    session_resolved.connect(handler)
    try:
        moh_client.get("/api/v1/session/bootstrap/")
    finally:
        session_resolved.disconnect(handler)

    assert len(received) == 1
    assert received[0].user_id == moh_user.pk
    assert received[0].role == Role.MOH


def test_bootstrap_degrades_when_profile_store_fails(moh_client, monkeypatch):
    class BrokenStore:
        def get_profile(self, identity_id):
            raise ProfileLookupError("database unavailable")

        def get_facility_name(self, facility_id):
            raise AssertionError("not reached")

    monkeypatch.setattr(
        SessionBootstrapView,
        "resolver_class",
        staticmethod(lambda: SessionRoleResolver(BrokenStore(), sleep=lambda s: None)),
    )

    res = moh_client.get("/api/v1/session/bootstrap/")
    assert res.status_code == 200
    body = res.json()
    assert body["profile"]["state"] == "degraded"
    assert body["profile"]["role"] is None
    assert body["landing_route"] == "/pending-setup"
