# hie_core/facilities/tests/test_facilities_api.py
import pytest

from hie_core.conftest import client_for, make_user
from hie_core.iam.models import Role

pytestmark = pytest.mark.django_db


def test_moh_sees_every_facility(moh_client, facility, other_facility, pending_facility):
    res = moh_client.get("/api/v1/facilities/")
    assert res.status_code == 200
    names = {f["name"] for f in res.json()}
    assert names == {facility.name, other_facility.name, pending_facility.name}


def test_facility_admin_sees_exactly_its_facility(facility_client, facility, other_facility):
    res = facility_client.get("/api/v1/facilities/")
    assert res.status_code == 200
    body = res.json()
    assert [f["id"] for f in body] == [facility.id]
    assert body[0]["type"] == "Public"


def test_facility_admin_cannot_read_another_facility(facility_client, other_facility):
    res = facility_client.get(f"/api/v1/facilities/{other_facility.id}/")
    assert res.status_code == 404


def test_developer_and_pending_users_are_denied(developer_client, pending_client, facility):
    assert developer_client.get("/api/v1/facilities/").status_code == 403
    assert pending_client.get("/api/v1/facilities/").status_code == 403


def test_unauthenticated_is_rejected(anon_client):
    assert anon_client.get("/api/v1/facilities/").status_code in (401, 403)


def test_moh_verifies_pending_facility(moh_client, pending_facility):
    res = moh_client.post(
        f"/api/v1/facilities/{pending_facility.id}/status/",
        {"status": "verified"},
        format="json",
    )
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "verified"
    assert body["compliance"] == 70
    assert body["administrators"] == 1


def test_facility_admin_cannot_change_status(facility_client, pending_facility):
    res = facility_client.post(
        f"/api/v1/facilities/{pending_facility.id}/status/",
        {"status": "verified"},
        format="json",
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "permission_denied"


def test_status_change_on_decided_facility_is_conflict(moh_client, facility):
    res = moh_client.post(f"/api/v1/facilities/{facility.id}/status/", {"status": "rejected"}, format="json")
    assert res.status_code == 409


def test_status_change_on_unknown_facility_is_404(moh_client):
    res = moh_client.post("/api/v1/facilities/9999/status/", {"status": "rejected"}, format="json")
    assert res.status_code == 404


def test_invalid_status_is_400(moh_client, pending_facility):
    res = moh_client.post(
        f"/api/v1/facilities/{pending_facility.id}/status/",
        {"status": "pending"},
        format="json",
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "validation_error"


def test_list_is_refreshed_after_a_status_change(moh_client, pending_facility, django_capture_on_commit_callbacks):
    first = moh_client.get("/api/v1/facilities/").json()
    assert first[0]["status"] == "pending"

    with django_capture_on_commit_callbacks(execute=True):
        moh_client.post(f"/api/v1/facilities/{pending_facility.id}/status/", {"status": "verified"}, format="json")

    second = moh_client.get("/api/v1/facilities/").json()
    assert second[0]["status"] == "verified"


def test_cache_is_partitioned_by_facility(facility, other_facility):
    a = client_for(make_user("a@gh.example", role=Role.FACILITY_ADMIN, facility=facility))
    b = client_for(make_user("b@bmc.example", role=Role.FACILITY_ADMIN, facility=other_facility))

    assert [f["id"] for f in a.get("/api/v1/facilities/").json()] == [facility.id]
    assert [f["id"] for f in b.get("/api/v1/facilities/").json()] == [other_facility.id]


@pytest.mark.parametrize("pk", ["²", "abc"])
def test_non_numeric_facility_id_is_404(moh_client, pk):
    assert moh_client.get(f"/api/v1/facilities/{pk}/").status_code == 404
    res = moh_client.post(f"/api/v1/facilities/{pk}/status/", {"status": "verified"}, format="json")
    assert res.status_code == 404
