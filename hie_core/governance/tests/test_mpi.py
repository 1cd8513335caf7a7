# hie_core/governance/tests/test_mpi.py
import pytest

from hie_core.governance.models import MpiRecord
from hie_core.governance.selectors import list_mpi_records
from hie_core.iam.resolver import session_for_user

pytestmark = pytest.mark.django_db


def _records(facility, n, prefix="KW2024"):
    return [
        MpiRecord.objects.create(
            state_health_id=f"{prefix}{i:06d}",
            first_name="Aisha",
            last_name="Mohammed",
            gender="F",
            facility=facility,
        )
        for i in range(n)
    ]


def test_list_is_capped_at_fifty_newest_first(moh_user, facility):
    created = _records(facility, 55)

    rows = list_mpi_records(session_for_user(moh_user))

    assert len(rows) == 50
    assert rows[0].id == created[-1].id


def test_facility_admin_sees_only_its_patients(facility_admin, facility, other_facility):
    _records(facility, 2, prefix="GH")
    _records(other_facility, 3, prefix="BM")

    rows = list_mpi_records(session_for_user(facility_admin))

    assert len(rows) == 2
    assert {r.facility_id for r in rows} == {facility.id}


def test_role_pending_sees_nothing(pending_user, facility):
    _records(facility, 2)
    assert list_mpi_records(session_for_user(pending_user)) == []


def test_mpi_endpoint(moh_client, facility):
    _records(facility, 3)
    res = moh_client.get("/api/v1/governance/mpi/")
    assert res.status_code == 200
    assert len(res.json()) == 3
    assert res.json()[0]["facility"] == facility.name
