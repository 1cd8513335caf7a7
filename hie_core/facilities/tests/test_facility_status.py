# hie_core/facilities/tests/test_facility_status.py
import pytest

from hie_core.audit.models import AuditLog
from hie_core.audit.services import FACILITY_APPROVED, FACILITY_REJECTED
from hie_core.common import cache as query_cache
from hie_core.common.api.exceptions import ConflictError, NotFoundError, ValidationError
from hie_core.common.cache import QueryCache
from hie_core.facilities.models import Facility, FacilityStatus
from hie_core.facilities.services import FacilityService

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize("compliance,administrators", [(0, 0), (55, 9), (100, 3)])
def test_verify_applies_fixed_defaults_regardless_of_prior_values(compliance, administrators):
    f = Facility.objects.create(
        name="Community Health Centre",
        lga="Asa",
        compliance=compliance,
        administrators=administrators,
    )

    updated = FacilityService.set_status(facility_id=f.id, status=FacilityStatus.VERIFIED)

    assert updated.status == FacilityStatus.VERIFIED
    assert updated.compliance == 70
    assert updated.administrators == 1
    f.refresh_from_db()
    assert (f.status, f.compliance, f.administrators) == ("verified", 70, 1)


def test_reject_zeroes_compliance_and_administrators():
    f = Facility.objects.create(name="Private Clinic Offa", lga="Offa", compliance=40, administrators=2)

    updated = FacilityService.set_status(facility_id=f.id, status=FacilityStatus.REJECTED)

    assert (updated.status, updated.compliance, updated.administrators) == ("rejected", 0, 0)


def test_status_change_is_audited(pending_facility):
    FacilityService.set_status(
        facility_id=pending_facility.id,
        status=FacilityStatus.VERIFIED,
        actor_label="admin@moh.kwara",
    )
    entry = AuditLog.objects.get(action=FACILITY_APPROVED)
    assert entry.user == "admin@moh.kwara"
    assert entry.resource == pending_facility.name
    assert entry.facility_id == pending_facility.id


def test_unknown_facility_is_not_found():
    with pytest.raises(NotFoundError):
        FacilityService.set_status(facility_id=424242, status=FacilityStatus.VERIFIED)


def test_decided_facility_cannot_change_again(pending_facility):
    FacilityService.set_status(facility_id=pending_facility.id, status=FacilityStatus.REJECTED)

    with pytest.raises(ConflictError):
        FacilityService.set_status(facility_id=pending_facility.id, status=FacilityStatus.VERIFIED)

    pending_facility.refresh_from_db()
    assert pending_facility.status == FacilityStatus.REJECTED
    assert AuditLog.objects.filter(action=FACILITY_REJECTED).count() == 1


def test_pending_is_not_a_target_status(pending_facility):
    with pytest.raises(ValidationError):
        FacilityService.set_status(facility_id=pending_facility.id, status=FacilityStatus.PENDING)


def test_create_pending_requires_name_and_lga():
    with pytest.raises(ValidationError):
        FacilityService.create_pending(name=" ", lga="Asa")
    with pytest.raises(ValidationError):
        FacilityService.create_pending(name="Clinic", lga="")

    f = FacilityService.create_pending(name="Clinic", lga="Asa", facility_type="Other")
    assert f.status == FacilityStatus.PENDING
    assert (f.compliance, f.administrators) == (0, 0)


def test_status_change_bumps_cached_lists_only_after_commit(django_capture_on_commit_callbacks):
    f = Facility.objects.create(name="Sobi Specialist Hospital", lga="Ilorin East")
    version = QueryCache.version(query_cache.FACILITIES)

    with django_capture_on_commit_callbacks() as callbacks:
        FacilityService.set_status(facility_id=f.id, status=FacilityStatus.VERIFIED)
        assert QueryCache.version(query_cache.FACILITIES) == version

    for callback in callbacks:
        callback()
    assert QueryCache.version(query_cache.FACILITIES) == version + 1
