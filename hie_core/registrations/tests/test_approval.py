# hie_core/registrations/tests/test_approval.py
import pytest
from django.contrib.auth import get_user_model
from django.db import DatabaseError

from hie_core.audit.models import AuditLog
from hie_core.audit.services import REGISTRATION_APPROVED, REGISTRATION_REJECTED, USER_PROVISIONED
from hie_core.common.api.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ProvisioningError,
    ValidationError,
)
from hie_core.facilities.models import Facility, FacilityStatus
from hie_core.iam.models import Profile, Role
from hie_core.iam.resolver import session_for_user
from hie_core.registrations import provisioning
from hie_core.registrations.models import RegistrationRequest, RegistrationStatus
from hie_core.registrations.provisioning import ProvisioningOutcome
from hie_core.registrations.services import RegistrationApprovalService, RegistrationIntakeService
from hie_core.registrations.tests.test_intake import DEVELOPER_FORM, FACILITY_FORM

pytestmark = pytest.mark.django_db


class SpyProvisioner:
    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        return ProvisioningOutcome(request_id=args[0], user_id=1, role=args[6])


@pytest.fixture
def facility_request():
    return RegistrationIntakeService.submit_registration(type="facility", form_data=FACILITY_FORM)


@pytest.fixture
def developer_request():
    return RegistrationIntakeService.submit_registration(type="developer", form_data=DEVELOPER_FORM)


@pytest.fixture
def moh(moh_user):
    return session_for_user(moh_user)


def test_end_to_end_facility_approval(moh, moh_user, facility_request):
    result = RegistrationApprovalService.approve(actor=moh, request_id=facility_request.id)

    assert result.role == Role.FACILITY_ADMIN
    assert result.email == "a@b.com"
    assert len(result.temporary_password) == 12

    facility_request.refresh_from_db()
    assert facility_request.status == RegistrationStatus.APPROVED
    assert facility_request.approved_by_id == moh_user.pk
    assert facility_request.processed_at is not None

    user = get_user_model().objects.get(username="a@b.com")
    assert user.check_password(result.temporary_password)
    assert facility_request.provisioned_user_id == user.pk

    profile = Profile.objects.get(user=user)
    assert profile.role == Role.FACILITY_ADMIN
    assert profile.first_name == "Kemi"
    assert profile.last_name == "Ade"

    facility = Facility.objects.get(id=profile.facility_id)
    assert facility.name == "Test Clinic"
    assert facility.lga == "Asa"
    assert facility.status == FacilityStatus.VERIFIED
    assert (facility.compliance, facility.administrators) == (70, 1)
    assert facility_request.facility_id == facility.id

    session = session_for_user(user)
    assert session.role == Role.FACILITY_ADMIN
    assert session.facility_name == "Test Clinic"

    assert AuditLog.objects.filter(action=REGISTRATION_APPROVED).count() == 1
    assert AuditLog.objects.filter(action=USER_PROVISIONED).count() == 1


def test_developer_approval_has_no_facility(moh, developer_request):
    result = RegistrationApprovalService.approve(actor=moh, request_id=developer_request.id)

    profile = Profile.objects.get(user_id=result.user_id)
    assert profile.role == Role.DEVELOPER
    assert profile.facility_id is None
    assert result.facility_id is None
    assert not Facility.objects.exists()


@pytest.mark.parametrize("actor_fixture", ["facility_admin", "developer_user", "pending_user"])
def test_non_moh_approval_never_reaches_provisioning(request, actor_fixture, facility_request):
    actor = session_for_user(request.getfixturevalue(actor_fixture))
    spy = SpyProvisioner()

    with pytest.raises(AuthorizationError):
        RegistrationApprovalService.approve(actor=actor, request_id=facility_request.id, provisioner=spy)

    assert spy.calls == []
    facility_request.refresh_from_db()
    assert facility_request.status == RegistrationStatus.PENDING


def test_provisioner_invoked_exactly_once_with_generated_password(moh, moh_user, facility_request):
    spy = SpyProvisioner()

    result = RegistrationApprovalService.approve(actor=moh, request_id=facility_request.id, provisioner=spy)

    assert len(spy.calls) == 1
    request_id, request_type, data, email, password, name, role, approver_id = spy.calls[0]
    assert request_id == facility_request.id
    assert request_type == "facility"
    assert data["facilityName"] == "Test Clinic"
    assert email == "a@b.com"
    assert password == result.temporary_password
    assert len(password) == 12
    assert name == "Kemi Ade"
    assert role == Role.FACILITY_ADMIN
    assert approver_id == moh_user.pk


def test_caller_supplied_password_reaches_the_provisioner(moh, facility_request):
    spy = SpyProvisioner()

    result = RegistrationApprovalService.approve(
        actor=moh,
        request_id=facility_request.id,
        email="a@b.com",
        temporary_password="Abcdefgh2345",
        display_name="Kemi Ade",
        target_role=Role.FACILITY_ADMIN,
        provisioner=spy,
    )

    assert len(spy.calls) == 1
    assert spy.calls[0][4] == "Abcdefgh2345"
    assert result.temporary_password == "Abcdefgh2345"


@pytest.mark.parametrize("password", ["short", "", "Abcdefgh23456"])
def test_supplied_password_of_wrong_length_is_rejected(moh, facility_request, password):
    spy = SpyProvisioner()
    with pytest.raises(ValidationError):
        RegistrationApprovalService.approve(
            actor=moh,
            request_id=facility_request.id,
            temporary_password=password,
            provisioner=spy,
        )
    assert spy.calls == []


def test_target_role_must_match_request_type(moh, facility_request):
    spy = SpyProvisioner()
    with pytest.raises(ValidationError):
        RegistrationApprovalService.approve(
            actor=moh,
            request_id=facility_request.id,
            target_role=Role.DEVELOPER,
            provisioner=spy,
        )
    assert spy.calls == []


def test_failed_provisioning_leaves_request_pending(moh, facility_request, monkeypatch):
    def broken_provision(**kwargs):
        raise DatabaseError("profile write refused")

    monkeypatch.setattr(provisioning.ProfileService, "provision", staticmethod(broken_provision))

    with pytest.raises(ProvisioningError):
        RegistrationApprovalService.approve(actor=moh, request_id=facility_request.id)

    facility_request.refresh_from_db()
    assert facility_request.status == RegistrationStatus.PENDING
    assert facility_request.approved_by_id is None
    assert not get_user_model().objects.filter(username="a@b.com").exists()
    assert not Facility.objects.filter(name="Test Clinic").exists()
    assert not AuditLog.objects.filter(action=REGISTRATION_APPROVED).exists()


def test_existing_email_rolls_back_and_keeps_request_pending(moh, facility_request):
    get_user_model().objects.create_user(username="a@b.com", email="a@b.com", password="x")

    with pytest.raises(ConflictError):
        RegistrationApprovalService.approve(actor=moh, request_id=facility_request.id)

    facility_request.refresh_from_db()
    assert facility_request.status == RegistrationStatus.PENDING
    assert not Facility.objects.filter(name="Test Clinic").exists()


def test_processed_request_cannot_be_approved_again(moh, facility_request):
    RegistrationApprovalService.approve(actor=moh, request_id=facility_request.id)
    with pytest.raises(ConflictError):
        RegistrationApprovalService.approve(actor=moh, request_id=facility_request.id)


def test_privileged_operation_loses_to_a_concurrent_decision(moh_user, facility_request):
    RegistrationRequest.objects.filter(id=facility_request.id).update(status=RegistrationStatus.REJECTED)

    with pytest.raises(ConflictError):
        provisioning.approve_request(
            facility_request.id,
            "facility",
            FACILITY_FORM,
            "a@b.com",
            "TempPass1234",
            "Kemi Ade",
            Role.FACILITY_ADMIN,
            moh_user.pk,
        )
    assert not get_user_model().objects.filter(username="a@b.com").exists()


def test_unknown_request_is_not_found(moh):
    with pytest.raises(NotFoundError):
        RegistrationApprovalService.approve(actor=moh, request_id=98765)
    with pytest.raises(NotFoundError):
        RegistrationApprovalService.reject(actor=moh, request_id=98765)


def test_reject_records_approver_and_time(moh, moh_user, developer_request):
    req = RegistrationApprovalService.reject(actor=moh, request_id=developer_request.id)

    assert req.status == RegistrationStatus.REJECTED
    assert req.approved_by_id == moh_user.pk
    assert req.processed_at is not None
    assert AuditLog.objects.filter(action=REGISTRATION_REJECTED).count() == 1


def test_reject_twice_is_conflict(moh, developer_request):
    RegistrationApprovalService.reject(actor=moh, request_id=developer_request.id)
    with pytest.raises(ConflictError):
        RegistrationApprovalService.reject(actor=moh, request_id=developer_request.id)


def test_reject_requires_moh(facility_admin, developer_request):
    with pytest.raises(AuthorizationError):
        RegistrationApprovalService.reject(actor=session_for_user(facility_admin), request_id=developer_request.id)
    developer_request.refresh_from_db()
    assert developer_request.status == RegistrationStatus.PENDING


def test_pending_queue_is_newest_first(moh, facility_request, developer_request):
    pending = RegistrationApprovalService.list_pending_requests(actor=moh)
    assert [r.id for r in pending] == [developer_request.id, facility_request.id]

    RegistrationApprovalService.reject(actor=moh, request_id=developer_request.id)
    assert [r.id for r in RegistrationApprovalService.list_pending_requests(actor=moh)] == [facility_request.id]


def test_pending_queue_requires_moh(developer_user):
    with pytest.raises(AuthorizationError):
        RegistrationApprovalService.list_pending_requests(actor=session_for_user(developer_user))
