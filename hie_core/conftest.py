# hie_core/conftest.py
import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from hie_core.facilities.models import Facility, FacilityStatus
from hie_core.iam.models import Profile, Role


def make_user(email, *, role=None, facility=None, password="Pass@12345", first_name="", last_name=""):
    """
    Create an auth user; the post_save trigger creates the profile row with
    role=NULL, then the role/facility binding is written directly.
    """
    User = get_user_model()
    user = User.objects.create_user(
        username=email,
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
    )
    if role is not None:
        Profile.objects.filter(user=user).update(role=role, facility=facility)
    return user


def client_for(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture(autouse=True)
def _clear_query_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def facility(db):
    return Facility.objects.create(
        name="General Hospital Ilorin",
        lga="Ilorin West",
        facility_type="Public",
        status=FacilityStatus.VERIFIED,
        compliance=92,
        administrators=3,
    )


@pytest.fixture
def other_facility(db):
    return Facility.objects.create(
        name="Baptist Medical Centre",
        lga="Ilorin South",
        facility_type="Private",
        status=FacilityStatus.VERIFIED,
        compliance=88,
        administrators=2,
    )


@pytest.fixture
def pending_facility(db):
    return Facility.objects.create(
        name="Private Clinic Offa",
        lga="Offa",
        facility_type="Private",
        status=FacilityStatus.PENDING,
    )


@pytest.fixture
def moh_user(db):
    return make_user("admin@moh.kwara", role=Role.MOH, first_name="Ada", last_name="Oversight")


@pytest.fixture
def facility_admin(db, facility):
    return make_user("facility_admin@ghilorin", role=Role.FACILITY_ADMIN, facility=facility)


@pytest.fixture
def developer_user(db):
    return make_user("dev@emr.example", role=Role.DEVELOPER)


@pytest.fixture
def pending_user(db):
    return make_user("new@user.example")


@pytest.fixture
def moh_client(moh_user):
    return client_for(moh_user)


@pytest.fixture
def facility_client(facility_admin):
    return client_for(facility_admin)


@pytest.fixture
def developer_client(developer_user):
    return client_for(developer_user)


@pytest.fixture
def pending_client(pending_user):
    return client_for(pending_user)


@pytest.fixture
def anon_client():
    return APIClient()
