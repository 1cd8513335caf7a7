# hie_core/common/tests/test_query_cache.py
import pytest

from hie_core.common import cache as query_cache
from hie_core.common.cache import QueryCache


def test_hit_does_not_reload():
    calls = []

    def loader():
        calls.append(1)
        return ["row"]

    for _ in range(3):
        assert QueryCache.get_or_load(query_cache.FACILITIES, role="MoH", facility_id=None, loader=loader) == ["row"]
    assert len(calls) == 1


def test_keys_are_partitioned_by_role_and_facility():
    a = QueryCache.get_or_load(query_cache.CONSENTS, role="FacilityAdmin", facility_id=1, loader=lambda: "one")
    b = QueryCache.get_or_load(query_cache.CONSENTS, role="FacilityAdmin", facility_id=2, loader=lambda: "two")
    c = QueryCache.get_or_load(query_cache.CONSENTS, role="MoH", facility_id=None, loader=lambda: "all")
    assert (a, b, c) == ("one", "two", "all")


def test_invalidate_drops_every_entry_of_the_kind_only():
    QueryCache.get_or_load(query_cache.CONSENTS, role="MoH", facility_id=None, loader=lambda: "old")
    QueryCache.get_or_load(query_cache.CONSENTS, role="FacilityAdmin", facility_id=3, loader=lambda: "old")
    QueryCache.get_or_load(query_cache.AUDIT_LOGS, role="MoH", facility_id=None, loader=lambda: "kept")

    QueryCache.invalidate(query_cache.CONSENTS)

    assert QueryCache.get_or_load(query_cache.CONSENTS, role="MoH", facility_id=None, loader=lambda: "new") == "new"
    assert (
        QueryCache.get_or_load(query_cache.CONSENTS, role="FacilityAdmin", facility_id=3, loader=lambda: "new")
        == "new"
    )
    assert QueryCache.get_or_load(query_cache.AUDIT_LOGS, role="MoH", facility_id=None, loader=lambda: "x") == "kept"


def test_invalidate_without_version_key_starts_fresh_generation():
    QueryCache.invalidate(query_cache.MPI_RECORDS)
    assert QueryCache.version(query_cache.MPI_RECORDS) == 2


@pytest.mark.django_db
def test_invalidate_on_commit_waits_for_the_commit(django_capture_on_commit_callbacks):
    QueryCache.get_or_load(query_cache.FACILITIES, role="MoH", facility_id=None, loader=lambda: "before")
    version = QueryCache.version(query_cache.FACILITIES)

    with django_capture_on_commit_callbacks() as callbacks:
        QueryCache.invalidate_on_commit(query_cache.FACILITIES)
        assert QueryCache.version(query_cache.FACILITIES) == version

    assert len(callbacks) == 1
    assert QueryCache.get_or_load(query_cache.FACILITIES, role="MoH", facility_id=None, loader=lambda: "x") == "before"

    callbacks[0]()
    assert QueryCache.version(query_cache.FACILITIES) == version + 1
