# hie_core/common/cache.py
"""
Request cache for role-scoped list queries.

Entries are keyed by (entity kind, role, facility). Each entity kind carries a
version number that is part of every key; invalidating a kind bumps the
version, which orphans every entry of that kind at once. Orphans expire with
the normal timeout.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

KEY_PREFIX = "hie:query"


def _timeout() -> int:
    return int(settings.HIE_CONSOLE.get("QUERY_CACHE_TIMEOUT", 30))


def _version_key(kind: str) -> str:
    return f"{KEY_PREFIX}:{kind}:version"


class QueryCache:
    @staticmethod
    def version(kind: str) -> int:
        v = cache.get(_version_key(kind))
        if v is None:
            cache.add(_version_key(kind), 1, timeout=None)
            v = cache.get(_version_key(kind), 1)
        return int(v)

    @staticmethod
    def key(kind: str, role: Optional[str], facility_id: Optional[int]) -> str:
        return f"{KEY_PREFIX}:{kind}:v{QueryCache.version(kind)}:{role or '-'}:{facility_id or '-'}"

    @staticmethod
    def get_or_load(
        kind: str,
        *,
        role: Optional[str],
        facility_id: Optional[int],
        loader: Callable[[], Any],
    ) -> Any:
        k = QueryCache.key(kind, role, facility_id)
        hit = cache.get(k)
        if hit is not None:
            return hit
        value = loader()
        cache.set(k, value, timeout=_timeout())
        return value

    @staticmethod
    def invalidate(kind: str) -> None:
        try:
            cache.incr(_version_key(kind))
        except ValueError:
            # version key missing/evicted: start a fresh generation
            cache.set(_version_key(kind), 2, timeout=None)

    @staticmethod
    def invalidate_on_commit(kind: str) -> None:
        """
        Bump the version once the surrounding transaction commits. Readers
        that load between the write and the commit cache under the old
        version only. Runs at once outside a transaction.
        """
        transaction.on_commit(lambda: QueryCache.invalidate(kind))


# entity kinds
FACILITIES = "facilities"
REGISTRATIONS = "registrations"
CONSENTS = "consents"
AUDIT_LOGS = "audit_logs"
MPI_RECORDS = "mpi_records"
FHIR_EVENTS = "fhir_events"
QUALITY_SCORES = "quality_scores"
