# hie_core/iam/resolver.py
"""
Session/role resolution.

Turns an authenticated identity into a ResolvedSession (role + facility
binding). Profile rows are written by a trigger after the identity exists and
roles are assigned later still, so a missing row or a NULL role is polled with
bounded exponential backoff before giving up.

Resolution never raises: callers get one of three states

  - ready                 role resolved
  - pending_provisioning  row missing / role NULL after every attempt
  - degraded              the store failed; treated like "no role"

Store failures abort polling immediately and are logged, because failing open
to "no role" keeps navigation alive while granting nothing.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol

import structlog
from django.conf import settings
from django.db import DatabaseError

logger = structlog.get_logger(__name__)

STATE_READY = "ready"
STATE_PENDING_PROVISIONING = "pending_provisioning"
STATE_DEGRADED = "degraded"
STATE_ANONYMOUS = "anonymous"


class ProfileLookupError(Exception):
    """Store failure (anything other than 'row missing')."""


@dataclass(frozen=True)
class Identity:
    id: int
    email: str = ""

    @classmethod
    def from_user(cls, user) -> "Identity":
        return cls(id=user.pk, email=getattr(user, "email", "") or "")


@dataclass(frozen=True)
class ProfileRow:
    role: Optional[str]
    facility_id: Optional[int] = None
    first_name: str = ""
    last_name: str = ""


@dataclass(frozen=True)
class ResolvedSession:
    user_id: Optional[int]
    email: str = ""
    role: Optional[str] = None
    facility_id: Optional[int] = None
    facility_name: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    state: str = STATE_ANONYMOUS
    attempts: int = 0

    @classmethod
    def anonymous(cls) -> "ResolvedSession":
        return cls(user_id=None)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_pending(self) -> bool:
        return self.is_authenticated and self.role is None

    @property
    def display_name(self) -> str:
        full = f"{self.first_name} {self.last_name}".strip()
        return full or self.email

    def as_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "role": self.role,
            "facility_id": self.facility_id,
            "facility_name": self.facility_name,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "display_name": self.display_name,
            "state": self.state,
        }


class ProfileStore(Protocol):
    def get_profile(self, identity_id: int) -> Optional[ProfileRow]:
        ...

    def get_facility_name(self, facility_id: int) -> Optional[str]:
        ...


class DjangoProfileStore:
    """ProfileStore over the iam_profile / facilities_facility tables."""

    def get_profile(self, identity_id: int) -> Optional[ProfileRow]:
        from hie_core.iam.models import Profile

        try:
            row = (
                Profile.objects.filter(user_id=identity_id)
                .values("role", "facility_id", "first_name", "last_name")
                .first()
            )
        except DatabaseError as exc:
            raise ProfileLookupError(str(exc)) from exc

        if row is None:
            return None
        return ProfileRow(**row)

    def get_facility_name(self, facility_id: int) -> Optional[str]:
        from hie_core.facilities.models import Facility

        try:
            return Facility.objects.filter(id=facility_id).values_list("name", flat=True).first()
        except DatabaseError as exc:
            raise ProfileLookupError(str(exc)) from exc


def _resolution_settings() -> dict:
    return dict(settings.HIE_CONSOLE.get("PROFILE_RESOLUTION", {}))


class SessionRoleResolver:
    def __init__(
        self,
        store: Optional[ProfileStore] = None,
        *,
        max_attempts: Optional[int] = None,
        base_delay: Optional[float] = None,
        backoff: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        cfg = _resolution_settings()
        self.store = store or DjangoProfileStore()
        self.max_attempts = max(1, int(max_attempts if max_attempts is not None else cfg.get("MAX_ATTEMPTS", 5)))
        self.base_delay = float(base_delay if base_delay is not None else cfg.get("BASE_DELAY", 0.5))
        self.backoff = float(backoff if backoff is not None else cfg.get("BACKOFF", 2.0))
        self._sleep = sleep

    def delay_before(self, attempt: int) -> float:
        """Wait before lookup number `attempt + 1` (attempt is 1-based)."""
        return self.base_delay * (self.backoff ** (attempt - 1))

    @property
    def max_wait(self) -> float:
        return sum(self.delay_before(n) for n in range(1, self.max_attempts))

    def resolve(self, identity: Optional[Identity]) -> ResolvedSession:
        if identity is None:
            return ResolvedSession.anonymous()

        base = ResolvedSession(user_id=identity.id, email=identity.email)
        row: Optional[ProfileRow] = None
        attempts = 0

        while attempts < self.max_attempts:
            attempts += 1
            try:
                row = self.store.get_profile(identity.id)
            except ProfileLookupError as exc:
                logger.warning(
                    "profile_resolution_failed",
                    user_id=identity.id,
                    attempt=attempts,
                    error=str(exc),
                )
                return replace(base, state=STATE_DEGRADED, attempts=attempts)

            if row is not None and row.role:
                break

            if attempts < self.max_attempts:
                self._sleep(self.delay_before(attempts))

        if row is None or not row.role:
            logger.info("profile_pending_provisioning", user_id=identity.id, attempts=attempts)
            return replace(
                base,
                first_name=row.first_name if row else "",
                last_name=row.last_name if row else "",
                state=STATE_PENDING_PROVISIONING,
                attempts=attempts,
            )

        facility_name = None
        if row.facility_id:
            try:
                facility_name = self.store.get_facility_name(row.facility_id)
            except ProfileLookupError as exc:
                # Role is known; only the display name is missing.
                logger.warning("facility_name_lookup_failed", user_id=identity.id, error=str(exc))

        return replace(
            base,
            role=row.role,
            facility_id=row.facility_id,
            facility_name=facility_name,
            first_name=row.first_name,
            last_name=row.last_name,
            state=STATE_READY,
            attempts=attempts,
        )


def session_for_user(user) -> ResolvedSession:
    """
    Single-lookup resolution for per-request authorization (no polling).
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return ResolvedSession.anonymous()
    return SessionRoleResolver(max_attempts=1).resolve(Identity.from_user(user))


def request_session(request) -> ResolvedSession:
    """Resolve once per request and memoize on the request object."""
    cached = getattr(request, "_hie_session", None)
    if cached is not None:
        return cached
    session = session_for_user(getattr(request, "user", None))
    setattr(request, "_hie_session", session)
    return session
