# hie_core/iam/guard.py
"""
Route authorization guard.

Three outcomes per navigation attempt, decided from an already-resolved
session and never mutating it:

  - unauthenticated                         -> redirect_sign_in
  - role not in the route's allow-list      -> redirect_unauthorized
  - role in allow-list, or no allow-list    -> render

`allowed_roles=None` means "any authenticated role". An explicit empty
allow-list is rejected when the route table is validated at startup.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from django.core.exceptions import ImproperlyConfigured

from hie_core.iam.models import Role
from hie_core.iam.resolver import ResolvedSession

RENDER = "render"
REDIRECT_SIGN_IN = "redirect_sign_in"
REDIRECT_UNAUTHORIZED = "redirect_unauthorized"

SIGN_IN_PATH = "/login"
UNAUTHORIZED_PATH = "/unauthorized"

KNOWN_ROLES = frozenset(Role.values)


@dataclass(frozen=True)
class RouteRule:
    path: str
    allowed_roles: Optional[frozenset] = None
    title: str = ""

    def __post_init__(self):
        if self.allowed_roles is not None and not isinstance(self.allowed_roles, frozenset):
            object.__setattr__(self, "allowed_roles", frozenset(self.allowed_roles))


@dataclass(frozen=True)
class GuardDecision:
    outcome: str
    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == RENDER


def validate_allowed_roles(allowed_roles, *, where: str) -> None:
    if allowed_roles is None:
        return
    roles = frozenset(allowed_roles)
    if not roles:
        raise ImproperlyConfigured(
            f"{where}: empty allow-list. Omit it for 'any authenticated role'."
        )
    unknown = roles - KNOWN_ROLES
    if unknown:
        raise ImproperlyConfigured(f"{where}: unknown roles {sorted(unknown)}")


def is_role_allowed(role: Optional[str], allowed_roles: Optional[frozenset]) -> bool:
    if allowed_roles is None:
        return True
    return role is not None and role in allowed_roles


def evaluate(session: Optional[ResolvedSession], rule: RouteRule) -> GuardDecision:
    if session is None or not session.is_authenticated:
        return GuardDecision(REDIRECT_SIGN_IN, SIGN_IN_PATH)
    if not is_role_allowed(session.role, rule.allowed_roles):
        return GuardDecision(REDIRECT_UNAUTHORIZED, UNAUTHORIZED_PATH)
    return GuardDecision(RENDER)


class RouteTable:
    def __init__(self, rules: Iterable[RouteRule]):
        self._rules: dict[str, RouteRule] = {}
        for rule in rules:
            validate_allowed_roles(rule.allowed_roles, where=f"route {rule.path!r}")
            if rule.path in self._rules:
                raise ImproperlyConfigured(f"route {rule.path!r} declared twice")
            self._rules[rule.path] = rule

    def get(self, path: str) -> Optional[RouteRule]:
        return self._rules.get(path)

    def __iter__(self) -> Iterator[RouteRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


MOH_ONLY = frozenset({Role.MOH})
FACILITY_ONLY = frozenset({Role.FACILITY_ADMIN})
DEVELOPER_ONLY = frozenset({Role.DEVELOPER})

ROUTE_RULES = (
    # Oversight
    RouteRule("/dashboard", MOH_ONLY, "Command Center"),
    RouteRule("/facilities", MOH_ONLY, "Facility Registry"),
    RouteRule("/registrations", MOH_ONLY, "Registration Requests"),
    RouteRule("/interoperability", MOH_ONLY, "Interoperability"),
    RouteRule("/health", MOH_ONLY, "System Health"),
    RouteRule("/user-management", MOH_ONLY, "User & Role Management"),
    # Facility administration
    RouteRule("/facility-dashboard", FACILITY_ONLY, "Facility Dashboard"),
    RouteRule("/data-quality", frozenset({Role.MOH, Role.FACILITY_ADMIN}), "Data Quality Score"),
    RouteRule("/governance", frozenset({Role.MOH, Role.FACILITY_ADMIN}), "Consent & Identity"),
    # Integration
    RouteRule("/developer-dashboard", DEVELOPER_ONLY, "Developer Dashboard"),
    RouteRule("/developer", frozenset({Role.FACILITY_ADMIN, Role.DEVELOPER}), "Developer Portal"),
    RouteRule("/audit", frozenset({Role.MOH, Role.FACILITY_ADMIN, Role.DEVELOPER}), "Audit Logs"),
    # Any signed-in user, including role-pending accounts
    RouteRule("/settings", None, "Settings"),
    RouteRule("/pending-setup", None, "Account Pending Setup"),
)

_route_table: Optional[RouteTable] = None


def validate_route_table() -> RouteTable:
    global _route_table
    _route_table = RouteTable(ROUTE_RULES)
    return _route_table


def route_table() -> RouteTable:
    return _route_table or validate_route_table()


def authorize_path(session: Optional[ResolvedSession], path: str) -> Optional[GuardDecision]:
    """None when the path is not a guarded route."""
    rule = route_table().get(path)
    if rule is None:
        return None
    return evaluate(session, rule)
