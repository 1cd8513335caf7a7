# hie_core/iam/navigation.py
"""
Navigation policy: where a resolved session lands and which menu it sees.

Pure functions over ResolvedSession. Session resolution never navigates;
callers resolve first, then ask this module where to go.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hie_core.iam.guard import SIGN_IN_PATH, authorize_path
from hie_core.iam.models import Role
from hie_core.iam.resolver import ResolvedSession

PENDING_SETUP_PATH = "/pending-setup"

LANDING_ROUTES = {
    Role.MOH: "/dashboard",
    Role.FACILITY_ADMIN: "/facility-dashboard",
    Role.DEVELOPER: "/developer-dashboard",
}


@dataclass(frozen=True)
class MenuItem:
    title: str
    url: str

    def as_dict(self) -> dict:
        return {"title": self.title, "url": self.url}


MENUS = {
    Role.MOH: (
        MenuItem("Command Center", "/dashboard"),
        MenuItem("Facility Registry", "/facilities"),
        MenuItem("Registration Requests", "/registrations"),
        MenuItem("Interoperability", "/interoperability"),
        MenuItem("System Health", "/health"),
    ),
    Role.FACILITY_ADMIN: (
        MenuItem("Facility Dashboard", "/facility-dashboard"),
        MenuItem("Data Quality Score", "/data-quality"),
        MenuItem("API & Integrations", "/developer"),
        MenuItem("Consent & Identity", "/governance"),
        MenuItem("Facility Audit Logs", "/audit"),
    ),
    Role.DEVELOPER: (
        MenuItem("Developer Dashboard", "/developer-dashboard"),
        MenuItem("Developer Portal", "/developer"),
        MenuItem("API Logs & Analytics", "/audit"),
    ),
}


def landing_route(session: Optional[ResolvedSession]) -> str:
    if session is None or not session.is_authenticated:
        return SIGN_IN_PATH
    if session.role is None:
        return PENDING_SETUP_PATH
    return LANDING_ROUTES.get(session.role, PENDING_SETUP_PATH)


def menu_for(session: Optional[ResolvedSession]) -> list[MenuItem]:
    """Menu items the guard would actually render for this session."""
    if session is None or session.role is None:
        return []
    items = []
    for item in MENUS.get(session.role, ()):
        decision = authorize_path(session, item.url)
        if decision is not None and decision.allowed:
            items.append(item)
    return items


def sidebar_label(session: ResolvedSession) -> str:
    if session.role == Role.MOH:
        return "Oversight"
    return session.facility_name or session.display_name
