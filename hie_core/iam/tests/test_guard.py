# hie_core/iam/tests/test_guard.py
from itertools import combinations

import pytest
from django.core.exceptions import ImproperlyConfigured

from hie_core.iam.guard import (
    REDIRECT_SIGN_IN,
    REDIRECT_UNAUTHORIZED,
    RENDER,
    ROUTE_RULES,
    SIGN_IN_PATH,
    UNAUTHORIZED_PATH,
    RouteRule,
    RouteTable,
    authorize_path,
    evaluate,
    validate_route_table,
)
from hie_core.iam.models import Role
from hie_core.iam.permissions import RolePermission
from hie_core.iam.resolver import STATE_PENDING_PROVISIONING, STATE_READY, ResolvedSession

ROLES = [Role.MOH, Role.FACILITY_ADMIN, Role.DEVELOPER]

ALLOW_LISTS = [None] + [
    frozenset(c) for n in range(1, len(ROLES) + 1) for c in combinations(ROLES, n)
]


def _session(role):
    state = STATE_READY if role else STATE_PENDING_PROVISIONING
    return ResolvedSession(user_id=1, email="u@x", role=role, state=state)


@pytest.mark.parametrize("allowed", ALLOW_LISTS)
@pytest.mark.parametrize("role", ROLES + [None])
def test_authenticated_outcomes(role, allowed):
    decision = evaluate(_session(role), RouteRule("/x", allowed))

    if allowed is None or role in allowed:
        assert decision.outcome == RENDER
        assert decision.redirect_to is None
    else:
        assert decision.outcome == REDIRECT_UNAUTHORIZED
        assert decision.redirect_to == UNAUTHORIZED_PATH


@pytest.mark.parametrize("allowed", ALLOW_LISTS)
def test_unauthenticated_always_goes_to_sign_in(allowed):
    for session in (None, ResolvedSession.anonymous()):
        decision = evaluate(session, RouteRule("/x", allowed))
        assert decision.outcome == REDIRECT_SIGN_IN
        assert decision.redirect_to == SIGN_IN_PATH


def test_role_pending_is_denied_by_any_allow_list():
    decision = evaluate(_session(None), RouteRule("/x", {Role.MOH, Role.FACILITY_ADMIN, Role.DEVELOPER}))
    assert decision.outcome == REDIRECT_UNAUTHORIZED


def test_evaluate_is_idempotent_and_does_not_touch_the_session():
    session = _session(Role.DEVELOPER)
    rule = RouteRule("/x", {Role.MOH})
    assert evaluate(session, rule) == evaluate(session, rule)
    assert session.role == Role.DEVELOPER


def test_empty_allow_list_is_a_config_error():
    with pytest.raises(ImproperlyConfigured):
        RouteTable([RouteRule("/broken", frozenset())])


def test_unknown_role_in_allow_list_is_a_config_error():
    with pytest.raises(ImproperlyConfigured):
        RouteTable([RouteRule("/broken", {"Superuser"})])


def test_duplicate_route_is_a_config_error():
    with pytest.raises(ImproperlyConfigured):
        RouteTable([RouteRule("/a", None), RouteRule("/a", {Role.MOH})])


def test_empty_allow_list_on_a_permission_class_fails_at_definition():
    with pytest.raises(ImproperlyConfigured):

        class BrokenPermission(RolePermission):
            allowed_roles_per_action = {"list": set()}


def test_shipped_route_table_is_valid():
    table = validate_route_table()
    assert len(table) == len(ROUTE_RULES)


@pytest.mark.parametrize(
    "path,role,outcome",
    [
        ("/dashboard", Role.MOH, RENDER),
        ("/dashboard", Role.FACILITY_ADMIN, REDIRECT_UNAUTHORIZED),
        ("/facility-dashboard", Role.FACILITY_ADMIN, RENDER),
        ("/developer-dashboard", Role.DEVELOPER, RENDER),
        ("/developer", Role.MOH, REDIRECT_UNAUTHORIZED),
        ("/audit", Role.DEVELOPER, RENDER),
        ("/governance", Role.DEVELOPER, REDIRECT_UNAUTHORIZED),
        ("/settings", None, RENDER),
        ("/pending-setup", None, RENDER),
        ("/registrations", None, REDIRECT_UNAUTHORIZED),
    ],
)
def test_console_routes(path, role, outcome):
    assert authorize_path(_session(role), path).outcome == outcome


def test_unknown_path_has_no_decision():
    assert authorize_path(_session(Role.MOH), "/nope") is None
