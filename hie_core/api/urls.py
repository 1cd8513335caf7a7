# hie_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from hie_core.audit.api.views import AuditLogViewSet
from hie_core.facilities.api.views import FacilityViewSet
from hie_core.governance.api.views import ConsentRecordViewSet, MpiRecordViewSet
from hie_core.iam.api.auth import LoginView, LogoutView, RefreshView, SignUpView
from hie_core.iam.api.routes import RouteAuthorizeView
from hie_core.iam.api.session import SessionBootstrapView
from hie_core.interop.api.views import FhirEventViewSet, QualityScoreViewSet
from hie_core.registrations.api.views import RegistrationRequestViewSet, RegistrationSubmitView

router = DefaultRouter()

router.register(r"facilities", FacilityViewSet, basename="facilities")
router.register(r"registrations", RegistrationRequestViewSet, basename="registrations")
router.register(r"governance/consents", ConsentRecordViewSet, basename="consents")
router.register(r"governance/mpi", MpiRecordViewSet, basename="mpi-records")
router.register(r"audit/logs", AuditLogViewSet, basename="audit-logs")
router.register(r"interop/events", FhirEventViewSet, basename="fhir-events")
router.register(r"interop/quality", QualityScoreViewSet, basename="quality-scores")

urlpatterns = [
    # Auth + session bootstrap
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("auth/signup/", SignUpView.as_view(), name="signup"),
    path("session/bootstrap/", SessionBootstrapView.as_view(), name="session-bootstrap"),
    path("routes/authorize/", RouteAuthorizeView.as_view(), name="routes-authorize"),

    # Public registration form (before the router's detail routes)
    path("registrations/submit/", RegistrationSubmitView.as_view(), name="registrations-submit"),

    *router.urls,
]
