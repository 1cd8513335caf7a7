# hie_core/registrations/models.py
from django.conf import settings
from django.db import models
from django.utils import timezone

from hie_core.iam.models import Role


class RegistrationType(models.TextChoices):
    FACILITY = "facility", "Facility"
    DEVELOPER = "developer", "Developer"


class RegistrationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"


# Role an approved request provisions.
ROLE_FOR_TYPE = {
    RegistrationType.FACILITY: Role.FACILITY_ADMIN,
    RegistrationType.DEVELOPER: Role.DEVELOPER,
}


class RegistrationRequest(models.Model):
    """
    Public sign-up request awaiting an MoH decision.

    `data` holds the submitted form as-is (camelCase keys). Once a request
    leaves pending it is never modified again.
    """
    type = models.CharField(max_length=16, choices=RegistrationType.choices)
    data = models.JSONField(default=dict)
    status = models.CharField(
        max_length=16,
        choices=RegistrationStatus.choices,
        default=RegistrationStatus.PENDING,
        db_index=True,
    )
    submitted_at = models.DateTimeField(default=timezone.now, db_index=True)

    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="processed_registrations",
        null=True,
        blank=True,
    )
    processed_at = models.DateTimeField(null=True, blank=True)

    # Outcome of a successful approval
    provisioned_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="+",
        null=True,
        blank=True,
    )
    facility = models.ForeignKey(
        "facilities.Facility",
        on_delete=models.SET_NULL,
        related_name="registration_requests",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "registrations_request"
        indexes = [
            models.Index(fields=["status", "submitted_at"], name="registration_status_sub_idx"),
        ]

    @property
    def contact_email(self) -> str:
        key = "contactEmail" if self.type == RegistrationType.FACILITY else "technicalContactEmail"
        return str((self.data or {}).get(key) or "")

    @property
    def contact_name(self) -> str:
        key = "contactName" if self.type == RegistrationType.FACILITY else "technicalContactName"
        return str((self.data or {}).get(key) or "")

    @property
    def display_title(self) -> str:
        key = "facilityName" if self.type == RegistrationType.FACILITY else "organizationName"
        return str((self.data or {}).get(key) or "")

    def __str__(self) -> str:
        return f"{self.type}:{self.display_title} ({self.status})"
