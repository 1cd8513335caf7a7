# hie_core/iam/models.py
from django.conf import settings
from django.db import models

from hie_core.common.models import TimeStampedModel


class Role(models.TextChoices):
    MOH = "MoH", "Ministry of Health"
    FACILITY_ADMIN = "FacilityAdmin", "Facility Administrator"
    DEVELOPER = "Developer", "Developer"


# Roles that only the provisioning operation may write.
PROVISIONED_ROLES = frozenset({Role.FACILITY_ADMIN, Role.DEVELOPER})


class Profile(TimeStampedModel):
    """
    Console profile anchored to Django's AUTH_USER_MODEL (same primary key).

    Created with role=NULL by the post_save trigger in iam.signals; a NULL role
    is the valid "pending setup" state until self-service sign-up or the
    registration approval workflow assigns one.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="hie_profile",
    )
    role = models.CharField(max_length=32, choices=Role.choices, null=True, blank=True, db_index=True)

    # Facility binding (FacilityAdmin only)
    facility = models.ForeignKey(
        "facilities.Facility",
        on_delete=models.PROTECT,
        related_name="profiles",
        null=True,
        blank=True,
    )

    first_name = models.CharField(max_length=150, blank=True, default="")
    last_name = models.CharField(max_length=150, blank=True, default="")

    class Meta:
        db_table = "iam_profile"
        indexes = [
            models.Index(fields=["role", "facility"], name="profile_role_facility_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user.email or self.user.username} ({self.role or 'pending'})"
