# hie_core/facilities/models.py
from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from hie_core.common.models import TimeStampedModel


class FacilityStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    VERIFIED = "verified", "Verified"
    REJECTED = "rejected", "Rejected"


class FacilityType(models.TextChoices):
    PUBLIC = "Public", "Public"
    PRIVATE = "Private", "Private"
    FAITH_BASED = "Faith-based", "Faith-based"
    OTHER = "Other", "Other"


# Defaults applied when a pending facility is decided.
VERIFIED_COMPLIANCE = 70
VERIFIED_ADMINISTRATORS = 1
REJECTED_COMPLIANCE = 0
REJECTED_ADMINISTRATORS = 0


class Facility(TimeStampedModel):
    """
    A health facility participating in the state HIE.

    Lifecycle: pending -> verified | rejected. Decided facilities never go
    back to pending.
    """

    name = models.CharField(max_length=255)
    lga = models.CharField(max_length=128, db_index=True)  # Local Government Area
    facility_type = models.CharField(
        max_length=32,
        choices=FacilityType.choices,
        default=FacilityType.PUBLIC,
    )

    status = models.CharField(
        max_length=16,
        choices=FacilityStatus.choices,
        default=FacilityStatus.PENDING,
        db_index=True,
    )
    compliance = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    administrators = models.PositiveIntegerField(default=0)

    # Display-only integration telemetry ("2.3k req/day", "2 min ago")
    api_activity = models.CharField(max_length=64, blank=True, default="N/A")
    last_sync = models.CharField(max_length=64, blank=True, default="N/A")

    class Meta:
        db_table = "facilities_facility"
        indexes = [
            models.Index(fields=["status", "name"], name="facility_status_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.lga})"
