# hie_core/governance/models.py
from django.db import models


class ConsentStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    REVOKED = "revoked", "Revoked"


class Gender(models.TextChoices):
    MALE = "M", "Male"
    FEMALE = "F", "Female"
    OTHER = "O", "Other"
    UNKNOWN = "U", "Unknown"


class ConsentRecord(models.Model):
    """
    A patient's data-sharing consent granted to one facility.
    active -> revoked only; a NULL expiry means the consent never expires.
    """
    patient_id = models.CharField(max_length=32, unique=True)  # State Health ID
    scope = models.CharField(max_length=128)
    granted_to = models.ForeignKey(
        "facilities.Facility",
        on_delete=models.PROTECT,
        related_name="consents",
    )
    expiry = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=16,
        choices=ConsentStatus.choices,
        default=ConsentStatus.ACTIVE,
        db_index=True,
    )
    revoked_at = models.DateTimeField(null=True, blank=True)
    revoked_by = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "governance_consent"
        indexes = [
            models.Index(fields=["granted_to", "status"], name="consent_facility_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.patient_id} -> {self.granted_to_id} ({self.status})"


class MpiRecord(models.Model):
    """Master Patient Index entry (read-only through the API)."""
    state_health_id = models.CharField(max_length=32, unique=True)
    first_name = models.CharField(max_length=150)
    middle_name = models.CharField(max_length=150, blank=True, default="")
    last_name = models.CharField(max_length=150)
    dob = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=1, choices=Gender.choices, default=Gender.UNKNOWN)
    facility = models.ForeignKey(
        "facilities.Facility",
        on_delete=models.PROTECT,
        related_name="mpi_records",
    )
    verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "governance_mpi_record"
        indexes = [
            models.Index(fields=["facility", "created_at"], name="mpi_facility_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.state_health_id} {self.last_name}, {self.first_name}"
