# hie_core/audit/models.py
from django.db import models
from django.utils import timezone


class AuditStatus(models.TextChoices):
    SUCCESS = "success", "Success"
    FAILED = "failed", "Failed"


class AuditLog(models.Model):
    """
    Immutable audit record. Read-only through the API; written by services.

    `user` is a free-form actor label (an email, or an API key id for
    integration traffic), not a foreign key.
    """
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)
    user = models.CharField(max_length=255, db_index=True)
    action = models.CharField(max_length=64, db_index=True)  # e.g. "FACILITY_APPROVED"
    resource = models.CharField(max_length=255)
    ip = models.GenericIPAddressField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=AuditStatus.choices, default=AuditStatus.SUCCESS)

    # Scoping column for facility administrators
    facility = models.ForeignKey(
        "facilities.Facility",
        on_delete=models.SET_NULL,
        related_name="audit_logs",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "audit_audit_log"
        indexes = [
            models.Index(fields=["facility", "timestamp"], name="audit_facility_ts_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.resource} ({self.status})"
