# hie_core/interop/models.py
from django.db import models
from django.utils import timezone


class EventStatus(models.TextChoices):
    SUCCESS = "success", "Success"
    FAILED = "failed", "Failed"
    WARNING = "warning", "Warning"


class Trend(models.TextChoices):
    UP = "up", "Up"
    DOWN = "down", "Down"
    NEUTRAL = "neutral", "Neutral"


# FHIR resources tracked on the completeness heatmap
COMPLETENESS_RESOURCES = ("Patient", "Encounter", "Observation", "Medication")


class FhirEvent(models.Model):
    """One message seen on the exchange. Display data only; never parsed."""
    resource = models.CharField(max_length=64)  # FHIR resource type
    operation = models.CharField(max_length=16)  # CREATE / UPDATE / ...
    facility = models.ForeignKey(
        "facilities.Facility",
        on_delete=models.SET_NULL,
        related_name="fhir_events",
        null=True,
        blank=True,
    )
    status = models.CharField(max_length=16, choices=EventStatus.choices, db_index=True)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "interop_fhir_event"
        indexes = [
            models.Index(fields=["facility", "timestamp"], name="fhir_event_facility_ts_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.operation} {self.resource} ({self.status})"


class QualityScore(models.Model):
    facility = models.OneToOneField(
        "facilities.Facility",
        on_delete=models.CASCADE,
        related_name="quality_score",
    )
    score = models.PositiveSmallIntegerField(default=0)
    trend = models.CharField(max_length=8, choices=Trend.choices, default=Trend.NEUTRAL)
    change = models.CharField(max_length=16, blank=True, default="")  # "+3%"
    completeness = models.JSONField(default=dict)  # {"Patient": 98, ...}
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "interop_quality_score"

    def __str__(self) -> str:
        return f"{self.facility_id}: {self.score}"
