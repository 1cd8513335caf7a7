import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("facilities", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="FhirEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("resource", models.CharField(max_length=64)),
                ("operation", models.CharField(max_length=16)),
                (
                    "status",
                    models.CharField(
                        choices=[("success", "Success"), ("failed", "Failed"), ("warning", "Warning")],
                        db_index=True,
                        max_length=16,
                    ),
                ),
                ("timestamp", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                (
                    "facility",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="fhir_events",
                        to="facilities.facility",
                    ),
                ),
            ],
            options={
                "db_table": "interop_fhir_event",
                "indexes": [models.Index(fields=["facility", "timestamp"], name="fhir_event_facility_ts_idx")],
            },
        ),
        migrations.CreateModel(
            name="QualityScore",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("score", models.PositiveSmallIntegerField(default=0)),
                (
                    "trend",
                    models.CharField(
                        choices=[("up", "Up"), ("down", "Down"), ("neutral", "Neutral")],
                        default="neutral",
                        max_length=8,
                    ),
                ),
                ("change", models.CharField(blank=True, default="", max_length=16)),
                ("completeness", models.JSONField(default=dict)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "facility",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="quality_score",
                        to="facilities.facility",
                    ),
                ),
            ],
            options={
                "db_table": "interop_quality_score",
            },
        ),
    ]
