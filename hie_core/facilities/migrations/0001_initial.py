import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Facility",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("lga", models.CharField(db_index=True, max_length=128)),
                (
                    "facility_type",
                    models.CharField(
                        choices=[
                            ("Public", "Public"),
                            ("Private", "Private"),
                            ("Faith-based", "Faith-based"),
                            ("Other", "Other"),
                        ],
                        default="Public",
                        max_length=32,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("verified", "Verified"), ("rejected", "Rejected")],
                        db_index=True,
                        default="pending",
                        max_length=16,
                    ),
                ),
                (
                    "compliance",
                    models.PositiveSmallIntegerField(
                        default=0,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                    ),
                ),
                ("administrators", models.PositiveIntegerField(default=0)),
                ("api_activity", models.CharField(blank=True, default="N/A", max_length=64)),
                ("last_sync", models.CharField(blank=True, default="N/A", max_length=64)),
            ],
            options={
                "db_table": "facilities_facility",
                "indexes": [models.Index(fields=["status", "name"], name="facility_status_name_idx")],
            },
        ),
    ]
