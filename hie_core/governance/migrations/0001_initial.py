import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("facilities", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ConsentRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("patient_id", models.CharField(max_length=32, unique=True)),
                ("scope", models.CharField(max_length=128)),
                ("expiry", models.DateField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("revoked", "Revoked")],
                        db_index=True,
                        default="active",
                        max_length=16,
                    ),
                ),
                ("revoked_at", models.DateTimeField(blank=True, null=True)),
                ("revoked_by", models.CharField(blank=True, default="", max_length=255)),
                (
                    "granted_to",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="consents",
                        to="facilities.facility",
                    ),
                ),
            ],
            options={
                "db_table": "governance_consent",
                "indexes": [models.Index(fields=["granted_to", "status"], name="consent_facility_status_idx")],
            },
        ),
        migrations.CreateModel(
            name="MpiRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("state_health_id", models.CharField(max_length=32, unique=True)),
                ("first_name", models.CharField(max_length=150)),
                ("middle_name", models.CharField(blank=True, default="", max_length=150)),
                ("last_name", models.CharField(max_length=150)),
                ("dob", models.DateField(blank=True, null=True)),
                (
                    "gender",
                    models.CharField(
                        choices=[("M", "Male"), ("F", "Female"), ("O", "Other"), ("U", "Unknown")],
                        default="U",
                        max_length=1,
                    ),
                ),
                ("verified", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "facility",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="mpi_records",
                        to="facilities.facility",
                    ),
                ),
            ],
            options={
                "db_table": "governance_mpi_record",
                "indexes": [models.Index(fields=["facility", "created_at"], name="mpi_facility_created_idx")],
            },
        ),
    ]
