# hie_core/common/management/commands/seed_demo_data.py

from datetime import date, datetime

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from hie_core.audit.models import AuditLog
from hie_core.common import cache as query_cache
from hie_core.common.cache import QueryCache
from hie_core.facilities.models import Facility
from hie_core.governance.models import ConsentRecord, MpiRecord
from hie_core.iam.models import Role
from hie_core.iam.services import IdentityService, ProfileService
from hie_core.interop.models import FhirEvent, QualityScore

FACILITIES = [
    # name, lga, type, status, compliance, administrators, api_activity, last_sync
    ("General Hospital Ilorin", "Ilorin West", "Public", "verified", 92, 3, "2.3k req/day", "2 min ago"),
    ("Baptist Medical Centre", "Ilorin South", "Private", "verified", 88, 2, "1.8k req/day", "5 min ago"),
    ("Sobi Specialist Hospital", "Ilorin East", "Public", "verified", 95, 4, "3.1k req/day", "1 min ago"),
    ("Private Clinic Offa", "Offa", "Private", "pending", 0, 0, "N/A", "N/A"),
    ("Community Health Centre", "Asa", "Public", "pending", 0, 0, "N/A", "N/A"),
]

CONSENTS = [
    ("KW2024001234", "Full access", "Baptist Medical Centre", date(2025, 12, 31), "active"),
    ("KW2024001235", "Lab results only", "Private Clinic Offa", date(2025, 6, 30), "active"),
    ("KW2024001236", "Emergency access", "General Hospital Ilorin", None, "revoked"),
]

MPI_RECORDS = [
    ("KW2024001234", "Oluwaseun", "Adebayo", date(1985, 3, 15), "M", "General Hospital Ilorin", True),
    ("KW2024001235", "Aisha", "Mohammed", date(1992, 7, 22), "F", "Baptist Medical Centre", True),
    ("KW2024001236", "Chukwudi", "Okafor", date(1978, 11, 10), "M", "Sobi Specialist Hospital", False),
]

AUDIT_LOGS = [
    ("2024-11-23 14:25:30", "admin@moh.kwara", "FACILITY_APPROVED", "Baptist Medical Centre", "102.89.23.45", "success", "Baptist Medical Centre"),
    ("2024-11-23 14:23:15", "api_key_abc123", "PATIENT_CREATED", "Patient/KW2024001234", "41.203.12.88", "success", None),
    ("2024-11-23 14:20:42", "facility_admin@hospital", "API_KEY_GENERATED", "hkit_prod_xyz789", "197.210.55.10", "success", None),
    ("2024-11-23 14:18:08", "api_key_test456", "OBSERVATION_UPDATE", "Observation/obs-12345", "105.112.45.22", "failed", None),
    ("2024-11-23 14:15:33", "admin@moh.kwara", "CONSENT_REVOKED", "Consent/consent-789", "102.89.23.45", "success", None),
    ("2024-11-23 14:12:51", "api_key_prod999", "ENCOUNTER_CREATED", "Encounter/enc-54321", "197.255.88.99", "success", None),
    ("2024-11-23 14:10:00", "facility_admin@ghilorin", "LOGIN", "General Hospital Ilorin", "192.168.1.1", "success", "General Hospital Ilorin"),
    ("2024-11-23 14:05:00", "api_key_abc123", "PATIENT_CREATED", "General Hospital Ilorin", "41.203.12.88", "success", "General Hospital Ilorin"),
]

FHIR_EVENTS = [
    ("Patient", "CREATE", "General Hospital Ilorin", "success", "2024-11-23 14:23:45"),
    ("Observation", "UPDATE", "Baptist Medical Centre", "success", "2024-11-23 14:23:42"),
    ("Encounter", "CREATE", "Sobi Specialist Hospital", "failed", "2024-11-23 14:23:38"),
    ("MedicationRequest", "CREATE", "General Hospital Ilorin", "success", "2024-11-23 14:23:35"),
    ("Condition", "UPDATE", "Private Clinic Offa", "warning", "2024-11-23 14:23:30"),
]

QUALITY_SCORES = [
    # facility, score, trend, change, completeness
    ("General Hospital Ilorin", 95, "up", "+3%", {"Patient": 98, "Encounter": 95, "Observation": 92, "Medication": 90}),
    ("Baptist Medical Centre", 92, "up", "+1%", {"Patient": 95, "Encounter": 90, "Observation": 88, "Medication": 85}),
    ("Sobi Specialist Hospital", 88, "down", "-2%", {"Patient": 85, "Encounter": 88, "Observation": 91, "Medication": 82}),
    ("Private Clinic Offa", 85, "up", "+5%", {"Patient": 75, "Encounter": 70, "Observation": 78, "Medication": 65}),
    ("Community Health Centre", 78, "down", "-4%", {}),
]


def _ts(raw: str) -> datetime:
    return timezone.make_aware(datetime.strptime(raw, "%Y-%m-%d %H:%M:%S"))


class Command(BaseCommand):
    help = "Load the console's demo facilities, consents, MPI rows, audit entries, FHIR events and scores (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--moh-email", default="", help="Also create an MoH user with this email.")
        parser.add_argument("--moh-password", default="", help="Password for --moh-email.")

    @transaction.atomic
    def handle(self, *args, **options):
        facilities = {}
        for name, lga, ftype, status, compliance, admins, activity, last_sync in FACILITIES:
            f, _ = Facility.objects.update_or_create(
                name=name,
                defaults={
                    "lga": lga,
                    "facility_type": ftype,
                    "status": status,
                    "compliance": compliance,
                    "administrators": admins,
                    "api_activity": activity,
                    "last_sync": last_sync,
                },
            )
            facilities[name] = f

        for patient_id, scope, granted_to, expiry, status in CONSENTS:
            ConsentRecord.objects.update_or_create(
                patient_id=patient_id,
                defaults={
                    "scope": scope,
                    "granted_to": facilities[granted_to],
                    "expiry": expiry,
                    "status": status,
                },
            )

        for shid, first, last, dob, gender, facility, verified in MPI_RECORDS:
            MpiRecord.objects.update_or_create(
                state_health_id=shid,
                defaults={
                    "first_name": first,
                    "last_name": last,
                    "dob": dob,
                    "gender": gender,
                    "facility": facilities[facility],
                    "verified": verified,
                },
            )

        if not AuditLog.objects.exists():
            AuditLog.objects.bulk_create(
                AuditLog(
                    timestamp=_ts(ts),
                    user=user,
                    action=action,
                    resource=resource,
                    ip=ip,
                    status=status,
                    facility=facilities.get(facility) if facility else None,
                )
                for ts, user, action, resource, ip, status, facility in AUDIT_LOGS
            )

        if not FhirEvent.objects.exists():
            FhirEvent.objects.bulk_create(
                FhirEvent(
                    resource=resource,
                    operation=operation,
                    facility=facilities[facility],
                    status=status,
                    timestamp=_ts(ts),
                )
                for resource, operation, facility, status, ts in FHIR_EVENTS
            )

        for facility, score, trend, change, completeness in QUALITY_SCORES:
            QualityScore.objects.update_or_create(
                facility=facilities[facility],
                defaults={"score": score, "trend": trend, "change": change, "completeness": completeness},
            )

        if options["moh_email"]:
            if not options["moh_password"]:
                self.stderr.write("--moh-password is required with --moh-email.")
                return
            user = IdentityService.create_identity(email=options["moh_email"], password=options["moh_password"])
            ProfileService.assign_self_service_role(user_id=user.pk, role=Role.MOH)
            self.stdout.write(f"Created MoH user {user.email}")

        for kind in (
            query_cache.FACILITIES,
            query_cache.CONSENTS,
            query_cache.MPI_RECORDS,
            query_cache.AUDIT_LOGS,
            query_cache.FHIR_EVENTS,
            query_cache.QUALITY_SCORES,
        ):
            QueryCache.invalidate_on_commit(kind)

        self.stdout.write(self.style.SUCCESS(f"Demo data loaded: {len(facilities)} facilities."))
