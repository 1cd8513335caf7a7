# hie_core/interop/messages.py
"""
Message inspector payloads for the interoperability screen.

These are illustrative samples built from the event row: an HL7 v2 ADT
header, the FHIR resource it maps to, and canned validation findings keyed by
event status. Nothing here parses or validates real messages.
"""
from __future__ import annotations

import json
import re

from hie_core.interop.models import EventStatus, FhirEvent

VALIDATION_MESSAGES = {
    EventStatus.SUCCESS: [],
    EventStatus.FAILED: [
        "Missing required field: Patient.identifier[0].value",
        "Invalid code system for Encounter.class",
    ],
    EventStatus.WARNING: [
        "Coding system not recognized (SNOMED CT expected)",
    ],
}

RECEIVING_APP = "HKIT"
RECEIVING_FACILITY = "KWARA"


def sending_facility_code(event: FhirEvent) -> str:
    name = event.facility.name if event.facility_id else "UNKNOWN"
    return re.sub(r"[^A-Z0-9]", "", name.upper())[:20] or "UNKNOWN"


def raw_hl7_payload(event: FhirEvent) -> str:
    ts = event.timestamp.strftime("%Y%m%d%H%M%S")
    msh = "|".join([
        "MSH",
        "^~\\&",
        "EMR",
        sending_facility_code(event),
        RECEIVING_APP,
        RECEIVING_FACILITY,
        ts,
        "",
        "ADT^A01",
        f"MSG{event.id:04d}",
        "P",
        "2.5",
    ])
    pid = f"PID|1||{event.id}^^^MRN||DOE^JOHN^A||19800101|M|||..."
    return f"{msh}\n{pid}"


def fhir_output(event: FhirEvent) -> str:
    resource = {
        "resourceType": event.resource,
        "id": str(event.id),
        "meta": {"lastUpdated": event.timestamp.isoformat()},
        "status": "active" if event.status == EventStatus.SUCCESS else "draft",
    }
    return json.dumps(resource, indent=2)


def message_details(event: FhirEvent) -> dict:
    return {
        "id": event.id,
        "status": event.status,
        "resource": event.resource,
        "raw_payload": raw_hl7_payload(event),
        "fhir_output": fhir_output(event),
        "validation_errors": list(VALIDATION_MESSAGES.get(event.status, [])),
    }
