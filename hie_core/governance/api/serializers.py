# hie_core/governance/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from hie_core.governance.models import ConsentRecord, MpiRecord


class ConsentRecordSerializer(serializers.ModelSerializer):
    granted_to = serializers.CharField(source="granted_to.name", read_only=True)
    granted_to_id = serializers.IntegerField(read_only=True)
    expiry = serializers.SerializerMethodField()

    class Meta:
        model = ConsentRecord
        fields = [
            "patient_id",
            "scope",
            "granted_to",
            "granted_to_id",
            "expiry",
            "status",
            "revoked_at",
        ]
        read_only_fields = fields

    def get_expiry(self, obj) -> str:
        return obj.expiry.isoformat() if obj.expiry else "Never"


class MpiRecordSerializer(serializers.ModelSerializer):
    facility = serializers.CharField(source="facility.name", read_only=True)
    facility_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = MpiRecord
        fields = [
            "id",
            "state_health_id",
            "first_name",
            "middle_name",
            "last_name",
            "dob",
            "gender",
            "facility",
            "facility_id",
            "verified",
            "created_at",
        ]
        read_only_fields = fields
