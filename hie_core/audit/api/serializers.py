# hie_core/audit/api/serializers.py
from rest_framework import serializers

from hie_core.audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    facility_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = AuditLog
        fields = [
            "id",
            "timestamp",
            "user",
            "action",
            "resource",
            "ip",
            "status",
            "facility_id",
        ]
        read_only_fields = fields
