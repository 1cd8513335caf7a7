# hie_core/interop/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from hie_core.interop.models import FhirEvent


class FhirEventSerializer(serializers.ModelSerializer):
    facility = serializers.SerializerMethodField()
    facility_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = FhirEvent
        fields = ["id", "resource", "operation", "facility", "facility_id", "status", "timestamp"]
        read_only_fields = fields

    def get_facility(self, obj) -> str:
        return obj.facility.name if obj.facility_id else ""


class MessageDetailsSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    status = serializers.CharField()
    resource = serializers.CharField()
    raw_payload = serializers.CharField()
    fhir_output = serializers.CharField()
    validation_errors = serializers.ListField(child=serializers.CharField())


class QualityScoreSerializer(serializers.Serializer):
    facility_id = serializers.IntegerField()
    facility = serializers.CharField()
    score = serializers.IntegerField()
    trend = serializers.CharField()
    change = serializers.CharField()
    completeness = serializers.DictField(child=serializers.IntegerField())
    below_threshold = serializers.BooleanField()
    incomplete_resources = serializers.ListField(child=serializers.CharField())
