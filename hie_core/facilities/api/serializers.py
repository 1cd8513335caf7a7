# hie_core/facilities/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from hie_core.facilities.models import Facility, FacilityStatus


class FacilitySerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="facility_type", read_only=True)

    class Meta:
        model = Facility
        fields = [
            "id",
            "name",
            "lga",
            "type",
            "status",
            "compliance",
            "administrators",
            "api_activity",
            "last_sync",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class FacilityStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[FacilityStatus.VERIFIED, FacilityStatus.REJECTED],
    )
