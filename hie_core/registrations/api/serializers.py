# hie_core/registrations/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from hie_core.iam.models import PROVISIONED_ROLES
from hie_core.registrations.models import RegistrationRequest, RegistrationType


class RegistrationRequestSerializer(serializers.ModelSerializer):
    approved_by_id = serializers.IntegerField(read_only=True, allow_null=True)
    provisioned_user_id = serializers.IntegerField(read_only=True, allow_null=True)
    facility_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = RegistrationRequest
        fields = [
            "id",
            "type",
            "data",
            "status",
            "submitted_at",
            "approved_by_id",
            "processed_at",
            "provisioned_user_id",
            "facility_id",
        ]
        read_only_fields = fields


class RegistrationSubmitSerializer(serializers.Serializer):
    """Envelope only; `data` is validated by the per-type form."""
    type = serializers.ChoiceField(choices=RegistrationType.choices)
    data = serializers.DictField()


class RegistrationSubmitResponse(serializers.Serializer):
    id = serializers.IntegerField()
    status = serializers.CharField()
    submitted_at = serializers.DateTimeField()


class ApproveRequestSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False)
    temporary_password = serializers.CharField(required=False, write_only=True, trim_whitespace=False)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=sorted(PROVISIONED_ROLES), required=False)


class ApprovalResultSerializer(serializers.Serializer):
    request_id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    email = serializers.EmailField()
    role = serializers.CharField()
    temporary_password = serializers.CharField()
    facility_id = serializers.IntegerField(allow_null=True)
