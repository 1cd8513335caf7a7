# hie_core/registrations/forms.py
"""
Public registration forms, one DRF serializer per request type.

Field names are the camelCase keys the console submits and are stored
verbatim in RegistrationRequest.data.
"""
from __future__ import annotations

from rest_framework import serializers

from hie_core.facilities.models import FacilityType
from hie_core.registrations.models import RegistrationType


class FacilityRegistrationForm(serializers.Serializer):
    facilityName = serializers.CharField(max_length=255)
    facilityType = serializers.ChoiceField(choices=FacilityType.values)
    lga = serializers.CharField(max_length=128)
    contactName = serializers.CharField(max_length=255)
    contactEmail = serializers.EmailField()

    contactPhone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    address = serializers.CharField(max_length=512, required=False, allow_blank=True)
    registrationNumber = serializers.CharField(max_length=64, required=False, allow_blank=True)


class DeveloperRegistrationForm(serializers.Serializer):
    organizationName = serializers.CharField(max_length=255)
    technicalContactName = serializers.CharField(max_length=255)
    technicalContactEmail = serializers.EmailField()

    emrSystem = serializers.CharField(max_length=128, required=False, allow_blank=True)
    website = serializers.URLField(required=False, allow_blank=True)
    intendedUse = serializers.CharField(max_length=2000, required=False, allow_blank=True)


REGISTRATION_FORMS = {
    RegistrationType.FACILITY: FacilityRegistrationForm,
    RegistrationType.DEVELOPER: DeveloperRegistrationForm,
}
