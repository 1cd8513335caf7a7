# hie_core/registrations/filters.py
from __future__ import annotations

import django_filters

from hie_core.registrations.models import RegistrationRequest, RegistrationStatus, RegistrationType


class RegistrationRequestFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=RegistrationStatus.choices)
    type = django_filters.ChoiceFilter(choices=RegistrationType.choices)

    class Meta:
        model = RegistrationRequest
        fields = ["status", "type"]
