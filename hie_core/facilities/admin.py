# hie_core/facilities/admin.py
from __future__ import annotations

from django.contrib import admin

from hie_core.facilities.models import Facility


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    list_display = ("name", "lga", "facility_type", "status", "compliance", "administrators", "updated_at")
    list_filter = ("status", "facility_type", "lga")
    search_fields = ("name", "lga")
    readonly_fields = ("id", "created_at", "updated_at")
    ordering = ("name",)
