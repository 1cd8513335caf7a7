# hie_core/governance/admin.py
from __future__ import annotations

from django.contrib import admin

from hie_core.governance.models import ConsentRecord, MpiRecord


@admin.register(ConsentRecord)
class ConsentRecordAdmin(admin.ModelAdmin):
    list_display = ("patient_id", "scope", "granted_to", "expiry", "status", "revoked_at")
    list_filter = ("status",)
    search_fields = ("patient_id", "granted_to__name")
    readonly_fields = ("status", "revoked_at", "revoked_by")


@admin.register(MpiRecord)
class MpiRecordAdmin(admin.ModelAdmin):
    list_display = ("state_health_id", "last_name", "first_name", "gender", "facility", "verified", "created_at")
    list_filter = ("verified", "gender")
    search_fields = ("state_health_id", "last_name", "first_name")
    ordering = ("-created_at",)
