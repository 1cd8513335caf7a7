# hie_core/registrations/admin.py
from __future__ import annotations

from django.contrib import admin

from hie_core.registrations.models import RegistrationRequest


@admin.register(RegistrationRequest)
class RegistrationRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "type", "display_title", "status", "submitted_at", "processed_at")
    list_filter = ("type", "status")
    search_fields = ("data",)
    ordering = ("-submitted_at",)

    # decisions go through the approval workflow only
    readonly_fields = (
        "type",
        "data",
        "status",
        "submitted_at",
        "approved_by",
        "processed_at",
        "provisioned_user",
        "facility",
    )

    def has_add_permission(self, request):
        return False
