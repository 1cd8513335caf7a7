# hie_core/audit/admin.py
from __future__ import annotations

from django.contrib import admin

from hie_core.audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "user", "action", "resource", "status", "ip")
    list_filter = ("status", "action")
    search_fields = ("user", "resource")
    ordering = ("-timestamp",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
