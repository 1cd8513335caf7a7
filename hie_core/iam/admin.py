# hie_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from hie_core.iam.models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "facility", "first_name", "last_name", "created_at")
    list_filter = ("role",)
    search_fields = ("user__username", "user__email", "first_name", "last_name")
    readonly_fields = ("user", "role", "facility", "created_at", "updated_at")
    ordering = ("-created_at",)
