# hie_core/interop/admin.py
from __future__ import annotations

from django.contrib import admin

from hie_core.interop.models import FhirEvent, QualityScore


@admin.register(FhirEvent)
class FhirEventAdmin(admin.ModelAdmin):
    list_display = ("id", "resource", "operation", "facility", "status", "timestamp")
    list_filter = ("status", "resource", "operation")
    ordering = ("-timestamp",)


@admin.register(QualityScore)
class QualityScoreAdmin(admin.ModelAdmin):
    list_display = ("facility", "score", "trend", "change", "updated_at")
    list_filter = ("trend",)
