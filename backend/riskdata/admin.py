from django.contrib import admin

from .models import PointRecord, RiskRecord


@admin.register(RiskRecord)
class RiskRecordAdmin(admin.ModelAdmin):
    list_display = ("hotspot", "metric_name", "risk_score", "risk_level", "phase", "created_at")
    list_filter = ("hotspot", "risk_level")
    search_fields = ("hotspot", "metric_name", "location")


@admin.register(PointRecord)
class PointRecordAdmin(admin.ModelAdmin):
    list_display = ("x", "y", "created_at")
