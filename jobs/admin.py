# jobs/admin.py

from django.contrib import admin

from .models import JobTracking


@admin.register(JobTracking)
class JobTrackingAdmin(admin.ModelAdmin):
    list_display = (
        'job_class',
        'status',
        'related_entity_type',
        'related_entity_id',
        'attempts',
        'created_at',
        'completed_at',
        'failed_at',
    )
    list_filter = ('status', 'job_class', 'created_at')
    search_fields = ('job_id', 'job_class', 'error_message')
    readonly_fields = [field.name for field in JobTracking._meta.fields]
    fieldsets = (
        ("Job", {
            "fields": ("job_id", "job_class", "status", "attempts")
        }),
        ("Related Entity", {
            "fields": ("related_entity_type", "related_entity_id", "metadata")
        }),
        ("Timing", {
            "fields": ("created_at", "started_at", "completed_at", "failed_at", "updated_at")
        }),
        ("Errors", {
            "fields": ("error_message", "error_trace"),
            "classes": ("collapse",)
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
