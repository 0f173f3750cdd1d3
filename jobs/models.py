# jobs/models.py

from django.db import models

STATUS_PENDING = 'pending'
STATUS_PROCESSING = 'processing'
STATUS_COMPLETED = 'completed'
STATUS_FAILED = 'failed'

JOB_STATUS_CHOICES = [
    (STATUS_PENDING, 'Pending'),
    (STATUS_PROCESSING, 'Processing'),
    (STATUS_COMPLETED, 'Completed'),
    (STATUS_FAILED, 'Failed'),
]

ACTIVE_STATUSES = (STATUS_PENDING, STATUS_PROCESSING)


class JobTracking(models.Model):
    """Audit row for one asynchronous job execution. Never deleted."""

    job_id = models.CharField(max_length=255, blank=True, null=True, db_index=True)
    job_class = models.CharField(max_length=255)
    status = models.CharField(max_length=20, choices=JOB_STATUS_CHOICES, default=STATUS_PENDING)
    related_entity_type = models.CharField(max_length=100, blank=True, null=True)
    related_entity_id = models.PositiveBigIntegerField(blank=True, null=True)
    attempts = models.PositiveIntegerField(default=0)
    error_message = models.TextField(blank=True, null=True)
    error_trace = models.TextField(blank=True, null=True)
    started_at = models.DateTimeField(blank=True, null=True)
    completed_at = models.DateTimeField(blank=True, null=True)
    failed_at = models.DateTimeField(blank=True, null=True)
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.job_class} [{self.status}] {self.related_entity_type or ''}#{self.related_entity_id or ''}"

    class Meta:
        db_table = 'job_tracking'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='job_tracking_status_idx'),
            models.Index(fields=['job_class'], name='job_tracking_class_idx'),
            models.Index(fields=['related_entity_type', 'related_entity_id'], name='job_tracking_entity_idx'),
            models.Index(fields=['created_at'], name='job_tracking_created_idx'),
        ]
        verbose_name = "Job Tracking"
        verbose_name_plural = "Job Tracking"
