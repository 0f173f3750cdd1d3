# jobs/tracking.py
"""
Lifecycle bookkeeping for asynchronous jobs.

pending -> processing -> completed | failed. A retry moves a row back to
processing and bumps ``attempts``. Completed rows are never touched again.

Every public function is best-effort: a failed tracking write is logged and
``None`` is returned, so the job being tracked is never affected.
"""

import logging

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from core.results import best_effort

from .models import (
    ACTIVE_STATUSES,
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PENDING,
    STATUS_PROCESSING,
    JobTracking,
)

logger = logging.getLogger(__name__)


def _find(job_id, job_class, entity_type, entity_id):
    """Row for this job: by queue id first, then the active row for the entity."""
    if job_id:
        row = JobTracking.objects.filter(job_id=job_id).order_by('-created_at').first()
        if row is not None:
            return row

    lookup = Q(job_class=job_class, status__in=ACTIVE_STATUSES)
    if entity_type is not None:
        lookup &= Q(related_entity_type=entity_type, related_entity_id=entity_id)
    return JobTracking.objects.filter(lookup).order_by('-created_at').first()


@transaction.atomic
def _register_pending(job_class, entity_type, entity_id, job_id, metadata):
    return JobTracking.objects.create(
        job_id=job_id,
        job_class=job_class,
        status=STATUS_PENDING,
        related_entity_type=entity_type,
        related_entity_id=entity_id,
        attempts=0,
        metadata=metadata or {},
    )


@transaction.atomic
def _mark_processing(job_id, job_class, entity_type, entity_id):
    now = timezone.now()
    row = _find(job_id, job_class, entity_type, entity_id)

    if row is None:
        logger.info(
            "No tracking row found at processing start, creating one",
            extra={'job_id': job_id, 'job_class': job_class, 'related_entity_id': entity_id},
        )
        return JobTracking.objects.create(
            job_id=job_id,
            job_class=job_class,
            status=STATUS_PROCESSING,
            related_entity_type=entity_type,
            related_entity_id=entity_id,
            attempts=1,
            started_at=now,
        )

    if row.status == STATUS_COMPLETED:
        logger.warning("Ignoring processing event for a completed job", extra={'tracking_id': row.pk})
        return row

    row.status = STATUS_PROCESSING
    row.attempts += 1
    row.started_at = now
    if job_id and not row.job_id:
        row.job_id = job_id
    row.save(update_fields=['status', 'attempts', 'started_at', 'job_id', 'updated_at'])
    return row


@transaction.atomic
def _mark_completed(job_id, job_class, entity_type, entity_id):
    row = _find(job_id, job_class, entity_type, entity_id)
    if row is None:
        logger.warning(
            "No tracking row found for completed job",
            extra={'job_id': job_id, 'job_class': job_class, 'related_entity_id': entity_id},
        )
        return None
    if row.status == STATUS_COMPLETED:
        return row

    row.status = STATUS_COMPLETED
    row.completed_at = timezone.now()
    row.save(update_fields=['status', 'completed_at', 'updated_at'])
    return row


@transaction.atomic
def _mark_failed(job_id, job_class, entity_type, entity_id, error_message, error_trace):
    now = timezone.now()
    row = _find(job_id, job_class, entity_type, entity_id)

    if row is None:
        return JobTracking.objects.create(
            job_id=job_id,
            job_class=job_class,
            status=STATUS_FAILED,
            related_entity_type=entity_type,
            related_entity_id=entity_id,
            attempts=1,
            error_message=error_message,
            error_trace=error_trace,
            failed_at=now,
        )
    if row.status == STATUS_COMPLETED:
        logger.warning("Ignoring failure event for a completed job", extra={'tracking_id': row.pk})
        return row

    row.status = STATUS_FAILED
    row.failed_at = now
    row.error_message = error_message
    row.error_trace = error_trace
    row.save(update_fields=['status', 'failed_at', 'error_message', 'error_trace', 'updated_at'])
    return row


@transaction.atomic
def _record_exception(job_id, job_class, entity_type, entity_id, error_message, error_trace):
    row = _find(job_id, job_class, entity_type, entity_id)
    if row is None or row.status == STATUS_COMPLETED:
        return row

    row.error_message = error_message
    row.error_trace = error_trace
    row.save(update_fields=['error_message', 'error_trace', 'updated_at'])
    return row


def register_pending(job_class, entity_type=None, entity_id=None, job_id=None, metadata=None):
    return best_effort(
        _register_pending, job_class, entity_type, entity_id, job_id, metadata,
        description='Job tracking: register pending',
        context={'job_class': job_class, 'job_id': job_id},
    ).value


def mark_processing(job_id, job_class, entity_type=None, entity_id=None):
    return best_effort(
        _mark_processing, job_id, job_class, entity_type, entity_id,
        description='Job tracking: mark processing',
        context={'job_class': job_class, 'job_id': job_id},
    ).value


def mark_completed(job_id, job_class, entity_type=None, entity_id=None):
    return best_effort(
        _mark_completed, job_id, job_class, entity_type, entity_id,
        description='Job tracking: mark completed',
        context={'job_class': job_class, 'job_id': job_id},
    ).value


def mark_failed(job_id, job_class, entity_type=None, entity_id=None, error_message=None, error_trace=None):
    return best_effort(
        _mark_failed, job_id, job_class, entity_type, entity_id, error_message, error_trace,
        description='Job tracking: mark failed',
        context={'job_class': job_class, 'job_id': job_id},
    ).value


def record_exception(job_id, job_class, entity_type=None, entity_id=None, error_message=None, error_trace=None):
    return best_effort(
        _record_exception, job_id, job_class, entity_type, entity_id, error_message, error_trace,
        description='Job tracking: record exception',
        context={'job_class': job_class, 'job_id': job_id},
    ).value
