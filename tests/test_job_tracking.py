from unittest.mock import patch

import pytest
from freezegun import freeze_time

from jobs import tracking
from jobs.models import JobTracking

pytestmark = pytest.mark.django_db

JOB = 'listings.reformat_property_description'


def register(job_id='task-1', entity_id=7):
    return tracking.register_pending(JOB, 'Property', entity_id, job_id=job_id, metadata={'property_id': entity_id})


def test_register_pending():
    row = register()

    assert row.status == 'pending'
    assert row.attempts == 0
    assert row.metadata == {'property_id': 7}
    assert row.related_entity_type == 'Property'


@freeze_time('2026-10-19 10:00:00')
def test_processing_increments_attempts_and_stamps_start():
    register()
    row = tracking.mark_processing('task-1', JOB, 'Property', 7)

    assert row.status == 'processing'
    assert row.attempts == 1
    assert row.started_at.isoformat().startswith('2026-10-19T10:00:00')


def test_fails_twice_then_succeeds():
    register()
    seen = []

    for _ in range(2):
        seen.append(tracking.mark_processing('task-1', JOB, 'Property', 7).status)
        tracking.record_exception('task-1', JOB, 'Property', 7, error_message='timeout', error_trace='...')
        seen.append(JobTracking.objects.get(job_id='task-1').status)

    tracking.mark_processing('task-1', JOB, 'Property', 7)
    tracking.mark_completed('task-1', JOB, 'Property', 7)

    row = JobTracking.objects.get(job_id='task-1')
    assert 'completed' not in seen
    assert row.status == 'completed'
    assert row.attempts == 3
    assert row.completed_at is not None
    assert JobTracking.objects.count() == 1


def test_exception_only_updates_error_fields():
    register()
    tracking.mark_processing('task-1', JOB, 'Property', 7)
    row = tracking.record_exception('task-1', JOB, 'Property', 7, error_message='boom', error_trace='trace')

    assert row.status == 'processing'
    assert row.error_message == 'boom'
    assert row.error_trace == 'trace'


def test_processing_without_row_backfills_one():
    row = tracking.mark_processing('task-9', JOB, 'Property', 3)

    assert row.status == 'processing'
    assert row.attempts == 1
    assert row.job_id == 'task-9'


def test_processing_finds_active_row_by_entity_when_job_id_unknown():
    register(job_id=None)
    row = tracking.mark_processing('task-2', JOB, 'Property', 7)

    assert JobTracking.objects.count() == 1
    assert row.job_id == 'task-2'
    assert row.attempts == 1


def test_failure_records_error():
    register()
    tracking.mark_processing('task-1', JOB, 'Property', 7)
    row = tracking.mark_failed('task-1', JOB, 'Property', 7, error_message='AI down', error_trace='tb')

    assert row.status == 'failed'
    assert row.failed_at is not None
    assert row.error_message == 'AI down'


def test_failure_without_row_creates_failed_row():
    row = tracking.mark_failed('task-5', JOB, 'Property', 1, error_message='lost')

    assert row.status == 'failed'
    assert row.error_message == 'lost'


def test_completed_is_final():
    register()
    tracking.mark_processing('task-1', JOB, 'Property', 7)
    tracking.mark_completed('task-1', JOB, 'Property', 7)

    tracking.mark_processing('task-1', JOB, 'Property', 7)
    tracking.mark_failed('task-1', JOB, 'Property', 7, error_message='late')
    tracking.record_exception('task-1', JOB, 'Property', 7, error_message='late')

    row = JobTracking.objects.get(job_id='task-1')
    assert row.status == 'completed'
    assert row.attempts == 1
    assert row.error_message is None


def test_tracking_write_failures_are_swallowed():
    with patch('jobs.tracking.JobTracking.objects.create', side_effect=RuntimeError('db gone')):
        assert tracking.register_pending(JOB, 'Property', 1, job_id='x') is None
