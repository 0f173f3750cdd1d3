# jobs/signals.py

import logging

from celery.signals import task_failure, task_prerun, task_retry, task_success

from . import tracking
from .base import TrackedTask

logger = logging.getLogger(__name__)


def _identity(task, args=None, kwargs=None):
    request = task.request
    args = args if args is not None else (request.args or ())
    kwargs = kwargs if kwargs is not None else (request.kwargs or {})
    return (
        request.id,
        task.job_class,
        task.related_entity_type,
        task.related_entity_id(args, kwargs),
    )


def _trace(einfo):
    return str(einfo.traceback) if einfo is not None else None


@task_prerun.connect
def on_task_prerun(sender=None, task_id=None, task=None, args=None, kwargs=None, **extra):
    if not isinstance(task, TrackedTask):
        return
    job_id, job_class, entity_type, entity_id = _identity(task, args, kwargs)
    tracking.mark_processing(task_id or job_id, job_class, entity_type, entity_id)


@task_success.connect
def on_task_success(sender=None, result=None, **extra):
    if not isinstance(sender, TrackedTask):
        return
    tracking.mark_completed(*_identity(sender))


@task_retry.connect
def on_task_retry(sender=None, request=None, reason=None, einfo=None, **extra):
    if not isinstance(sender, TrackedTask):
        return
    args = getattr(request, 'args', None) or ()
    kwargs = getattr(request, 'kwargs', None) or {}
    tracking.record_exception(
        getattr(request, 'id', None) or sender.request.id,
        sender.job_class,
        sender.related_entity_type,
        sender.related_entity_id(args, kwargs),
        error_message=str(reason),
        error_trace=_trace(einfo),
    )


@task_failure.connect
def on_task_failure(sender=None, task_id=None, exception=None, args=None, kwargs=None, einfo=None, **extra):
    if not isinstance(sender, TrackedTask):
        return
    job_id, job_class, entity_type, entity_id = _identity(sender, args, kwargs)
    tracking.mark_failed(
        task_id or job_id, job_class, entity_type, entity_id,
        error_message=str(exception),
        error_trace=_trace(einfo),
    )
    logger.error(
        f"Job {job_class} failed permanently: {exception}",
        extra={'job_id': task_id or job_id, 'related_entity_id': entity_id},
    )
