# jobs/base.py

import logging
import uuid

from celery import Task

from . import tracking

logger = logging.getLogger(__name__)


class TrackedTask(Task):
    """
    Celery task whose lifecycle is mirrored into JobTracking.

    ``enqueue`` registers the pending row before the message is sent and marks
    it failed when the message cannot be published. The signal receivers in
    ``jobs.signals`` move it through the remaining states.
    The first positional argument is taken as the related entity id.
    """

    related_entity_type = None

    @property
    def job_class(self):
        return self.name

    def related_entity_id(self, args, kwargs):
        if args:
            return args[0]
        return None

    def tracking_metadata(self, args, kwargs):
        return {}

    def enqueue(self, *args, **kwargs):
        task_id = str(uuid.uuid4())
        tracking.register_pending(
            self.job_class,
            entity_type=self.related_entity_type,
            entity_id=self.related_entity_id(args, kwargs),
            job_id=task_id,
            metadata=self.tracking_metadata(args, kwargs),
        )
        try:
            result = self.apply_async(args=args, kwargs=kwargs, task_id=task_id)
        except Exception as exc:
            tracking.mark_failed(
                task_id,
                self.job_class,
                self.related_entity_type,
                self.related_entity_id(args, kwargs),
                error_message=f"Could not enqueue job: {exc}",
            )
            raise
        logger.info("Enqueued tracked job", extra={'job_class': self.job_class, 'job_id': task_id})
        return result
