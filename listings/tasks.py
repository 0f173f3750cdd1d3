# listings/tasks.py

import logging

from celery import shared_task

from jobs.base import TrackedTask

from .reformatting import reformat_property_description

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
RETRY_BACKOFF_SECONDS = 60


class PropertyTask(TrackedTask):
    related_entity_type = 'Property'

    def tracking_metadata(self, args, kwargs):
        return {'property_id': self.related_entity_id(args, kwargs)}


@shared_task(
    bind=True,
    base=PropertyTask,
    name='listings.reformat_property_description',
    max_retries=MAX_ATTEMPTS - 1,
    default_retry_delay=RETRY_BACKOFF_SECONDS,
    ignore_result=True,
)
def reformat_property_description_task(self, property_id):
    try:
        reformat_property_description(property_id)
    except Exception as exc:
        logger.warning(
            f"Reformat attempt {self.request.retries + 1} of {MAX_ATTEMPTS} failed for property {property_id}",
            extra={'property_id': property_id, 'error': str(exc)},
        )
        raise self.retry(exc=exc)
    return {'property_id': property_id}


def dispatch_reformat_job(property_id):
    """Queue a reformat for ``property_id`` with a pending tracking row."""
    return reformat_property_description_task.enqueue(property_id)
