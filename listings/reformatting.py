# listings/reformatting.py

import logging

from django.conf import settings
from django.db import transaction

from core.exceptions import ReformatError
from core.results import best_effort
from integrations import openai_service
from integrations.github_actions import trigger_update_sitemap

from .locales import dumps_localized, english_text, loads_localized
from .models import Property, PropertyData
from .slugs import build_property_url, reformatted_slug

logger = logging.getLogger(__name__)


def supported_languages():
    languages = list(settings.SUPPORTED_LOCALES)
    if 'en' not in languages:
        languages.append('en')
    return languages


def load_property(property_id):
    try:
        property_obj = Property.objects.select_related('property_data').get(pk=property_id)
        property_data = property_obj.property_data
    except (Property.DoesNotExist, PropertyData.DoesNotExist):
        raise ReformatError(f"Property or PropertyData not found for ID: {property_id}")
    return property_obj, property_data


def apply_result(property_obj, property_data, result):
    """Write the AI answer onto the rows. Slug and link are derived here."""
    property_data.description = dumps_localized(result['description'])
    property_data.title = dumps_localized(result['title'])
    for field in ('flatmates', 'period'):
        if isinstance(result.get(field), dict):
            setattr(property_data, field, dumps_localized(result[field]))

    property_obj.slug = reformatted_slug(property_obj.pk, result.get('slug') or '', property_data.city)
    property_obj.link = build_property_url(
        property_obj.pk,
        slug=property_obj.slug,
        city=property_data.city,
        title=loads_localized(property_data.title).get('en', ''),
    )


def reformat_property_description(property_id):
    """
    Regenerate description, title, flatmates and period translations plus the slug.

    Raises on any failure so the queue can retry. The sitemap rebuild after a
    successful save is best-effort.
    """
    try:
        property_obj, property_data = load_property(property_id)

        description = english_text(property_data.description)
        if not description.strip():
            raise ReformatError(f"No English description found for property ID: {property_id}")

        flatmates = english_text(property_data.flatmates) or None
        period = english_text(property_data.period) or None

        result = openai_service.reformat_and_translate(
            description,
            supported_languages(),
            flatmates=flatmates,
            period=period,
        )

        apply_result(property_obj, property_data, result)
        with transaction.atomic():
            property_data.save()
            property_obj.save()
    except Exception as exc:
        logger.error(
            f"Failed to reformat property description for property ID: {property_id}",
            extra={'property_id': property_id, 'error': str(exc)},
            exc_info=True,
        )
        raise

    logger.info(
        "Property description reformatted",
        extra={'property_id': property_id, 'slug': property_obj.slug},
    )
    best_effort(trigger_update_sitemap, description='Sitemap rebuild', context={'property_id': property_id})
    return property_obj
