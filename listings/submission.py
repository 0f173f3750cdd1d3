# listings/submission.py
"""
Turns a finished listing application into a permanent property.

Property, PersonalData and PropertyData are written and the draft is deleted
inside one transaction. The draft row is locked for the duration, so a
second submit for the same reference id waits and then finds nothing.
"""

import logging
import time

from django.conf import settings
from django.db import DatabaseError, OperationalError, transaction
from django.utils import timezone
from rest_framework import serializers

from core.exceptions import ApiError, NotFoundError, SubmissionError, UnauthorizedError
from core.results import best_effort
from integrations.payment_links import create_property_fee_link

from .locales import dumps_localized, english_text, wrap_locales
from .models import ListingApplication, PersonalData, Property, PropertyData
from .payloads import normalize_images
from .tasks import dispatch_reformat_job

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Available room'
WEB_INTERFACE = 'web'
FOLDER_PREFIX_LENGTH = 10
ABORTED_TRANSACTION_MARKERS = ('25P02', 'aborted')
ABORTED_TRANSACTION_HINT = (
    'A database error occurred during submit. Please check that all required fields are filled. Original: '
)
# Row-lock waits and SQLite table locks; the losing submit retries
LOCK_CONTENTION_MARKERS = ('database is locked', 'database table is locked', 'could not obtain lock', 'deadlock detected')
LOCK_RETRY_ATTEMPTS = 5
LOCK_RETRY_DELAY = 0.1

LOCALIZED_FIELDS = ('title', 'period', 'bills', 'flatmates', 'description')


def build_folder(description, now):
    prefix = english_text(description)[:FOLDER_PREFIX_LENGTH]
    return f"{prefix}|{now:%Y-%m-%d %H:%M:%S}"


def derive_period(draft):
    if draft.period not in (None, '', {}):
        return draft.period
    available_from = draft.available_from or ''
    available_to = draft.available_to or ''
    return f"{available_from} - {available_to}"


def build_property_data(draft, locales, now):
    """Column values for PropertyData, localized fields already JSON-encoded."""
    data = {
        'city': draft.city or '',
        'address': draft.address or '',
        'postcode': draft.postcode or '',
        'size': draft.size or '',
        'rent': draft.rent,
        'deposit': draft.deposit,
        'registration': bool(draft.registration),
        'title': DEFAULT_TITLE,
        'period': derive_period(draft),
        'bills': draft.bills if draft.bills is not None else '',
        'flatmates': draft.flatmates if draft.flatmates is not None else '',
        'description': draft.description if draft.description is not None else '',
        'images': normalize_images(draft.images),
        'folder': build_folder(draft.description, now),
        'pets_allowed': bool(draft.pets_allowed),
        'smoking_allowed': bool(draft.smoking_allowed),
        'type': draft.type,
        'furnished_type': draft.furnished_type,
        'shared_space': draft.shared_space,
        'bathrooms': draft.bathrooms,
        'toilets': draft.toilets,
        'amenities': draft.amenities,
        'available_from': draft.available_from,
        'available_to': draft.available_to,
    }
    for key in LOCALIZED_FIELDS:
        data[key] = dumps_localized(wrap_locales(data[key], locales))
    return data


def request_payment_link(property_obj, rent, images):
    """Best-effort payment link for one month of rent. None when skipped or failed."""
    if rent is None or rent <= 0 or not images:
        return None
    main_image = images.split(',')[0].strip()
    if not main_image:
        return None

    outcome = best_effort(
        create_property_fee_link,
        rent,
        image_url=main_image,
        metadata={'property_id': property_obj.pk},
        description='Payment link creation',
        level=logging.ERROR,
        context={'property_id': property_obj.pk, 'amount': str(rent)},
    )
    return outcome.value


def _convert(draft, user, locales):
    now = timezone.now()
    property_data = build_property_data(draft, locales, now)

    property_obj = Property.objects.create(
        created_by=user,
        last_updated_by=user,
        interface=WEB_INTERFACE,
    )
    PersonalData.objects.create(
        property=property_obj,
        name=draft.name or '',
        surname=draft.surname or '',
        email=draft.email or '',
        phone=draft.phone or '',
    )

    payment_link = request_payment_link(property_obj, draft.rent, property_data['images'])
    PropertyData.objects.create(property=property_obj, payment_link=payment_link, **property_data)

    draft.delete()
    return property_obj


def _user_message(exc):
    message = str(exc)
    if any(marker in message for marker in ABORTED_TRANSACTION_MARKERS):
        return ABORTED_TRANSACTION_HINT + message
    return message


def _is_lock_contention(exc):
    message = str(exc).lower()
    return any(marker in message for marker in LOCK_CONTENTION_MARKERS)


def _submit_once(reference_id, user, locales):
    with transaction.atomic():
        draft = (
            ListingApplication.objects
            .select_for_update()
            .filter(reference_id=reference_id, user=user)
            .first()
        )
        if draft is None:
            raise NotFoundError('Listing application not found')

        property_obj = _convert(draft, user, locales)
        transaction.on_commit(lambda: _dispatch_reformat(property_obj.pk))
    return property_obj


def _submission_failed(exc, reference_id, user, message):
    logger.error(
        f"Listing application submit failed: {exc}",
        extra={'reference_id': reference_id, 'user_id': user.pk},
        exc_info=True,
    )
    return SubmissionError(message, original=exc)


def submit_listing_application(reference_id, user, locales=None):
    """
    Convert the caller's draft into a Property. All or nothing, once per draft.

    A submit that loses a lock race is retried; by then the draft is gone and
    the caller gets NotFoundError.
    """
    if user is None:
        raise UnauthorizedError('Unauthorized')
    if not reference_id:
        raise serializers.ValidationError({'referenceId': 'This field is required.'})

    locales = list(locales or settings.SUPPORTED_LOCALES)

    for attempt in range(1, LOCK_RETRY_ATTEMPTS + 1):
        try:
            property_obj = _submit_once(reference_id, user, locales)
            break
        except ApiError:
            raise
        except OperationalError as exc:
            if not _is_lock_contention(exc) or attempt == LOCK_RETRY_ATTEMPTS:
                raise _submission_failed(exc, reference_id, user, _user_message(exc)) from exc
            logger.warning(
                f"Listing application submit hit a locked draft, retrying (attempt {attempt})",
                extra={'reference_id': reference_id, 'user_id': user.pk, 'error': str(exc)},
            )
            time.sleep(LOCK_RETRY_DELAY * attempt)
        except DatabaseError as exc:
            raise _submission_failed(exc, reference_id, user, _user_message(exc)) from exc
        except Exception as exc:
            raise _submission_failed(exc, reference_id, user, str(exc)) from exc

    logger.info(
        "Listing application submitted",
        extra={'reference_id': reference_id, 'property_id': property_obj.pk, 'user_id': user.pk},
    )
    return property_obj


def _dispatch_reformat(property_id):
    best_effort(
        dispatch_reformat_job,
        property_id,
        description='Reformat job dispatch',
        context={'property_id': property_id},
    )
