# listings/services.py

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.paginator import EmptyPage, Paginator
from django.db import models
from django.db.models import Q
from rest_framework import serializers

from core.exceptions import NotFoundError, UnauthorizedError
from integrations import storage

from .models import ListingApplication
from .payloads import IMAGE_SEPARATOR, normalize_images, prepare_payload, reference_id_from, round_decimal

logger = logging.getLogger(__name__)

IMAGES_FOLDER = 'listing_applications'
DEFAULT_PER_PAGE = 15
MAX_PER_PAGE = 100

# Fields stored as JSON, written as given
JSON_FIELDS = {'bills', 'flatmates', 'period', 'description'}


def resolve_images(existing, files, reference_id=None):
    """
    Existing (possibly reordered) images followed by the URLs of ``files``.

    Uploads keep their order and always come last.
    """
    existing = normalize_images(existing)
    if not files:
        return existing

    folder = f"{IMAGES_FOLDER}/{reference_id}" if reference_id else IMAGES_FOLDER
    uploaded = storage.upload_many(files, folder)
    new_part = IMAGE_SEPARATOR.join(uploaded)
    return f"{existing}{IMAGE_SEPARATOR}{new_part}" if existing else new_part


def _apply_payload(draft, payload):
    errors = {}
    for key, value in payload.items():
        field = ListingApplication._meta.get_field(key)
        if key in JSON_FIELDS:
            setattr(draft, key, value)
            continue
        try:
            value = field.to_python(value)
        except DjangoValidationError as exc:
            errors[key] = exc.messages[0]
            continue
        if isinstance(field, models.DecimalField) and value is not None:
            value = round_decimal(value, field.decimal_places)
        setattr(draft, key, value)
    if errors:
        raise serializers.ValidationError(errors)


def _update_draft(draft, data, files, user=None, step=None):
    payload = prepare_payload(data)

    explicit_images = data.get('images')
    if explicit_images is not None or files:
        # Without an explicit list, uploads are appended to what is stored
        existing = explicit_images if explicit_images is not None else draft.images
        payload['images'] = resolve_images(existing, files, draft.reference_id)

    _apply_payload(draft, payload)

    if user is not None:
        draft.user = user
    if step is not None:
        draft.step = step

    draft.save()
    return draft


def save_draft(data, files=None, user=None, step_override=None):
    """
    Create a draft, or update the one named by ``referenceId``.

    A reference id that matches nothing the caller may touch raises
    NotFoundError; it never creates a new draft. Anonymous callers reach
    unowned drafts only, authenticated callers their own or unowned ones.
    """
    reference_id = reference_id_from(data)

    if reference_id:
        owner_scope = Q(user__isnull=True)
        if user is not None:
            owner_scope |= Q(user=user)
        draft = ListingApplication.objects.filter(owner_scope, reference_id=reference_id).first()
        if draft is None:
            raise NotFoundError('Listing application not found')
        created = False
    else:
        draft = ListingApplication()
        created = True

    draft = _update_draft(draft, data, files, user=user, step=step_override)
    logger.info(
        "Listing application created" if created else "Listing application updated",
        extra={'reference_id': draft.reference_id, 'step': draft.step, 'user_id': getattr(user, 'pk', None)},
    )
    return draft


def show_draft(reference_id, user=None):
    queryset = ListingApplication.objects.filter(reference_id=reference_id)
    if user is not None:
        queryset = queryset.filter(user=user)
    draft = queryset.first()
    if draft is None:
        raise NotFoundError('Listing application not found')
    return draft


def edit_draft(draft_id, data, files=None, user=None):
    """Owner-scoped update by internal id. Same normalization as ``save_draft``."""
    if user is None:
        raise UnauthorizedError('Unauthorized')

    draft = ListingApplication.objects.filter(pk=draft_id, user=user).first() if str(draft_id or '').isdigit() else None
    if draft is None:
        raise NotFoundError('Listing application not found')

    step = data.get('step')
    if step is not None:
        try:
            step = int(step)
        except (TypeError, ValueError):
            raise serializers.ValidationError({'step': 'A valid integer is required.'})
    return _update_draft(draft, data, files, user=user, step=step)


def delete_draft(draft_id, user):
    if user is None:
        raise UnauthorizedError('Unauthorized')
    if not str(draft_id or '').isdigit():
        raise NotFoundError('Listing application not found')

    deleted, _ = ListingApplication.objects.filter(pk=draft_id, user=user).delete()
    if not deleted:
        raise NotFoundError('Listing application not found')
    logger.info("Listing application deleted", extra={'draft_id': draft_id, 'user_id': user.pk})


def filter_drafts(queryset, reference_id=None, city=None, search=None):
    if reference_id:
        queryset = queryset.filter(reference_id__icontains=reference_id.strip())
    if city:
        queryset = queryset.filter(city__icontains=city.strip())
    if search:
        term = search.strip()
        queryset = queryset.filter(
            Q(email__icontains=term)
            | Q(name__icontains=term)
            | Q(surname__icontains=term)
            | Q(address__icontains=term)
        )
    return queryset


def _to_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def list_drafts(params, user=None, scoped=True):
    """
    One page of drafts, newest first.

    ``scoped`` restricts the result to ``user``'s drafts. Returns the page
    envelope {data, current_page, last_page, per_page, total}.
    """
    per_page = max(1, min(MAX_PER_PAGE, _to_int(params.get('per_page'), DEFAULT_PER_PAGE)))
    page_number = max(1, _to_int(params.get('page'), 1))

    queryset = ListingApplication.objects.all()
    if scoped:
        if user is None:
            raise UnauthorizedError('Unauthorized')
        queryset = queryset.filter(user=user)

    queryset = filter_drafts(
        queryset,
        reference_id=reference_id_from(params),
        city=params.get('city'),
        search=params.get('search'),
    ).order_by('-created_at', '-id')

    paginator = Paginator(queryset, per_page)
    try:
        items = list(paginator.page(page_number).object_list)
    except EmptyPage:
        items = []

    return {
        'items': items,
        'current_page': page_number,
        'last_page': max(1, paginator.num_pages),
        'per_page': per_page,
        'total': paginator.count,
    }
