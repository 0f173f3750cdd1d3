# listings/payloads.py
"""
Shared request-payload handling for every draft entry point.

Save, edit and the step-validation endpoints all go through
``normalize_payload_keys`` and ``prepare_payload`` so the same input always
lands in the same columns.
"""

import json
from decimal import ROUND_HALF_UP, Decimal

from django.http import QueryDict

# API (camelCase) -> column (snake_case)
FIELD_ALIASES = {
    'petsAllowed': 'pets_allowed',
    'smokingAllowed': 'smoking_allowed',
    'furnishedType': 'furnished_type',
    'sharedSpace': 'shared_space',
    'availableFrom': 'available_from',
    'availableTo': 'available_to',
}

# Never written from a payload
EXCLUDED_KEYS = {'id', 'referenceId', 'reference_id', 'user', 'user_id', 'new_images'}

# Columns a payload may set on a draft
DRAFT_FIELDS = {
    'name', 'surname', 'email', 'phone',
    'type', 'city', 'address', 'postcode', 'registration', 'available_from', 'available_to',
    'size', 'rent', 'deposit', 'bills', 'flatmates', 'period', 'description',
    'pets_allowed', 'smoking_allowed', 'furnished_type', 'shared_space',
    'bathrooms', 'toilets', 'amenities', 'images',
}

IMAGE_SEPARATOR = ', '


def to_plain_dict(data):
    """Copy request data into a plain dict. Multipart values are single strings."""
    if isinstance(data, QueryDict):
        plain = {key: data.get(key) for key in data.keys()}
        terms = plain.get('terms')
        if isinstance(terms, str):
            try:
                plain['terms'] = json.loads(terms)
            except ValueError:
                pass
        return plain
    return dict(data or {})


def normalize_payload_keys(data):
    normalized = {}
    for key, value in data.items():
        normalized[FIELD_ALIASES.get(key, key)] = value
    return normalized


def reference_id_from(data):
    return data.get('referenceId') or data.get('reference_id')


def prepare_payload(data):
    """Normalized draft columns from a payload. Nulls and protected keys are dropped."""
    payload = normalize_payload_keys(data)
    return {
        key: value
        for key, value in payload.items()
        if key in DRAFT_FIELDS and key not in EXCLUDED_KEYS and value is not None
    }


def normalize_images(value):
    """Join a list or comma string of URLs into one ``", "``-delimited string."""
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        parts = [str(item) for item in value]
    else:
        parts = str(value).split(',')
    return IMAGE_SEPARATOR.join(part.strip() for part in parts if part.strip())


def round_decimal(value, places=2):
    """Round half up to ``places`` decimals instead of rejecting extra precision."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
