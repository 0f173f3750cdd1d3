# listings/slugs.py

import re

from django.conf import settings
from django.utils.text import slugify

# Public property ids are shown to users shifted by this amount
FRONTEND_PROPERTY_ID_OFFSET = 1000
SLUG_MAX_LENGTH = 90
DEFAULT_SLUG = 'property'


def sanitize_slug(value):
    """Lowercase, hyphen-separated, ascii-only slug of at most 90 characters."""
    slug = slugify(str(value or ''))
    slug = re.sub(r'[^a-z0-9-]', '', slug)
    slug = re.sub(r'-{2,}', '-', slug).strip('-')
    slug = slug[:SLUG_MAX_LENGTH].strip('-')
    return slug or DEFAULT_SLUG


def reformatted_slug(property_id, ai_slug, city):
    return sanitize_slug(f"{property_id + FRONTEND_PROPERTY_ID_OFFSET}-{ai_slug}-{city or ''}")


def _slug_part(value):
    part = re.sub(r'[^\w\s-]', '', str(value).lower())
    part = re.sub(r'\s+', '-', part)
    return part.strip('-')


def create_property_slug(property_id, city='', title=''):
    """Slug built from id, city and title, used when a property has none yet."""
    parts = [str(property_id)]
    if city:
        parts.append(_slug_part(city))
    if title:
        parts.append(_slug_part(title))
    return re.sub(r'-+', '-', '-'.join(parts))


def build_property_url(property_id, slug=None, city='', title=''):
    if not slug:
        slug = create_property_slug(property_id, city, title)
    return f"{settings.FRONTEND_URL.rstrip('/')}/services/renting/property/{slug}"
