import re

from listings.slugs import (
    build_property_url,
    create_property_slug,
    reformatted_slug,
    sanitize_slug,
)


def test_reformatted_slug_is_clean():
    slug = reformatted_slug(5, 'Cozy Room!! #2', 'Amsterdam')

    assert slug == '1005-cozy-room-2-amsterdam'
    assert re.fullmatch(r'[a-z0-9-]+', slug)
    assert '--' not in slug
    assert len(slug) <= 90


def test_sanitize_slug_truncates_and_trims():
    slug = sanitize_slug('word ' * 40)
    assert len(slug) <= 90
    assert not slug.endswith('-')
    assert not slug.startswith('-')


def test_sanitize_slug_defaults_when_empty():
    assert sanitize_slug('!!!') == 'property'
    assert sanitize_slug(None) == 'property'


def test_sanitize_slug_transliterates_accents():
    assert sanitize_slug('Café Zürich') == 'cafe-zurich'


def test_create_property_slug_from_id_city_title():
    assert create_property_slug(12, 'Den Haag', 'Sunny Studio!') == '12-den-haag-sunny-studio'


def test_build_property_url_uses_slug():
    assert build_property_url(3, slug='my-slug') == 'https://frontend.test/services/renting/property/my-slug'


def test_build_property_url_derives_missing_slug():
    assert build_property_url(3, city='Utrecht', title='Room') == (
        'https://frontend.test/services/renting/property/3-utrecht-room'
    )
