import pytest

from listings.domains import extract_host, requires_terms

DOMAINS = ['localhost', '127.0.0.1', 'domakin.nl', 'https://partner.example.com']


@pytest.mark.parametrize('value, expected', [
    ('https://www.domakin.nl/listing', 'www.domakin.nl'),
    ('http://localhost:3000', 'localhost'),
    ('localhost:3000', 'localhost'),
    ('DOMAKIN.NL', 'domakin.nl'),
    ('', None),
    (None, None),
])
def test_extract_host(value, expected):
    assert extract_host(value) == expected


@pytest.mark.parametrize('origin', [
    'https://domakin.nl',
    'https://www.domakin.nl',
    'https://demo.domakin.nl/some/page',
    'http://localhost:3000',
    'http://127.0.0.1:8000',
    'https://partner.example.com',
])
def test_requires_terms_for_listed_domains(origin):
    assert requires_terms(origin, DOMAINS) is True


@pytest.mark.parametrize('origin', [
    'https://evil-domakin.nl',
    'https://domakin.nl.evil.com',
    'https://example.com',
    None,
    '',
])
def test_terms_optional_for_other_origins(origin):
    assert requires_terms(origin, DOMAINS) is False


def test_empty_domain_list_never_requires_terms():
    assert requires_terms('https://domakin.nl', []) is False
