# integrations/openai_service.py

import json
import logging

from django.conf import settings

from core.exceptions import IntegrationError
from listings.slugs import sanitize_slug

from .http import call_service

logger = logging.getLogger(__name__)

API_ENDPOINT = 'https://api.openai.com/v1/chat/completions'
SLUG_MAX_LENGTH = 90
DEFAULT_SLUG_SOURCE = 'available-room'

SYSTEM_PROMPT = (
    "You are a professional real estate content writer specializing in creating structured, "
    "professional, and neutral property descriptions for rooms and apartments. "
    "You provide accurate translations and SEO-optimized titles."
)


def build_prompt(description, languages, flatmates=None, period=None):
    languages_list = ', '.join(languages)
    language_codes = '", "'.join(languages)

    extra_sections = []
    extra_structure = []
    if flatmates:
        extra_sections.append(f"Flatmates (in English):\n{flatmates}")
        extra_structure.append(f'  "flatmates": {{"{language_codes}": "translated flatmates text for each language"}},')
    if period:
        extra_sections.append(f"Rental period (in English):\n{period}")
        extra_structure.append(f'  "period": {{"{language_codes}": "translated period for each language"}},')

    extras = '\n\n'.join(extra_sections)
    structure = '\n'.join(extra_structure)

    return f"""You are a professional real estate content writer. Please reformat and translate the following property description.

Original description (in English):
{description}

{extras}

Requirements:
1. Reformulate the description to be structured, professional, neutral, clear and suitable for room and apartment listings. Keep it engaging but not overly promotional.
2. Create translations for the following languages: {languages_list}
3. Generate a brief, SEO-optimized title (maximum 6 words) describing the property, translated to all requested languages.
4. Generate a URL-friendly slug (English only) based on the English title: under 70 characters, lowercase, hyphens instead of spaces, only alphanumeric characters and hyphens. Do not include the property id, the city or any sensitive information.
5. If flatmates or rental period text was given, translate it to all requested languages without adding information.

Please return a JSON object with the following structure:
{{
  "description": {{"{language_codes}": "translated description for each language"}},
  "title": {{"{language_codes}": "translated title for each language (max 5 words each)"}},
{structure}
  "slug": "url-friendly-slug-in-english-under-90-chars"
}}

Ensure all translations are accurate, culturally appropriate, and keep the professional tone. The English version should be the reformatted, improved version of the original description."""


def reformat_and_translate(description, languages, flatmates=None, period=None):
    """
    Ask the chat completions API for a reformatted description plus translations.

    Returns {'description': {...}, 'title': {...}, 'slug': str} and, when they
    were sent and returned as objects, 'flatmates' and 'period' maps.
    """
    api_key = settings.OPENAI_API_KEY
    if not api_key:
        raise IntegrationError('openai', 'OpenAI API key is not configured')
    if not description:
        raise IntegrationError('openai', 'Description cannot be empty')

    languages = list(languages or [])
    if 'en' not in languages:
        languages.append('en')

    body = {
        'model': settings.OPENAI_MODEL,
        'messages': [
            {'role': 'system', 'content': SYSTEM_PROMPT},
            {'role': 'user', 'content': build_prompt(description, languages, flatmates, period)},
        ],
        'response_format': {'type': 'json_object'},
        'temperature': 0.7,
    }
    headers = {
        'Authorization': f"Bearer {api_key}",
        'Content-Type': 'application/json',
    }

    data = call_service('openai', 'POST', API_ENDPOINT, settings.OPENAI_TIMEOUT, json=body, headers=headers)

    try:
        content = data['choices'][0]['message']['content']
    except (KeyError, IndexError, TypeError):
        content = None
    if not content:
        raise IntegrationError('openai', 'OpenAI API returned empty response')

    try:
        result = json.loads(content)
    except ValueError as exc:
        raise IntegrationError('openai', f"Failed to parse OpenAI response: {exc}") from exc

    return structure_response(result, languages, want_flatmates=bool(flatmates), want_period=bool(period))


def structure_response(result, languages, want_flatmates=False, want_period=False):
    if not isinstance(result, dict) or 'description' not in result or 'title' not in result:
        raise IntegrationError('openai', 'Invalid response structure: missing description or title')
    if not isinstance(result['description'], dict) or not isinstance(result['title'], dict):
        raise IntegrationError('openai', 'Invalid response structure: description and title must be objects')

    missing = [
        f"{field}.{lang}"
        for field in ('description', 'title')
        for lang in languages
        if lang not in result[field]
    ]
    if missing:
        logger.warning(
            "Missing translations in OpenAI response",
            extra={'missing': missing, 'received': list(result['description'].keys())},
        )

    structured = {
        'description': {lang: result['description'].get(lang) or '' for lang in languages},
        'title': {lang: result['title'].get(lang) or '' for lang in languages},
        'slug': pick_slug(result),
    }
    for field, wanted in (('flatmates', want_flatmates), ('period', want_period)):
        if wanted and isinstance(result.get(field), dict):
            structured[field] = {lang: result[field].get(lang) or '' for lang in languages}
    return structured


def pick_slug(result):
    slug = result.get('slug')
    if isinstance(slug, str) and slug and len(slug) <= SLUG_MAX_LENGTH:
        return slug

    english_title = result.get('title', {}).get('en') or DEFAULT_SLUG_SOURCE
    logger.info("Generating slug from English title", extra={'title': english_title})
    return sanitize_slug(english_title)
