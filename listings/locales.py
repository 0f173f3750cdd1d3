# listings/locales.py

import json
from dataclasses import dataclass, field
from typing import Dict, Iterable, Union


@dataclass(frozen=True)
class Plain:
    """A value that has not been translated yet. Treated as English."""

    text: str


@dataclass(frozen=True)
class Localized:
    """Mapping of locale code to text."""

    values: Dict[str, str] = field(default_factory=dict)

    @property
    def english(self) -> str:
        return self.values.get('en') or self.values.get('') or ''


LocaleValue = Union[Plain, Localized]


def _as_text(value):
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def parse_localized(value) -> LocaleValue:
    """
    Classify a stored value.

    dicts, and strings holding a JSON object, are Localized. Anything else is
    Plain text.
    """
    if isinstance(value, Localized) or isinstance(value, Plain):
        return value
    if isinstance(value, dict):
        return Localized({str(k): _as_text(v) for k, v in value.items()})
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith('{'):
            try:
                decoded = json.loads(stripped)
            except ValueError:
                return Plain(value)
            if isinstance(decoded, dict):
                return Localized({str(k): _as_text(v) for k, v in decoded.items()})
        return Plain(value)
    return Plain(_as_text(value))


def english_text(value) -> str:
    parsed = parse_localized(value)
    if isinstance(parsed, Localized):
        return parsed.english
    return parsed.text


def wrap_locales(value, locales: Iterable[str]) -> Dict[str, str]:
    """
    Seed every supported locale with an empty string and put the English text under ``en``.

    Values that are already localized keep their translations. Missing
    locales are filled with empty strings.
    """
    wrapped = {code: '' for code in locales}
    parsed = parse_localized(value)
    if isinstance(parsed, Localized):
        wrapped.update({code: text for code, text in parsed.values.items() if code})
        wrapped['en'] = parsed.english
    else:
        wrapped['en'] = parsed.text
    return wrapped


def dumps_localized(mapping) -> str:
    return json.dumps(mapping, ensure_ascii=False)


def loads_localized(value) -> Dict[str, str]:
    parsed = parse_localized(value)
    if isinstance(parsed, Localized):
        return dict(parsed.values)
    return {'en': parsed.text}
