"""Korean-first message and form-label catalogues.

Each ``translations/<locale>.json`` file holds two sections:

``messages``
    Flat ``str.format`` templates used by the calculators, e.g. the savings
    banner of a payment-method comparison.
``forms``
    Field labels per input form, keyed by the request-model field names the
    billing configuration endpoint advertises.

Korean is the base locale. Any message or label missing from another
catalogue falls back to the Korean text, and unknown locales resolve to
Korean outright.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import cache
from importlib import resources
from typing import Any

from reviewpay.backend.errors import ConfigurationError

BASE_LOCALE = "ko"
_TRANSLATIONS_PACKAGE = "reviewpay.translations"


@dataclass(frozen=True)
class Catalogue:
    locale: str
    messages: Mapping[str, str]
    forms: Mapping[str, Mapping[str, str]]


@dataclass(frozen=True)
class Translator:
    """Render message templates for one locale."""

    locale: str
    messages: Mapping[str, str]

    def __call__(self, key: str, **values: Any) -> str:
        template = self.messages.get(key, key)
        return template.format(**values) if values else template


@cache
def available_locales() -> tuple[str, ...]:
    root = resources.files(_TRANSLATIONS_PACKAGE)
    names = (entry.name for entry in root.iterdir() if entry.name.endswith(".json"))
    return tuple(sorted(name.removesuffix(".json") for name in names))


def _string_mapping(value: Any, where: str) -> dict[str, str]:
    if not isinstance(value, dict) or not all(isinstance(item, str) for item in value.values()):
        raise ConfigurationError(f"{where} must map keys to strings")
    return dict(value)


def parse_catalogue(locale: str, payload: Any) -> Catalogue:
    """Validate the decoded JSON of ``locale``'s catalogue."""

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Translation catalogue '{locale}' must be an object")

    messages = _string_mapping(payload.get("messages", {}), f"{locale}.messages")
    raw_forms = payload.get("forms", {})
    if not isinstance(raw_forms, dict):
        raise ConfigurationError(f"{locale}.forms must map form names to labels")
    forms = {
        form: _string_mapping(labels, f"{locale}.forms.{form}")
        for form, labels in raw_forms.items()
    }
    return Catalogue(locale=locale, messages=messages, forms=forms)


@cache
def load_catalogue(locale: str) -> Catalogue:
    resource = resources.files(_TRANSLATIONS_PACKAGE).joinpath(f"{locale}.json")
    try:
        payload = json.loads(resource.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise ConfigurationError(f"No translation catalogue for locale '{locale}'") from error
    except json.JSONDecodeError as error:
        raise ConfigurationError(f"Translation catalogue '{locale}' is not valid JSON") from error
    return parse_catalogue(locale, payload)


def normalise_locale(locale: str | None) -> str:
    """Map a requested locale such as ``en-US`` onto a published catalogue."""

    if not locale:
        return BASE_LOCALE

    language = locale.strip().lower().replace("_", "-").split("-")[0]
    return language if language in available_locales() else BASE_LOCALE


def _with_fallback(locale: str | None) -> tuple[Catalogue, Catalogue]:
    return load_catalogue(normalise_locale(locale)), load_catalogue(BASE_LOCALE)


def get_translator(locale: str | None = None) -> Translator:
    catalogue, base = _with_fallback(locale)
    return Translator(locale=catalogue.locale, messages={**base.messages, **catalogue.messages})


def form_labels(
    form: str,
    locale: str | None = None,
    *,
    fields: Iterable[str] | None = None,
) -> dict[str, str]:
    """Return ``{field: label}`` for ``form``.

    With ``fields`` the result covers exactly those fields, in that order;
    a field nobody has labelled is shown under its own name.
    """

    catalogue, base = _with_fallback(locale)
    labels = {**base.forms.get(form, {}), **catalogue.forms.get(form, {})}
    if fields is None:
        return labels
    return {field: labels.get(field, field) for field in fields}


def load_translations(locale: str | None = None) -> dict[str, Any]:
    """Return every message and form label for ``locale`` with fallbacks applied."""

    catalogue, base = _with_fallback(locale)
    forms = sorted({*base.forms, *catalogue.forms})
    return {
        "locale": catalogue.locale,
        "available_locales": list(available_locales()),
        "messages": {**base.messages, **catalogue.messages},
        "forms": {form: form_labels(form, catalogue.locale) for form in forms},
    }


__all__ = [
    "BASE_LOCALE",
    "Catalogue",
    "Translator",
    "available_locales",
    "form_labels",
    "get_translator",
    "load_catalogue",
    "load_translations",
    "normalise_locale",
    "parse_catalogue",
]
