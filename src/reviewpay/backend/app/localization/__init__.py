"""Translation helpers shared by calculators and HTTP routes."""

from .catalog import (
    BASE_LOCALE,
    Translator,
    available_locales,
    form_labels,
    get_translator,
    load_translations,
    normalise_locale,
)

__all__ = [
    "BASE_LOCALE",
    "Translator",
    "available_locales",
    "form_labels",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
