"""Tests for the localisation catalogue helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from reviewpay.backend.app.localization import (
    form_labels,
    get_translator,
    load_translations,
    normalise_locale,
)
from reviewpay.backend.app.localization.catalog import parse_catalogue
from reviewpay.backend.errors import ConfigurationError

TRANSLATIONS_ROOT = Path(__file__).resolve().parents[2] / "src" / "reviewpay" / "translations"


def _read_message(locale: str, key: str) -> str:
    payload = json.loads(TRANSLATIONS_ROOT.joinpath(f"{locale}.json").read_text(encoding="utf-8"))
    return str(payload["messages"][key])


def test_get_translator_loads_catalogue() -> None:
    translator = get_translator("en")

    assert translator.locale == "en"
    assert translator("billing.amount") == _read_message("en", "billing.amount")


def test_translator_fills_in_placeholders() -> None:
    assert get_translator("ko")("billing.amount", amount="15,000") == "15,000원"
    assert get_translator("en")("billing.amount", amount="15,000") == "₩15,000"


def test_get_translator_falls_back_to_korean() -> None:
    translator = get_translator("fr")

    assert translator.locale == "ko"
    assert translator("billing.amount") == "{amount}원"


def test_missing_keys_resolve_to_the_key() -> None:
    assert get_translator("en")("does.not.exist") == "does.not.exist"


def test_normalise_locale() -> None:
    assert normalise_locale(None) == "ko"
    assert normalise_locale("en-US") == "en"
    assert normalise_locale("en_GB") == "en"
    assert normalise_locale("KO") == "ko"
    assert normalise_locale("ja") == "ko"


def test_form_labels_cover_requested_fields_in_order() -> None:
    labels = form_labels("withdrawal", "en", fields=["balance", "gross_amount", "memo"])

    assert list(labels) == ["balance", "gross_amount", "memo"]
    assert labels["balance"] == "Available points"
    assert labels["memo"] == "memo"


def test_form_labels_for_unknown_locale_are_korean() -> None:
    assert form_labels("tax_info", "ja") == {"rrn": "주민등록번호", "legal_name": "실명"}


def test_load_translations_exposes_catalogue_payload() -> None:
    payload = load_translations("en")

    assert payload["locale"] == "en"
    assert set(payload["available_locales"]) >= {"en", "ko"}
    assert payload["messages"]["billing.comparison.message"] == _read_message(
        "en", "billing.comparison.message"
    )
    assert set(payload["forms"]) == {"billing", "withdrawal", "tax_info"}
    assert payload["forms"]["billing"]["payment_method"] == "Payment method"


def test_catalogues_share_message_keys() -> None:
    korean = load_translations("ko")["messages"]
    english = load_translations("en")["messages"]

    assert set(korean) == set(english)


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "an", "object"],
        {"messages": {"billing.amount": 1}},
        {"forms": ["billing"]},
        {"forms": {"billing": {"recruit_count": None}}},
    ],
)
def test_malformed_catalogues_are_configuration_errors(payload: object) -> None:
    with pytest.raises(ConfigurationError):
        parse_catalogue("xx", payload)
