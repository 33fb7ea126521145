"""Unit tests for JSON request parsing helpers."""

from __future__ import annotations

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from reviewpay.backend.services.request_parser import negotiate_locale, parse_json_payload


def test_parse_payload_uses_accept_language(app: Flask) -> None:
    """Accept-Language header should supply the locale when absent."""

    with app.test_request_context(
        "/api/v1/billing/campaigns",
        method="POST",
        json={"recruit_count": 10, "reward_point_per_person": 30000},
        headers={"Accept-Language": "en-US,en;q=0.9,ko;q=0.8"},
    ):
        payload = parse_json_payload(request)

    assert payload["locale"] == "en"
    assert payload["recruit_count"] == 10


def test_parse_payload_normalises_explicit_locale(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/billing/campaigns",
        method="POST",
        json={"locale": "EN"},
        headers={"Accept-Language": "ko"},
    ):
        payload = parse_json_payload(request)

    assert payload["locale"] == "en"


def test_parse_payload_reads_query_locale(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/billing/campaigns?locale=en",
        method="POST",
        json={},
    ):
        payload = parse_json_payload(request)

    assert payload["locale"] == "en"


def test_unknown_locale_falls_back_to_korean(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/billing/campaigns",
        method="POST",
        json={"locale": "fr"},
    ):
        payload = parse_json_payload(request)

    assert payload["locale"] == "ko"


def test_payload_without_hints_has_no_locale(app: Flask) -> None:
    with app.test_request_context("/api/v1/payouts/preview", method="POST", json={}):
        payload = parse_json_payload(request)

    assert "locale" not in payload


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    """Non-object JSON payloads should trigger BadRequest responses."""

    with app.test_request_context(
        "/api/v1/billing/campaigns",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest):
            parse_json_payload(request)


def test_parse_payload_rejects_invalid_json(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/billing/campaigns",
        method="POST",
        data="{not json",
        content_type="application/json",
    ):
        with pytest.raises(BadRequest, match="valid JSON"):
            parse_json_payload(request)


def test_accept_language_is_ranked_by_quality(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/payouts/withdrawals/quote",
        method="POST",
        json={},
        headers={"Accept-Language": "ko;q=0.5, en;q=0.9"},
    ):
        payload = parse_json_payload(request)

    assert payload["locale"] == "en"


def test_unpublished_accept_language_gives_no_hint(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/translations/", headers={"Accept-Language": "fr-FR, de;q=0.8"}
    ):
        assert negotiate_locale(request) is None


def test_path_locale_beats_query_and_header(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/translations/en?locale=ko", headers={"Accept-Language": "ko"}
    ):
        assert negotiate_locale(request, "en-GB") == "en"
