"""Integration tests for the translations API."""

from __future__ import annotations

from flask.testing import FlaskClient


def test_translations_endpoint_returns_default_catalogue(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/")
    assert response.status_code == 200
    payload = response.get_json()

    assert payload["locale"] == "ko"
    assert response.headers["Content-Language"] == "ko"
    assert "en" in payload["available_locales"]
    assert payload["messages"]["billing.amount"] == "{amount}원"
    assert payload["forms"]["billing"]["recruit_count"] == "모집 인원"


def test_translations_endpoint_respects_locale_path(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/en")
    assert response.status_code == 200
    payload = response.get_json()

    assert payload["locale"] == "en"
    assert response.headers["Content-Language"] == "en"
    assert payload["messages"]["billing.amount"] == "₩{amount}"
    assert payload["forms"]["billing"]["recruit_count"] == "Reviewers to recruit"


def test_translations_endpoint_accepts_query_locale(client: FlaskClient) -> None:
    payload = client.get("/api/v1/translations/?locale=en").get_json()

    assert payload["locale"] == "en"


def test_translations_endpoint_negotiates_accept_language(client: FlaskClient) -> None:
    response = client.get(
        "/api/v1/translations/", headers={"Accept-Language": "ko;q=0.3, en;q=0.8"}
    )

    assert response.get_json()["locale"] == "en"
    assert response.headers["Content-Language"] == "en"


def test_unpublished_locale_path_serves_korean(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/ja")

    assert response.status_code == 200
    assert response.get_json()["locale"] == "ko"
