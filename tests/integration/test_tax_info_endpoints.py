"""Integration tests for reviewer tax information endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Flask
from flask.testing import FlaskClient

from reviewpay.backend.app import create_app
from reviewpay.backend.app.models import TaxInfoResult
from reviewpay.backend.app.services.tax_info import hash_rrn
from reviewpay.backend.app.services.tax_info_repository import InMemoryTaxInfoRepository
from reviewpay.backend.config.settings import EncryptionSettings

TAX_INFO = {"rrn": "900101-1234567", "legal_name": "Hong Gildong"}


def test_register_then_read_masked(client: FlaskClient) -> None:
    created = client.put("/api/v1/reviewers/r-1/tax-info", json=TAX_INFO)

    assert created.status_code == HTTPStatus.CREATED
    body = created.get_json()
    assert body["masked_rrn"] == "900101-*******"
    assert body["replaced"] is False
    assert body["message"] == "세금 정보가 등록되었습니다"
    assert "encrypted_rrn" not in body
    assert "rrn_hash" not in body

    fetched = client.get("/api/v1/reviewers/r-1/tax-info")

    assert fetched.status_code == HTTPStatus.OK
    payload = fetched.get_json()
    assert payload["masked_rrn"] == "900101-*******"
    assert payload["legal_name"] == "Hong Gildong"
    assert "1234567" not in fetched.get_data(as_text=True)


def test_reregistration_replaces(client: FlaskClient) -> None:
    client.put("/api/v1/reviewers/r-1/tax-info", json=TAX_INFO)
    response = client.put(
        "/api/v1/reviewers/r-1/tax-info",
        json={"rrn": "850615-2987654", "legal_name": "김영희"},
    )

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["replaced"] is True
    assert response.get_json()["masked_rrn"] == "850615-*******"


def test_duplicate_number_is_a_conflict(client: FlaskClient) -> None:
    client.put("/api/v1/reviewers/r-1/tax-info", json=TAX_INFO)
    response = client.put(
        "/api/v1/reviewers/r-2/tax-info",
        json={"rrn": "9001011234567", "legal_name": "Someone Else"},
    )

    assert response.status_code == HTTPStatus.CONFLICT
    assert response.get_json()["error"] == "duplicate_registration"


def test_invalid_number_is_rejected(client: FlaskClient) -> None:
    response = client.put(
        "/api/v1/reviewers/r-1/tax-info",
        json={"rrn": "901301-1234567", "legal_name": "Hong Gildong"},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "validation_error"


def test_unknown_reviewer_is_not_found(client: FlaskClient) -> None:
    response = client.get("/api/v1/reviewers/nobody/tax-info")

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json()["error"] == "not_found"


def test_undecryptable_record_is_unprocessable(
    encryption_settings: EncryptionSettings,
) -> None:
    repository = InMemoryTaxInfoRepository()
    repository.register(
        "r-9",
        TaxInfoResult(
            encrypted_rrn="AAAA" * 12,
            rrn_hash=hash_rrn("9001011234567"),
            masked_rrn="900101-*******",
            legal_name="Hong Gildong",
        ),
    )
    app: Flask = create_app(encryption_settings, repository=repository)
    app.config.update(TESTING=True)

    response = app.test_client().get("/api/v1/reviewers/r-9/tax-info")

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert response.get_json() == {
        "error": "decryption_failed",
        "message": "Stored tax information could not be decrypted",
    }


def test_registration_message_follows_accept_language(client: FlaskClient) -> None:
    response = client.put(
        "/api/v1/reviewers/r-7/tax-info",
        json=TAX_INFO,
        headers={"Accept-Language": "en-US,en;q=0.9"},
    )

    assert response.get_json()["message"] == "Tax information saved"
