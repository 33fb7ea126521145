"""Integration tests for application start-up."""

from __future__ import annotations

import pytest

from reviewpay.backend.app import create_app
from reviewpay.backend.app.extensions import CIPHER_EXTENSION, REPOSITORY_EXTENSION
from reviewpay.backend.app.services.tax_info_repository import InMemoryTaxInfoRepository
from reviewpay.backend.config.settings import ENCRYPTION_KEY_ENV, PREVIOUS_ENCRYPTION_KEYS_ENV
from reviewpay.backend.errors import EncryptionError

KEY_HEX = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"


def test_missing_key_prevents_start_up(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENCRYPTION_KEY_ENV, raising=False)

    with pytest.raises(EncryptionError):
        create_app()


def test_malformed_key_prevents_start_up(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENCRYPTION_KEY_ENV, "not-a-key")

    with pytest.raises(EncryptionError):
        create_app()


def test_key_is_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENCRYPTION_KEY_ENV, KEY_HEX)
    monkeypatch.delenv(PREVIOUS_ENCRYPTION_KEYS_ENV, raising=False)

    app = create_app()

    assert CIPHER_EXTENSION in app.extensions
    assert isinstance(app.extensions[REPOSITORY_EXTENSION], InMemoryTaxInfoRepository)


def test_missing_origins_emit_warning(
    monkeypatch: pytest.MonkeyPatch, encryption_settings
) -> None:
    monkeypatch.delenv("REVIEWPAY_ALLOWED_ORIGINS", raising=False)

    with pytest.warns(UserWarning, match="No allowed origins"):
        create_app(encryption_settings)


def test_injected_repository_is_used(encryption_settings) -> None:
    repository = InMemoryTaxInfoRepository()

    app = create_app(encryption_settings, repository=repository)

    assert app.extensions[REPOSITORY_EXTENSION] is repository


def test_unexpected_errors_are_reported_as_internal(encryption_settings) -> None:
    app = create_app(encryption_settings)

    @app.get("/api/v1/broken")
    def broken():
        raise ValueError("invalid literal for int()")

    response = app.test_client().get("/api/v1/broken")

    assert response.status_code == 500
    assert response.get_json() == {
        "error": "internal_error",
        "message": "Unexpected server error",
    }


def test_domain_validation_errors_remain_client_errors(client) -> None:
    response = client.post(
        "/api/v1/payouts/withdrawals/quote", json={"gross_amount": 100, "balance": 500000}
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"
