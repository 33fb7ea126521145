"""Unit tests for encryption settings resolution."""

from __future__ import annotations

import pytest

from reviewpay.backend.config.settings import (
    ENCRYPTION_KEY_ENV,
    PREVIOUS_ENCRYPTION_KEYS_ENV,
    EncryptionSettings,
    decode_key,
)
from reviewpay.backend.errors import ConfigurationError, EncryptionError

KEY_HEX = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"
OLD_KEY_HEX = "ffeeddccbbaa99887766554433221100ffeeddccbbaa99887766554433221100"


def test_from_environment_reads_keys() -> None:
    settings = EncryptionSettings.from_environment(
        {
            ENCRYPTION_KEY_ENV: KEY_HEX,
            PREVIOUS_ENCRYPTION_KEYS_ENV: f" {OLD_KEY_HEX} , ",
        }
    )

    assert settings.key == bytes.fromhex(KEY_HEX)
    assert settings.previous_keys == (bytes.fromhex(OLD_KEY_HEX),)


def test_from_environment_uses_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENCRYPTION_KEY_ENV, KEY_HEX.upper())
    monkeypatch.delenv(PREVIOUS_ENCRYPTION_KEYS_ENV, raising=False)

    settings = EncryptionSettings.from_environment()

    assert settings.key == bytes.fromhex(KEY_HEX)
    assert settings.previous_keys == ()


@pytest.mark.parametrize("raw", [None, "", "   ", "abcd", "zz" * 32, KEY_HEX + "00"])
def test_unusable_keys_are_rejected(raw: str | None) -> None:
    with pytest.raises(EncryptionError):
        decode_key(raw)


def test_missing_key_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match=ENCRYPTION_KEY_ENV):
        EncryptionSettings.from_environment({})


def test_bad_previous_key_names_its_variable() -> None:
    with pytest.raises(EncryptionError, match=PREVIOUS_ENCRYPTION_KEYS_ENV):
        EncryptionSettings.from_environment(
            {ENCRYPTION_KEY_ENV: KEY_HEX, PREVIOUS_ENCRYPTION_KEYS_ENV: "abcd"}
        )


def test_repr_hides_key_material() -> None:
    settings = EncryptionSettings.from_hex(KEY_HEX, OLD_KEY_HEX)

    assert KEY_HEX not in repr(settings)
    assert "\\x00\\x11" not in repr(settings)
