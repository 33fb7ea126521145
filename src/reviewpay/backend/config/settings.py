"""Process-wide secrets resolved once at startup."""

from __future__ import annotations

import binascii
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from reviewpay.backend.errors import EncryptionError

ENCRYPTION_KEY_ENV = "REVIEWPAY_ENCRYPTION_KEY"
PREVIOUS_ENCRYPTION_KEYS_ENV = "REVIEWPAY_PREVIOUS_ENCRYPTION_KEYS"
KEY_LENGTH = 32


def decode_key(raw: str | None, *, source: str = ENCRYPTION_KEY_ENV) -> bytes:
    """Decode a hex-encoded AES-256 key, raising ``EncryptionError`` when unusable."""

    if raw is None or not raw.strip():
        raise EncryptionError(
            f"{source} is not set; provide a {KEY_LENGTH}-byte key as "
            f"{KEY_LENGTH * 2} hex characters"
        )

    try:
        key = binascii.unhexlify(raw.strip())
    except (binascii.Error, ValueError) as error:
        raise EncryptionError(f"{source} must be hex encoded") from error

    if len(key) != KEY_LENGTH:
        raise EncryptionError(
            f"{source} must decode to {KEY_LENGTH} bytes ({KEY_LENGTH * 2} hex characters); "
            f"got {len(key)} bytes"
        )
    return key


@dataclass(frozen=True)
class EncryptionSettings:
    """Key material for the tax-info cipher.

    ``previous_keys`` holds retired keys that may still decrypt envelopes
    written before a rotation; new envelopes always use ``key``.
    """

    key: bytes = field(repr=False)
    previous_keys: tuple[bytes, ...] = field(default=(), repr=False)

    @classmethod
    def from_hex(cls, key: str, *previous: str) -> "EncryptionSettings":
        return cls(
            key=decode_key(key),
            previous_keys=tuple(
                decode_key(value, source=PREVIOUS_ENCRYPTION_KEYS_ENV) for value in previous
            ),
        )

    @classmethod
    def from_environment(
        cls, environ: Mapping[str, str] | None = None
    ) -> "EncryptionSettings":
        """Build settings from ``environ`` (defaults to ``os.environ``)."""

        source = os.environ if environ is None else environ
        previous_raw = source.get(PREVIOUS_ENCRYPTION_KEYS_ENV, "")
        previous = [value.strip() for value in previous_raw.split(",") if value.strip()]
        return cls.from_hex(source.get(ENCRYPTION_KEY_ENV, ""), *previous)


__all__ = [
    "ENCRYPTION_KEY_ENV",
    "EncryptionSettings",
    "KEY_LENGTH",
    "PREVIOUS_ENCRYPTION_KEYS_ENV",
    "decode_key",
]
