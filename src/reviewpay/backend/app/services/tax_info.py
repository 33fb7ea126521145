"""Protection of reviewer resident registration numbers (RRN).

Three representations are produced for every registered RRN:

* an AES-256-GCM envelope, ``base64(iv || ciphertext || tag)``, which can be
  decrypted later for tax reporting,
* a SHA-256 digest of the normalised number, used to detect duplicate
  registrations without decrypting anything,
* a masked form (``900101-*******``) for display to staff.

The key is injected through :class:`TaxInfoCipher`; nothing in this module
reads the environment.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import logging
import re
import secrets
from datetime import date
from typing import Any, Iterable

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from reviewpay.backend.app.models import TaxInfoInput, TaxInfoResult
from reviewpay.backend.config.settings import KEY_LENGTH, EncryptionSettings
from reviewpay.backend.errors import DecryptionError, EncryptionError, ValidationError

_LOGGER = logging.getLogger(__name__)

IV_LENGTH = 16
AUTH_TAG_LENGTH = 16
RRN_LENGTH = 13
MASKED_RRN_PLACEHOLDER = "******-*******"
MIN_LEGAL_NAME_LENGTH = 2

_SEPARATORS = re.compile(r"[\s\-]")
_DIGITS = re.compile(rf"[0-9]{{{RRN_LENGTH}}}")
_CHECKSUM_WEIGHTS = (2, 3, 4, 5, 6, 7, 8, 9, 2, 3, 4, 5)
# Seventh digit -> century of birth for Korean nationals.
_CENTURY_BY_GENDER_DIGIT = {"1": 1900, "2": 1900, "3": 2000, "4": 2000}


class TaxInfoCipher:
    """AES-256-GCM cipher bound to the process-wide key.

    ``previous_keys`` are only used for decryption so envelopes written before
    a key rotation remain readable.
    """

    def __init__(self, key: bytes | None, *, previous_keys: Iterable[bytes] = ()) -> None:
        self._primary = self._build(key)
        self._fallbacks = tuple(self._build(value) for value in previous_keys)

    @staticmethod
    def _build(key: bytes | None) -> AESGCM:
        if not key:
            raise EncryptionError("Encryption key is not configured")
        if len(key) != KEY_LENGTH:
            raise EncryptionError(
                f"Encryption key must be {KEY_LENGTH} bytes; got {len(key)} bytes"
            )
        return AESGCM(key)

    @classmethod
    def from_settings(cls, settings: EncryptionSettings) -> "TaxInfoCipher":
        return cls(settings.key, previous_keys=settings.previous_keys)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(previous_keys={len(self._fallbacks)})"

    def encrypt(self, plaintext: str) -> str:
        """Encrypt ``plaintext`` under a fresh random IV."""

        iv = secrets.token_bytes(IV_LENGTH)
        # AESGCM appends the 16-byte tag to the ciphertext.
        sealed = self._primary.encrypt(iv, plaintext.encode("utf-8"), None)
        return base64.b64encode(iv + sealed).decode("ascii")

    def decrypt(self, envelope: str) -> str:
        """Return the plaintext sealed in ``envelope``.

        Raises :class:`DecryptionError` when the envelope is malformed or fails
        authentication under every configured key.
        """

        if not isinstance(envelope, str) or not envelope:
            raise DecryptionError("Envelope must be a non-empty string")

        try:
            combined = base64.b64decode(envelope, validate=True)
        except (binascii.Error, ValueError) as error:
            raise DecryptionError("Envelope is not valid base64") from error

        # Non-zero padding bits decode to the same bytes; only the canonical
        # encoding is accepted.
        if base64.b64encode(combined).decode("ascii") != envelope:
            raise DecryptionError("Envelope is not canonical base64")

        if len(combined) < IV_LENGTH + AUTH_TAG_LENGTH:
            raise DecryptionError("Envelope is too short")

        iv, sealed = combined[:IV_LENGTH], combined[IV_LENGTH:]
        for cipher in (self._primary, *self._fallbacks):
            try:
                plaintext = cipher.decrypt(iv, sealed, None)
            except InvalidTag:
                continue
            try:
                return plaintext.decode("utf-8")
            except UnicodeDecodeError as error:
                raise DecryptionError("Decrypted payload is not valid UTF-8") from error

        raise DecryptionError("Envelope failed authentication")


def generate_encryption_key() -> str:
    """Return a new random key as hex, suitable for ``REVIEWPAY_ENCRYPTION_KEY``."""

    return secrets.token_hex(KEY_LENGTH)


def normalize_rrn(rrn: str) -> str:
    """Strip dashes and whitespace from ``rrn``."""

    return _SEPARATORS.sub("", rrn)


def hash_rrn(rrn: str) -> str:
    """Return the SHA-256 hex digest of the normalised ``rrn``."""

    return hashlib.sha256(normalize_rrn(rrn).encode("utf-8")).hexdigest()


def _checksum_digit(digits: str) -> int:
    total = sum(int(digit) * weight for digit, weight in zip(digits, _CHECKSUM_WEIGHTS))
    return (11 - total % 11) % 10


def validate_rrn_format(rrn: Any, *, verify_checksum: bool = False) -> bool:
    """Return ``True`` when ``rrn`` is structurally valid.

    Checks the digit count, the gender/century digit and that the first six
    digits form a real birth date. The legacy mod-11 check digit is only
    verified on request: numbers issued since October 2020 no longer carry it.
    """

    if not isinstance(rrn, str):
        return False

    normalized = normalize_rrn(rrn)
    if not _DIGITS.fullmatch(normalized):
        return False

    century = _CENTURY_BY_GENDER_DIGIT.get(normalized[6])
    if century is None:
        return False

    try:
        date(century + int(normalized[0:2]), int(normalized[2:4]), int(normalized[4:6]))
    except ValueError:
        return False

    if verify_checksum:
        return _checksum_digit(normalized) == int(normalized[12])
    return True


def mask_rrn(rrn: Any) -> str:
    """Return the display form of ``rrn`` with everything after the birth date hidden.

    Input is normalised first; anything that is still not 13 digits is fully
    masked rather than rejected.
    """

    if not isinstance(rrn, str):
        return MASKED_RRN_PLACEHOLDER
    normalized = normalize_rrn(rrn)
    if not _DIGITS.fullmatch(normalized):
        return MASKED_RRN_PLACEHOLDER
    return f"{normalized[:6]}-*******"


def process_tax_info(payload: TaxInfoInput, cipher: TaxInfoCipher) -> TaxInfoResult:
    """Validate, encrypt, hash and mask a reviewer's tax information.

    The normalised RRN is what gets encrypted, so decrypting the envelope
    always yields 13 digits regardless of how the number was typed.
    """

    if not validate_rrn_format(payload.rrn):
        raise ValidationError("Invalid resident registration number")

    legal_name = (payload.legal_name or "").strip()
    if len(legal_name) < MIN_LEGAL_NAME_LENGTH:
        raise ValidationError("Legal name must be at least 2 characters")

    normalized = normalize_rrn(payload.rrn)
    result = TaxInfoResult(
        encrypted_rrn=cipher.encrypt(normalized),
        rrn_hash=hash_rrn(normalized),
        masked_rrn=mask_rrn(normalized),
        legal_name=legal_name,
    )
    _LOGGER.debug("Tax information processed (hash prefix %s)", result.rrn_hash[:8])
    return result


__all__ = [
    "AUTH_TAG_LENGTH",
    "IV_LENGTH",
    "MASKED_RRN_PLACEHOLDER",
    "TaxInfoCipher",
    "generate_encryption_key",
    "hash_rrn",
    "mask_rrn",
    "normalize_rrn",
    "process_tax_info",
    "validate_rrn_format",
]
