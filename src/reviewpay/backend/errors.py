"""Error taxonomy shared by the billing calculators and the tax-info crypto.

Each class maps to exactly one response category in the HTTP layer, so the
hierarchy matters more than the messages:

* :class:`ValidationError` - malformed or out-of-range input (400).
* :class:`EncryptionError` - missing or malformed key material. It is a
  :class:`ConfigurationError` and therefore fatal at startup.
* :class:`DecryptionError` - the envelope failed authentication or could not
  be parsed. Recoverable per request.
* :class:`ArithmeticOverflowError` - an amount left the range that clients can
  represent exactly.
"""

from __future__ import annotations

from reviewpay.backend.config.schema import ConfigurationError


class ValidationError(ValueError):
    """Raised when caller-supplied values are malformed or out of range."""


class DuplicateRegistrationError(ValidationError):
    """Raised when an RRN hash is already registered to another reviewer."""


class EncryptionError(ConfigurationError):
    """Raised when the encryption key is missing or has the wrong length."""


class DecryptionError(Exception):
    """Raised when an envelope cannot be authenticated or parsed."""


class ArithmeticOverflowError(OverflowError):
    """Raised when a monetary amount exceeds the supported range."""


__all__ = [
    "ArithmeticOverflowError",
    "ConfigurationError",
    "DecryptionError",
    "DuplicateRegistrationError",
    "EncryptionError",
    "ValidationError",
]
