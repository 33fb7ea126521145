"""JSON problem payloads and the mapping from domain errors onto them."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping

from flask import jsonify
from pydantic import ValidationError as PayloadValidationError

from reviewpay.backend.errors import (
    ArithmeticOverflowError,
    ConfigurationError,
    DecryptionError,
    DuplicateRegistrationError,
    ValidationError,
)

from .models import format_validation_error


@dataclass(frozen=True)
class ProblemResponse:
    """RFC 7807-style error body: ``{"error": ..., "message": ...}``."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.extra:
            payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    additional: Mapping[str, Any] | None = extra or None
    return ProblemResponse(error=error, status=int(status), message=message, extra=additional)


@dataclass(frozen=True)
class ErrorMapping:
    """How one exception class is reported to clients.

    ``message`` replaces the exception text when set, for errors whose details
    must stay in the server log.
    """

    exception: type[BaseException]
    error: str
    status: HTTPStatus
    message: str | None = None


# Most specific classes first; Flask resolves handlers along the MRO. Other
# exceptions, including bare ValueError, are bugs and surface as 500.
ERROR_MAPPINGS: tuple[ErrorMapping, ...] = (
    ErrorMapping(DuplicateRegistrationError, "duplicate_registration", HTTPStatus.CONFLICT),
    ErrorMapping(ValidationError, "validation_error", HTTPStatus.BAD_REQUEST),
    ErrorMapping(
        ConfigurationError,
        "configuration_error",
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "The service is misconfigured",
    ),
    ErrorMapping(
        DecryptionError,
        "decryption_failed",
        HTTPStatus.UNPROCESSABLE_ENTITY,
        "Stored tax information could not be decrypted",
    ),
    ErrorMapping(ArithmeticOverflowError, "amount_out_of_range", HTTPStatus.UNPROCESSABLE_ENTITY),
)


def problem_for(error: BaseException) -> ProblemResponse:
    """Translate ``error`` into the problem payload registered for its class."""

    if isinstance(error, PayloadValidationError):
        return problem_response(
            "validation_error",
            status=HTTPStatus.BAD_REQUEST,
            message=format_validation_error(error),
        )

    for mapping in ERROR_MAPPINGS:
        if isinstance(error, mapping.exception):
            return problem_response(
                mapping.error,
                status=mapping.status,
                message=mapping.message or str(error),
            )

    return problem_response(
        "internal_error",
        status=HTTPStatus.INTERNAL_SERVER_ERROR,
        message="Unexpected server error",
    )


__all__ = ["ERROR_MAPPINGS", "ErrorMapping", "ProblemResponse", "problem_for", "problem_response"]
