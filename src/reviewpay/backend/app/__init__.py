"""Application factory for ReviewPay backend services."""

from __future__ import annotations

import logging
import os
from importlib import util as importlib_util
from typing import Callable, cast
from warnings import warn

from flask import Flask, Response, jsonify, request
from flask.typing import ResponseReturnValue
from pydantic import ValidationError as PayloadValidationError
from werkzeug.exceptions import BadRequest, InternalServerError

from reviewpay.backend.config.settings import EncryptionSettings
from reviewpay.backend.errors import ConfigurationError, DecryptionError

from .extensions import init_extensions
from .http import ERROR_MAPPINGS, problem_for, problem_response
from .routes import register_routes
from .routes.config import get_configuration_metadata
from .services.tax_info import TaxInfoCipher
from .services.tax_info_repository import InMemoryTaxInfoRepository

CORS: Callable[..., None] | None

if importlib_util.find_spec("flask_cors") is not None:
    from flask_cors import CORS as _cors

    CORS = cast(Callable[..., None], _cors)
else:  # pragma: no cover - executed only when optional dependency missing
    CORS = None

ALLOWED_ORIGINS_ENV = "REVIEWPAY_ALLOWED_ORIGINS"

_LOGGER = logging.getLogger(__name__)


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def _apply_default_cors_headers(
    response: ResponseReturnValue,
    allowed_origins: set[str],
) -> ResponseReturnValue:
    """Attach CORS headers for allowed origins when Flask-Cors is unavailable."""

    if not isinstance(response, Response):
        return response

    origin = request.headers.get("Origin")
    if origin and origin in allowed_origins:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers.setdefault("Vary", "Origin")
        response.headers["Access-Control-Allow-Credentials"] = "false"
        response.headers["Access-Control-Allow-Headers"] = request.headers.get(
            "Access-Control-Request-Headers",
            "Content-Type",
        )
        response.headers["Access-Control-Allow-Methods"] = request.headers.get(
            "Access-Control-Request-Method",
            request.method,
        )
    else:
        for header in (
            "Access-Control-Allow-Origin",
            "Access-Control-Allow-Credentials",
            "Access-Control-Allow-Headers",
            "Access-Control-Allow-Methods",
        ):
            response.headers.pop(header, None)

        vary = response.headers.get("Vary")
        if vary:
            vary_values = {value.strip() for value in vary.split(",")}
            vary_values.discard("Origin")
            if vary_values:
                response.headers["Vary"] = ", ".join(sorted(vary_values))
            else:
                response.headers.pop("Vary", None)

        if origin and request.method == "OPTIONS":
            response.status_code = 403

    return response


def _configure_cors(app: Flask) -> None:
    allowed_origins = _parse_allowed_origins(os.getenv(ALLOWED_ORIGINS_ENV))

    if not allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=2,
        )

    if CORS is not None:
        CORS(
            app,
            resources={r"/api/*": {"origins": sorted(allowed_origins)}},
            supports_credentials=False,
            methods=["GET", "OPTIONS", "POST", "PUT"],
            allow_headers=["Content-Type"],
        )
        return

    warn(
        "Flask-Cors is not installed; falling back to a minimal CORS implementation. "
        "Install the 'cors' extra for production use.",
        stacklevel=2,
    )

    @app.before_request
    def _handle_preflight() -> ResponseReturnValue | None:
        if request.method == "OPTIONS":
            origin = request.headers.get("Origin")
            if origin and origin not in allowed_origins:
                response = app.make_response(("", 403))
                return _apply_default_cors_headers(response, allowed_origins)

            response = app.make_default_options_response()
            return _apply_default_cors_headers(response, allowed_origins)
        return None

    @app.after_request
    def _attach_cors_headers(response: ResponseReturnValue) -> ResponseReturnValue:
        return _apply_default_cors_headers(response, allowed_origins)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    def handle_domain_error(error: Exception):
        if isinstance(error, ConfigurationError):
            _LOGGER.error("Configuration error while serving request: %s", error)
        elif isinstance(error, DecryptionError):
            # The cause stays in the log; clients only learn that decryption failed.
            _LOGGER.warning(
                "Decryption failed for %s %s: %s", request.method, request.path, error
            )
        return problem_for(error).to_response()

    app.register_error_handler(PayloadValidationError, handle_domain_error)
    for mapping in ERROR_MAPPINGS:
        app.register_error_handler(mapping.exception, handle_domain_error)

    @app.errorhandler(InternalServerError)
    def handle_internal_error(error: InternalServerError):
        # Flask has already logged the traceback of the original exception.
        return problem_for(error).to_response()


def create_app(
    encryption_settings: EncryptionSettings | None = None,
    *,
    repository: InMemoryTaxInfoRepository | None = None,
) -> Flask:
    """Create and configure the Flask application instance.

    ``encryption_settings`` defaults to :meth:`EncryptionSettings.from_environment`.
    A missing or malformed key raises :class:`EncryptionError` here rather
    than on the first request.
    """

    if encryption_settings is None:
        encryption_settings = EncryptionSettings.from_environment()
    cipher = TaxInfoCipher.from_settings(encryption_settings)
    if repository is None:
        repository = InMemoryTaxInfoRepository()

    app = Flask(__name__)
    init_extensions(app, cipher, repository)

    _configure_cors(app)
    register_routes(app)
    _register_error_handlers(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {"status": "ok", **get_configuration_metadata()}
        return jsonify(payload)

    return app
