"""Serve message and form-label catalogues to the review-marketplace UI."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from reviewpay.backend.app.localization import load_translations
from reviewpay.backend.services import negotiate_locale

blueprint = Blueprint("translations", __name__, url_prefix="/api/v1/translations")


@blueprint.get("/", defaults={"locale": None})
@blueprint.get("/<locale>")
def get_translations(locale: str | None) -> tuple[Any, int]:
    """Return the catalogue chosen by path, ``?locale=`` or ``Accept-Language``."""

    payload = load_translations(negotiate_locale(request, locale))
    response = jsonify(payload)
    response.headers["Content-Language"] = payload["locale"]
    return response, 200
