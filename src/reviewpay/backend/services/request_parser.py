"""Helpers for normalising incoming JSON requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest

from reviewpay.backend.app.localization import available_locales, normalise_locale


def negotiate_locale(req: Request, requested: Any = None) -> str | None:
    """Pick the catalogue locale for ``req``.

    An explicit ``requested`` value wins, then the ``locale`` query parameter,
    then the best ``Accept-Language`` match by quality. ``None`` means the
    client gave no usable hint and the Korean default applies downstream.
    """

    if isinstance(requested, str) and requested.strip():
        return normalise_locale(requested)

    locale_param = req.args.get("locale")
    if locale_param:
        return normalise_locale(locale_param)

    return req.accept_languages.best_match(available_locales())


def parse_json_payload(req: Request) -> dict[str, Any]:
    """Extract a JSON object from ``req`` and resolve its locale."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = dict(data)
    locale = negotiate_locale(req, payload.get("locale"))
    if locale is not None:
        payload["locale"] = locale

    return payload
