"""Utilities for serialising service results."""

from __future__ import annotations

from typing import Any, Protocol, Tuple

from flask import jsonify

ResponseTuple = Tuple[Any, int]


class SupportsAsDict(Protocol):
    def as_dict(self) -> dict[str, Any]: ...


def build_json_response(result: SupportsAsDict, *, status: int = 200) -> ResponseTuple:
    """Return a Flask JSON response for ``result``."""

    return jsonify(result.as_dict()), status
