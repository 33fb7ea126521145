"""REST endpoints registering and displaying reviewer tax information.

Responses only ever carry the masked RRN. The envelope and the hash stay in
the repository.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, jsonify, request

from reviewpay.backend.app.extensions import get_cipher, get_repository
from reviewpay.backend.app.http import problem_response
from reviewpay.backend.app.localization import get_translator
from reviewpay.backend.app.models import TaxInfoRequest
from reviewpay.backend.app.services.tax_info import mask_rrn, process_tax_info
from reviewpay.backend.app.services.tax_info_repository import TaxInfoRecord
from reviewpay.backend.services import parse_json_payload

_LOGGER = logging.getLogger(__name__)

blueprint = Blueprint("tax_info", __name__, url_prefix="/api/v1/reviewers")


def _serialise_record(record: TaxInfoRecord, masked_rrn: str) -> dict[str, Any]:
    return {
        "reviewer_id": record.reviewer_id,
        "legal_name": record.legal_name,
        "masked_rrn": masked_rrn,
        "verification_method": record.verification_method,
        "registered_at": record.registered_at.isoformat(),
        "updated_at": record.updated_at.isoformat(),
    }


@blueprint.get("/<reviewer_id>/tax-info")
def get_tax_info(reviewer_id: str) -> tuple[Any, int]:
    """Return the masked tax information registered for ``reviewer_id``."""

    try:
        record = get_repository().get(reviewer_id)
    except KeyError:
        return problem_response(
            "not_found",
            status=404,
            message="No tax information registered for this reviewer",
        ).to_response()

    masked = mask_rrn(get_cipher().decrypt(record.encrypted_rrn))
    return jsonify(_serialise_record(record, masked)), 200


@blueprint.put("/<reviewer_id>/tax-info")
def put_tax_info(reviewer_id: str) -> tuple[Any, int]:
    """Encrypt and store tax information; replaces an earlier registration."""

    payload = TaxInfoRequest.model_validate(parse_json_payload(request))
    result = process_tax_info(payload.to_input(), get_cipher())
    record, replaced = get_repository().register(reviewer_id, result)

    _LOGGER.info(
        "Tax information %s for reviewer %s",
        "updated" if replaced else "registered",
        reviewer_id,
    )
    body = {
        **_serialise_record(record, result.masked_rrn),
        "replaced": replaced,
        "message": get_translator(payload.locale)("tax_info.registered"),
    }
    return jsonify(body), 200 if replaced else 201
