"""REST endpoint compiling monthly withholding-tax reports."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from reviewpay.backend.app.extensions import get_cipher, get_repository
from reviewpay.backend.app.models import WithholdingReportRequest
from reviewpay.backend.app.services.withholding_report import build_withholding_report
from reviewpay.backend.services import build_json_response, parse_json_payload

blueprint = Blueprint("reports", __name__, url_prefix="/api/v1/reports")


@blueprint.post("/withholding")
def create_withholding_report() -> tuple[Any, int]:
    payload = WithholdingReportRequest.model_validate(parse_json_payload(request))
    report = build_withholding_report(
        payload.period,
        [entry.to_entry() for entry in payload.entries],
        repository=get_repository(),
        cipher=get_cipher(),
        include_rrn=payload.include_rrn,
    )
    return build_json_response(report)
