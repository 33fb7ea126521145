"""REST endpoints previewing reviewer payouts and withdrawals."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from reviewpay.backend.app.models import (
    PayoutInput,
    PayoutRequest,
    RequiredGrossRequest,
    WithdrawalQuoteRequest,
)
from reviewpay.backend.app.services.calculators import (
    calculate_payout,
    calculate_required_gross_amount,
    quote_withdrawal,
)
from reviewpay.backend.services import build_json_response, parse_json_payload

blueprint = Blueprint("payouts", __name__, url_prefix="/api/v1/payouts")


@blueprint.post("/preview")
def preview_payout() -> tuple[Any, int]:
    """Return the withholding breakdown for a gross withdrawal amount."""

    payload = PayoutRequest.model_validate(parse_json_payload(request))
    return build_json_response(calculate_payout(payload.to_input()))


@blueprint.post("/required-gross")
def required_gross() -> tuple[Any, int]:
    """Return the gross amount a reviewer must withdraw to receive ``desired_net``."""

    payload = RequiredGrossRequest.model_validate(parse_json_payload(request))
    gross_amount = calculate_required_gross_amount(
        payload.desired_net, payload.tax_rate, minimal=payload.minimal
    )
    payout = calculate_payout(PayoutInput(gross_amount=gross_amount, tax_rate=payload.tax_rate))
    body = {"desired_net": payload.desired_net, **payout.as_dict()}
    return jsonify(body), 200


@blueprint.post("/withdrawals/quote")
def quote_withdrawal_request() -> tuple[Any, int]:
    payload = WithdrawalQuoteRequest.model_validate(parse_json_payload(request))
    quote = quote_withdrawal(
        payload.gross_amount, balance=payload.balance, locale=payload.locale
    )
    return build_json_response(quote)
