"""REST endpoints quoting campaign charges for advertisers."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from reviewpay.backend.app.models import (
    CampaignBillingRequest,
    ComparisonRequest,
    PaymentMethod,
    PlatformBillingRequest,
)
from reviewpay.backend.app.services.calculators import (
    calculate_campaign_billing,
    calculate_campaign_billing_by_platform,
    compare_billing_by_payment_method,
)
from reviewpay.backend.services import build_json_response, parse_json_payload

blueprint = Blueprint("billing", __name__, url_prefix="/api/v1/billing")


@blueprint.post("/campaigns")
def quote_campaign() -> tuple[Any, int]:
    """Quote a single campaign for the requested payment method."""

    payload = CampaignBillingRequest.model_validate(parse_json_payload(request))
    return build_json_response(calculate_campaign_billing(payload.to_input()))


@blueprint.post("/campaigns/platforms")
def quote_campaign_by_platform() -> tuple[Any, int]:
    """Quote a campaign split across several distribution platforms."""

    payload = PlatformBillingRequest.model_validate(parse_json_payload(request))
    result = calculate_campaign_billing_by_platform(
        payload.allocations(),
        payment_method=PaymentMethod(payload.payment_method),
        agency_fee_per_person=payload.agency_fee_per_person,
        card_surcharge_rate=payload.card_surcharge_rate,
    )
    return build_json_response(result)


@blueprint.post("/campaigns/comparison")
def compare_payment_methods() -> tuple[Any, int]:
    payload = ComparisonRequest.model_validate(parse_json_payload(request))
    result = compare_billing_by_payment_method(payload.to_input(), locale=payload.locale)
    return build_json_response(result)
