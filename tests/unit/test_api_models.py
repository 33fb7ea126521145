"""Unit tests for request payload models."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from reviewpay.backend.app.models import (
    CampaignBillingRequest,
    PaymentMethod,
    PlatformBillingRequest,
    TaxInfoRequest,
    WithholdingReportRequest,
    format_validation_error,
)


def test_campaign_request_converts_to_input() -> None:
    request = CampaignBillingRequest.model_validate(
        {
            "recruit_count": 10,
            "reward_point_per_person": 30000,
            "payment_method": "credit_card",
            "card_surcharge_rate": "0.04",
        }
    )

    payload = request.to_input()

    assert payload.payment_method is PaymentMethod.CREDIT_CARD
    assert payload.card_surcharge_rate == Decimal("0.04")
    assert payload.agency_fee_per_person is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"recruit_count": True},
        {"recruit_count": -1},
        {"reward_point_per_person": 1.5},
        {"payment_method": "paypal"},
        {"card_surcharge_rate": 1},
        {"unexpected": "field"},
    ],
)
def test_campaign_request_rejects_invalid_values(overrides: dict) -> None:
    data = {"recruit_count": 10, "reward_point_per_person": 30000, **overrides}

    with pytest.raises(ValidationError):
        CampaignBillingRequest.model_validate(data)


def test_platform_request_requires_entries() -> None:
    with pytest.raises(ValidationError):
        PlatformBillingRequest.model_validate({"platforms": {}})

    with pytest.raises(ValidationError):
        PlatformBillingRequest.model_validate(
            {"platforms": {" ": {"recruit_count": 1, "reward_point_per_person": 1}}}
        )


def test_platform_request_allocations() -> None:
    request = PlatformBillingRequest.model_validate(
        {"platforms": {"naver": {"recruit_count": 3, "reward_point_per_person": 1000}}}
    )

    allocation = request.allocations()["naver"]

    assert allocation.recruit_count == 3
    assert allocation.reward_point_per_person == 1000


def test_tax_info_request_hides_rrn_in_repr() -> None:
    request = TaxInfoRequest.model_validate(
        {"rrn": "900101-1234567", "legal_name": "Hong Gildong"}
    )

    assert "1234567" not in repr(request)
    assert request.to_input().rrn == "900101-1234567"


def test_withholding_request_builds_entries() -> None:
    request = WithholdingReportRequest.model_validate(
        {
            "period": "2024-03",
            "entries": [
                {
                    "withdrawal_id": "w-1",
                    "reviewer_id": "r-1",
                    "gross_amount": 100000,
                    "withholding_tax": 3300,
                    "actual_payout": 96700,
                }
            ],
        }
    )

    entry = request.entries[0].to_entry()

    assert entry.reviewer_id == "r-1"
    assert entry.tax_reported is False
    assert entry.name is None


@pytest.mark.parametrize("field", ["encrypted_rrn", "legal_name"])
def test_withholding_entries_cannot_carry_tax_info(field: str) -> None:
    entry = {
        "withdrawal_id": "w-1",
        "reviewer_id": "r-1",
        "gross_amount": 100000,
        "withholding_tax": 3300,
        "actual_payout": 96700,
        field: "value",
    }

    with pytest.raises(ValidationError):
        WithholdingReportRequest.model_validate({"period": "2024-03", "entries": [entry]})


def test_format_validation_error_lists_fields() -> None:
    with pytest.raises(ValidationError) as excinfo:
        CampaignBillingRequest.model_validate({"recruit_count": -5})

    message = format_validation_error(excinfo.value)

    assert message.startswith("Invalid request payload:")
    assert "recruit_count: value cannot be negative" in message
    assert "reward_point_per_person" in message
