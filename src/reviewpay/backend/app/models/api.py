"""Pydantic models describing the public API surface."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from .values import (
    CampaignBillingInput,
    PaymentMethod,
    PayoutInput,
    PlatformAllocation,
    TaxInfoInput,
    WithholdingEntry,
)

__all__ = [
    "CampaignBillingRequest",
    "ComparisonRequest",
    "PlatformEntry",
    "PlatformBillingRequest",
    "PayoutRequest",
    "RequiredGrossRequest",
    "WithdrawalQuoteRequest",
    "TaxInfoRequest",
    "WithholdingEntryPayload",
    "WithholdingReportRequest",
    "format_validation_error",
]

PaymentMethodLiteral = Literal["bank_transfer", "credit_card"]


class RequestModel(BaseModel):
    """Base for request payloads: unknown fields are rejected, booleans are not amounts."""

    model_config = ConfigDict(extra="forbid")

    @field_validator(
        "recruit_count",
        "reward_point_per_person",
        "agency_fee_per_person",
        "gross_amount",
        "desired_net",
        "balance",
        "withholding_tax",
        "actual_payout",
        mode="before",
        check_fields=False,
    )
    @classmethod
    def _reject_boolean_amounts(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("boolean values are not valid amounts")
        return value


class CampaignBillingRequest(RequestModel):
    """Quote request for a single campaign."""

    recruit_count: int = Field(..., ge=0)
    reward_point_per_person: int = Field(..., ge=0)
    payment_method: PaymentMethodLiteral = "bank_transfer"
    agency_fee_per_person: int | None = Field(default=None, ge=0)
    card_surcharge_rate: Decimal | None = Field(default=None, ge=0, lt=1)
    locale: str | None = None

    def to_input(self) -> CampaignBillingInput:
        return CampaignBillingInput(
            recruit_count=self.recruit_count,
            reward_point_per_person=self.reward_point_per_person,
            payment_method=PaymentMethod(self.payment_method),
            agency_fee_per_person=self.agency_fee_per_person,
            card_surcharge_rate=self.card_surcharge_rate,
        )


class ComparisonRequest(RequestModel):
    """Quote request compared across both payment methods."""

    recruit_count: int = Field(..., ge=0)
    reward_point_per_person: int = Field(..., ge=0)
    agency_fee_per_person: int | None = Field(default=None, ge=0)
    card_surcharge_rate: Decimal | None = Field(default=None, ge=0, lt=1)
    locale: str | None = None

    def to_input(self) -> CampaignBillingInput:
        return CampaignBillingInput(
            recruit_count=self.recruit_count,
            reward_point_per_person=self.reward_point_per_person,
            agency_fee_per_person=self.agency_fee_per_person,
            card_surcharge_rate=self.card_surcharge_rate,
        )


class PlatformEntry(RequestModel):
    recruit_count: int = Field(..., ge=0)
    reward_point_per_person: int = Field(..., ge=0)

    def to_allocation(self) -> PlatformAllocation:
        return PlatformAllocation(
            recruit_count=self.recruit_count,
            reward_point_per_person=self.reward_point_per_person,
        )


class PlatformBillingRequest(RequestModel):
    """Quote request split across distribution platforms (e.g. naver, coupang)."""

    platforms: dict[str, PlatformEntry] = Field(..., min_length=1)
    payment_method: PaymentMethodLiteral = "bank_transfer"
    agency_fee_per_person: int | None = Field(default=None, ge=0)
    card_surcharge_rate: Decimal | None = Field(default=None, ge=0, lt=1)
    locale: str | None = None

    @field_validator("platforms")
    @classmethod
    def _require_platform_names(
        cls, value: dict[str, PlatformEntry]
    ) -> dict[str, PlatformEntry]:
        if any(not name.strip() for name in value):
            raise ValueError("platform names must be non-empty")
        return value

    def allocations(self) -> dict[str, PlatformAllocation]:
        return {name: entry.to_allocation() for name, entry in self.platforms.items()}


class PayoutRequest(RequestModel):
    gross_amount: int = Field(..., ge=0)
    tax_rate: Decimal | None = Field(default=None, ge=0, lt=1)
    locale: str | None = None

    def to_input(self) -> PayoutInput:
        return PayoutInput(gross_amount=self.gross_amount, tax_rate=self.tax_rate)


class RequiredGrossRequest(RequestModel):
    desired_net: int = Field(..., ge=0)
    tax_rate: Decimal | None = Field(default=None, ge=0, lt=1)
    minimal: bool = False
    locale: str | None = None


class WithdrawalQuoteRequest(RequestModel):
    gross_amount: int = Field(..., ge=0)
    balance: int = Field(..., ge=0)
    locale: str | None = None


class TaxInfoRequest(RequestModel):
    """Tax information submitted by a reviewer before their first withdrawal."""

    rrn: str = Field(..., min_length=1, repr=False)
    legal_name: str = Field(..., min_length=1)
    locale: str | None = None

    def to_input(self) -> TaxInfoInput:
        return TaxInfoInput(rrn=self.rrn, legal_name=self.legal_name)


class WithholdingEntryPayload(RequestModel):
    withdrawal_id: str = Field(..., min_length=1)
    reviewer_id: str = Field(..., min_length=1)
    gross_amount: int = Field(..., ge=0)
    withholding_tax: int = Field(..., ge=0)
    actual_payout: int = Field(..., ge=0)
    name: str | None = None
    tax_reported: bool = False

    def to_entry(self) -> WithholdingEntry:
        return WithholdingEntry(**self.model_dump())


class WithholdingReportRequest(RequestModel):
    period: str
    entries: list[WithholdingEntryPayload] = Field(default_factory=list)
    include_rrn: bool = False
    locale: str | None = None


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid request payload: {details}"
