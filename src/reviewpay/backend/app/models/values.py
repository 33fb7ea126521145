"""Frozen dataclasses for calculator inputs and results.

The calculators accept and return these types so they stay usable without the
HTTP layer. Every result exposes ``as_dict`` for JSON serialisation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from reviewpay.backend.errors import ValidationError

__all__ = [
    "PaymentMethod",
    "CampaignBillingInput",
    "CampaignBillingResult",
    "PlatformAllocation",
    "PlatformBillingResult",
    "PaymentMethodComparison",
    "PayoutInput",
    "PayoutResult",
    "WithdrawalQuote",
    "TaxInfoInput",
    "TaxInfoResult",
    "WithholdingEntry",
    "ReviewerWithholdingSummary",
    "WithholdingTotals",
    "WithholdingReport",
]


class PaymentMethod(str, Enum):
    """Payment methods offered to clients, priced differently."""

    BANK_TRANSFER = "bank_transfer"
    CREDIT_CARD = "credit_card"

    @classmethod
    def parse(cls, value: Any) -> "PaymentMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as error:
            allowed = ", ".join(member.value for member in cls)
            raise ValidationError(
                f"Unsupported payment method {value!r} (expected one of: {allowed})"
            ) from error


def _rate_to_float(rate: Decimal) -> float:
    return float(rate)


# ---------------------------------------------------------------------------
# Campaign billing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CampaignBillingInput:
    """Parameters of a campaign quote; ``None`` defaults come from configuration."""

    recruit_count: int
    reward_point_per_person: int
    payment_method: PaymentMethod | str = PaymentMethod.BANK_TRANSFER
    agency_fee_per_person: int | None = None
    card_surcharge_rate: Decimal | None = None


@dataclass(frozen=True)
class CampaignBillingResult:
    """Breakdown of what a client pays for a campaign."""

    recruit_count: int
    reward_point_per_person: int
    agency_fee_per_person: int
    reward_point_total: int
    agency_fee_total: int
    base_amount: int
    surcharge_rate: Decimal
    surcharge_amount: int
    supply_price: int
    vat_amount: int
    total_amount: int
    payment_method: PaymentMethod
    discount_from_card: int | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "recruit_count": self.recruit_count,
            "reward_point_per_person": self.reward_point_per_person,
            "agency_fee_per_person": self.agency_fee_per_person,
            "reward_point_total": self.reward_point_total,
            "agency_fee_total": self.agency_fee_total,
            "base_amount": self.base_amount,
            "surcharge_rate": _rate_to_float(self.surcharge_rate),
            "surcharge_amount": self.surcharge_amount,
            "supply_price": self.supply_price,
            "vat_amount": self.vat_amount,
            "total_amount": self.total_amount,
            "payment_method": self.payment_method.value,
        }
        if self.discount_from_card is not None:
            payload["discount_from_card"] = self.discount_from_card
        return payload


@dataclass(frozen=True)
class PlatformAllocation:
    """Recruitment on a single distribution platform."""

    recruit_count: int
    reward_point_per_person: int


@dataclass(frozen=True)
class PlatformBillingResult:
    """Per-platform quotes plus their aggregate."""

    platforms: Mapping[str, CampaignBillingResult]
    combined: CampaignBillingResult

    def as_dict(self) -> dict[str, Any]:
        return {
            "platforms": {name: result.as_dict() for name, result in self.platforms.items()},
            "combined": self.combined.as_dict(),
        }


@dataclass(frozen=True)
class PaymentMethodComparison:
    """Side-by-side totals for both payment methods."""

    bank_transfer: CampaignBillingResult
    credit_card: CampaignBillingResult
    savings: int
    savings_percent: float
    savings_formatted: str
    message: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "bank_transfer": self.bank_transfer.as_dict(),
            "credit_card": self.credit_card.as_dict(),
            "savings": self.savings,
            "savings_percent": self.savings_percent,
            "savings_formatted": self.savings_formatted,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Payouts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PayoutInput:
    gross_amount: int
    tax_rate: Decimal | None = None


@dataclass(frozen=True)
class PayoutResult:
    """Net amount a reviewer receives after withholding."""

    gross_amount: int
    withholding_tax: int
    actual_payout: int
    tax_rate: Decimal

    def as_dict(self) -> dict[str, Any]:
        return {
            "gross_amount": self.gross_amount,
            "withholding_tax": self.withholding_tax,
            "actual_payout": self.actual_payout,
            "tax_rate": _rate_to_float(self.tax_rate),
        }


@dataclass(frozen=True)
class WithdrawalQuote:
    """Outcome of a withdrawal request checked against the policy."""

    payout: PayoutResult
    fee: int
    net_transfer: int
    balance_after: int

    def as_dict(self) -> dict[str, Any]:
        return {
            **self.payout.as_dict(),
            "fee": self.fee,
            "net_transfer": self.net_transfer,
            "balance_after": self.balance_after,
        }


# ---------------------------------------------------------------------------
# Tax information
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TaxInfoInput:
    rrn: str = field(repr=False)
    legal_name: str


@dataclass(frozen=True)
class TaxInfoResult:
    """Storage-ready tax information; never holds the plaintext RRN."""

    encrypted_rrn: str = field(repr=False)
    rrn_hash: str = field(repr=False)
    masked_rrn: str
    legal_name: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "encrypted_rrn": self.encrypted_rrn,
            "rrn_hash": self.rrn_hash,
            "masked_rrn": self.masked_rrn,
            "legal_name": self.legal_name,
        }


# ---------------------------------------------------------------------------
# Withholding reports
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WithholdingEntry:
    """A completed withdrawal that falls inside a reporting period."""

    withdrawal_id: str
    reviewer_id: str
    gross_amount: int
    withholding_tax: int
    actual_payout: int
    name: str | None = None
    tax_reported: bool = False


@dataclass(slots=True)
class WithholdingTotals:
    """Running totals for gross amounts, withheld tax and payouts."""

    gross_amount: int = 0
    withholding_tax: int = 0
    actual_payout: int = 0
    withdrawal_count: int = 0

    def add(self, gross_amount: int, withholding_tax: int, actual_payout: int) -> None:
        self.gross_amount += gross_amount
        self.withholding_tax += withholding_tax
        self.actual_payout += actual_payout
        self.withdrawal_count += 1

    def as_dict(self) -> dict[str, int]:
        return {
            "gross_amount": self.gross_amount,
            "withholding_tax": self.withholding_tax,
            "actual_payout": self.actual_payout,
            "withdrawal_count": self.withdrawal_count,
        }


@dataclass(slots=True)
class ReviewerWithholdingSummary:
    """Per-reviewer aggregate inside a withholding report."""

    reviewer_id: str
    name: str
    legal_name: str | None = None
    tax_info_registered: bool = False
    masked_rrn: str | None = None
    rrn: str | None = field(default=None, repr=False)
    decryption_failed: bool = False
    totals: WithholdingTotals = field(default_factory=WithholdingTotals)
    withdrawal_ids: list[str] = field(default_factory=list)
    tax_reported: bool = True

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "reviewer_id": self.reviewer_id,
            "name": self.name,
            "legal_name": self.legal_name,
            "tax_info_registered": self.tax_info_registered,
            "masked_rrn": self.masked_rrn,
            "decryption_failed": self.decryption_failed,
            **self.totals.as_dict(),
            "withdrawal_ids": list(self.withdrawal_ids),
            "tax_reported": self.tax_reported,
        }
        if self.rrn is not None:
            payload["rrn"] = self.rrn
        return payload


@dataclass(frozen=True)
class WithholdingReport:
    period: str
    reviewers: tuple[ReviewerWithholdingSummary, ...]
    totals: WithholdingTotals
    unreported_count: int

    @property
    def reviewer_count(self) -> int:
        return len(self.reviewers)

    def as_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "reviewers": [reviewer.as_dict() for reviewer in self.reviewers],
            "totals": {
                "reviewer_count": self.reviewer_count,
                **self.totals.as_dict(),
                "unreported_count": self.unreported_count,
            },
        }
