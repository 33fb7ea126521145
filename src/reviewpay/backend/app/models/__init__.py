"""Typed request/response models shared across the billing services.

Pydantic models in :mod:`.api` validate inbound JSON; the frozen dataclasses
in :mod:`.values` carry calculator inputs and results. Routes convert the
former into the latter so the calculators never depend on the HTTP layer.
"""

from __future__ import annotations

from .api import (
    CampaignBillingRequest,
    ComparisonRequest,
    PayoutRequest,
    PlatformBillingRequest,
    PlatformEntry,
    RequiredGrossRequest,
    TaxInfoRequest,
    WithdrawalQuoteRequest,
    WithholdingEntryPayload,
    WithholdingReportRequest,
    format_validation_error,
)
from .values import (
    CampaignBillingInput,
    CampaignBillingResult,
    PaymentMethod,
    PaymentMethodComparison,
    PayoutInput,
    PayoutResult,
    PlatformAllocation,
    PlatformBillingResult,
    ReviewerWithholdingSummary,
    TaxInfoInput,
    TaxInfoResult,
    WithdrawalQuote,
    WithholdingEntry,
    WithholdingReport,
    WithholdingTotals,
)

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
    "CampaignBillingRequest",
    "ComparisonRequest",
    "PayoutRequest",
    "PlatformBillingRequest",
    "PlatformEntry",
    "RequiredGrossRequest",
    "TaxInfoRequest",
    "WithdrawalQuoteRequest",
    "WithholdingEntryPayload",
    "WithholdingReportRequest",
    "format_validation_error",
]
