"""Campaign billing: what a client pays to recruit reviewers.

The order of operations is fixed and every step floors:

1. reward total = recruits x reward per person
2. agency total = recruits x agency fee per person
3. base = reward total + agency total
4. surcharge = floor(base x card rate) for card payments, otherwise 0
5. supply price = base + surcharge
6. VAT = floor(supply price x VAT rate)
7. total = supply price + VAT

Bank-transfer quotes additionally report how much the same booking would have
cost by card (``discount_from_card``).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from decimal import Decimal
from typing import NamedTuple

from reviewpay.backend.app.localization import get_translator
from reviewpay.backend.app.models import (
    CampaignBillingInput,
    CampaignBillingResult,
    PaymentMethod,
    PaymentMethodComparison,
    PlatformAllocation,
    PlatformBillingResult,
)
from reviewpay.backend.config.billing_config import (
    BillingConfiguration,
    load_billing_configuration,
)
from reviewpay.backend.errors import ValidationError

from .utils import check_amount, ensure_amount, ensure_rate, floor_amount, format_number

_LOGGER = logging.getLogger(__name__)

_ZERO_RATE = Decimal("0")


class _Pricing(NamedTuple):
    surcharge_amount: int
    supply_price: int
    vat_amount: int
    total_amount: int


def _price(base_amount: int, surcharge_rate: Decimal, vat_rate: Decimal) -> _Pricing:
    surcharge_amount = floor_amount(base_amount, surcharge_rate)
    supply_price = check_amount(base_amount + surcharge_amount, "supply_price")
    vat_amount = floor_amount(supply_price, vat_rate)
    total_amount = check_amount(supply_price + vat_amount, "total_amount")
    return _Pricing(surcharge_amount, supply_price, vat_amount, total_amount)


def _price_from_supply(supply_price: int, vat_rate: Decimal) -> int:
    supply_price = check_amount(supply_price, "supply_price")
    return check_amount(supply_price + floor_amount(supply_price, vat_rate), "total_amount")


def _resolve_agency_fee(value: int | None, config: BillingConfiguration) -> int:
    if value is None:
        return config.fees.agency_fee_per_person
    return ensure_amount(value, "agency_fee_per_person")


def _resolve_card_rate(value: Decimal | None, config: BillingConfiguration) -> Decimal:
    if value is None:
        return config.rates.card_surcharge
    return ensure_rate(value, "card_surcharge_rate")


def calculate_campaign_billing(
    payload: CampaignBillingInput,
    *,
    config: BillingConfiguration | None = None,
) -> CampaignBillingResult:
    """Return the billing breakdown for ``payload``.

    Raises :class:`~reviewpay.backend.errors.ValidationError` for negative or
    non-integer counts and amounts, and
    :class:`~reviewpay.backend.errors.ArithmeticOverflowError` when a total
    leaves the exactly representable range.
    """

    if config is None:
        config = load_billing_configuration()

    recruit_count = ensure_amount(payload.recruit_count, "recruit_count")
    reward_per_person = ensure_amount(
        payload.reward_point_per_person, "reward_point_per_person"
    )
    agency_fee = _resolve_agency_fee(payload.agency_fee_per_person, config)
    card_rate = _resolve_card_rate(payload.card_surcharge_rate, config)
    method = PaymentMethod.parse(payload.payment_method)
    vat_rate = config.rates.vat

    reward_total = check_amount(recruit_count * reward_per_person, "reward_point_total")
    agency_total = check_amount(recruit_count * agency_fee, "agency_fee_total")
    base_amount = check_amount(reward_total + agency_total, "base_amount")

    surcharge_rate = card_rate if method is PaymentMethod.CREDIT_CARD else _ZERO_RATE
    pricing = _price(base_amount, surcharge_rate, vat_rate)

    discount_from_card: int | None = None
    if method is PaymentMethod.BANK_TRANSFER:
        card_pricing = _price(base_amount, card_rate, vat_rate)
        discount_from_card = card_pricing.total_amount - pricing.total_amount

    _LOGGER.debug(
        "Campaign billing computed: recruits=%s method=%s total=%s",
        recruit_count,
        method.value,
        pricing.total_amount,
    )

    return CampaignBillingResult(
        recruit_count=recruit_count,
        reward_point_per_person=reward_per_person,
        agency_fee_per_person=agency_fee,
        reward_point_total=reward_total,
        agency_fee_total=agency_total,
        base_amount=base_amount,
        surcharge_rate=surcharge_rate,
        surcharge_amount=pricing.surcharge_amount,
        supply_price=pricing.supply_price,
        vat_amount=pricing.vat_amount,
        total_amount=pricing.total_amount,
        payment_method=method,
        discount_from_card=discount_from_card,
    )


def calculate_campaign_billing_by_platform(
    platforms: Mapping[str, PlatformAllocation],
    *,
    payment_method: PaymentMethod | str = PaymentMethod.BANK_TRANSFER,
    agency_fee_per_person: int | None = None,
    card_surcharge_rate: Decimal | None = None,
    config: BillingConfiguration | None = None,
) -> PlatformBillingResult:
    """Quote each platform separately and aggregate the results.

    The combined VAT is floored once on the summed supply price, so it can be
    one won higher than the sum of the per-platform VAT amounts.
    """

    if not platforms:
        raise ValidationError("At least one platform allocation is required")

    if config is None:
        config = load_billing_configuration()
    agency_fee = _resolve_agency_fee(agency_fee_per_person, config)
    card_rate = _resolve_card_rate(card_surcharge_rate, config)
    method = PaymentMethod.parse(payment_method)
    vat_rate = config.rates.vat

    results: dict[str, CampaignBillingResult] = {}
    for name, allocation in platforms.items():
        if not str(name).strip():
            raise ValidationError("Platform names must be non-empty")
        results[str(name)] = calculate_campaign_billing(
            CampaignBillingInput(
                recruit_count=allocation.recruit_count,
                reward_point_per_person=allocation.reward_point_per_person,
                payment_method=method,
                agency_fee_per_person=agency_fee,
                card_surcharge_rate=card_rate,
            ),
            config=config,
        )

    quotes = list(results.values())
    supply_price = check_amount(sum(quote.supply_price for quote in quotes), "supply_price")
    vat_amount = floor_amount(supply_price, vat_rate)
    total_amount = check_amount(supply_price + vat_amount, "total_amount")

    discount_from_card: int | None = None
    if method is PaymentMethod.BANK_TRANSFER:
        card_supply = sum(
            quote.base_amount + floor_amount(quote.base_amount, card_rate) for quote in quotes
        )
        discount_from_card = _price_from_supply(card_supply, vat_rate) - total_amount

    combined = CampaignBillingResult(
        recruit_count=sum(quote.recruit_count for quote in quotes),
        # Mixed rewards have no single per-person value.
        reward_point_per_person=0,
        agency_fee_per_person=agency_fee,
        reward_point_total=sum(quote.reward_point_total for quote in quotes),
        agency_fee_total=sum(quote.agency_fee_total for quote in quotes),
        base_amount=sum(quote.base_amount for quote in quotes),
        surcharge_rate=card_rate if method is PaymentMethod.CREDIT_CARD else _ZERO_RATE,
        surcharge_amount=sum(quote.surcharge_amount for quote in quotes),
        supply_price=supply_price,
        vat_amount=vat_amount,
        total_amount=total_amount,
        payment_method=method,
        discount_from_card=discount_from_card,
    )

    return PlatformBillingResult(platforms=results, combined=combined)


def compare_billing_by_payment_method(
    payload: CampaignBillingInput,
    *,
    locale: str | None = None,
    config: BillingConfiguration | None = None,
) -> PaymentMethodComparison:
    """Quote ``payload`` under both payment methods and describe the savings.

    ``payload.payment_method`` is ignored.
    """

    if config is None:
        config = load_billing_configuration()
    translator = get_translator(locale)

    bank_transfer = calculate_campaign_billing(
        replace(payload, payment_method=PaymentMethod.BANK_TRANSFER), config=config
    )
    credit_card = calculate_campaign_billing(
        replace(payload, payment_method=PaymentMethod.CREDIT_CARD), config=config
    )

    savings = credit_card.total_amount - bank_transfer.total_amount
    if credit_card.total_amount:
        savings_percent = savings / credit_card.total_amount * 100
    else:
        savings_percent = 0.0

    savings_formatted = translator("billing.amount", amount=format_number(savings))
    message = translator("billing.comparison.message", amount=savings_formatted)

    return PaymentMethodComparison(
        bank_transfer=bank_transfer,
        credit_card=credit_card,
        savings=savings,
        savings_percent=savings_percent,
        savings_formatted=savings_formatted,
        message=message,
    )


__all__ = [
    "calculate_campaign_billing",
    "calculate_campaign_billing_by_platform",
    "compare_billing_by_payment_method",
]
