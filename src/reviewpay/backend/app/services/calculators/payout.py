"""Reviewer payouts: statutory withholding on point-to-cash conversions."""

from __future__ import annotations

import logging
from decimal import Decimal

from reviewpay.backend.app.localization import get_translator
from reviewpay.backend.app.models import PayoutInput, PayoutResult, WithdrawalQuote
from reviewpay.backend.config.billing_config import (
    BillingConfiguration,
    load_billing_configuration,
)
from reviewpay.backend.errors import ValidationError

from .utils import (
    ceil_divide,
    check_amount,
    ensure_amount,
    ensure_rate,
    floor_amount,
    format_number,
    format_won,
)

_LOGGER = logging.getLogger(__name__)


def _resolve_tax_rate(value: Decimal | None, config: BillingConfiguration | None) -> Decimal:
    if value is not None:
        return ensure_rate(value, "tax_rate")
    if config is None:
        config = load_billing_configuration()
    return config.rates.withholding_tax


def _net(gross_amount: int, tax_rate: Decimal) -> int:
    return gross_amount - floor_amount(gross_amount, tax_rate)


def calculate_payout(
    payload: PayoutInput,
    *,
    config: BillingConfiguration | None = None,
) -> PayoutResult:
    """Return the withholding breakdown for ``payload.gross_amount``."""

    gross_amount = ensure_amount(payload.gross_amount, "gross_amount")
    tax_rate = _resolve_tax_rate(payload.tax_rate, config)

    withholding_tax = floor_amount(gross_amount, tax_rate)
    return PayoutResult(
        gross_amount=gross_amount,
        withholding_tax=withholding_tax,
        actual_payout=gross_amount - withholding_tax,
        tax_rate=tax_rate,
    )


def calculate_required_gross_amount(
    desired_net: int,
    tax_rate: Decimal | None = None,
    *,
    minimal: bool = False,
    config: BillingConfiguration | None = None,
) -> int:
    """Return a gross amount whose payout is at least ``desired_net``.

    The estimate ``ceil(desired_net / (1 - rate))`` is verified against
    :func:`calculate_payout` and raised one won at a time until it pays out
    enough. Because withholding is floored, a gross one won below the estimate
    sometimes pays out the same amount; ``minimal=True`` also walks down to
    the smallest such gross.

    The default is therefore not always minimal: ``96_700`` yields ``100_000``
    although ``99_999`` nets the same. Use ``minimal=True`` whenever the result
    must be the smallest gross whose payout reaches ``desired_net``.
    """

    desired_net = ensure_amount(desired_net, "desired_net")
    rate = _resolve_tax_rate(tax_rate, config)
    if desired_net == 0:
        return 0

    gross_amount = ceil_divide(desired_net, Decimal(1) - rate)
    while _net(gross_amount, rate) < desired_net:
        gross_amount += 1

    if minimal:
        while gross_amount > 0 and _net(gross_amount - 1, rate) >= desired_net:
            gross_amount -= 1

    return check_amount(gross_amount, "gross_amount")


def quote_withdrawal(
    gross_amount: int,
    *,
    balance: int,
    locale: str | None = None,
    config: BillingConfiguration | None = None,
) -> WithdrawalQuote:
    """Check a withdrawal request against the policy and price it.

    The requested amount must reach the configured minimum and must not exceed
    the reviewer's point ``balance``. The withdrawal fee is charged on top of
    withholding. The minimum-amount error is worded for ``locale`` since
    reviewers see it verbatim.
    """

    if config is None:
        config = load_billing_configuration()
    policy = config.withdrawal

    gross_amount = ensure_amount(gross_amount, "gross_amount")
    balance = ensure_amount(balance, "balance")

    if gross_amount < policy.minimum_amount:
        translator = get_translator(locale)
        minimum = translator("billing.amount", amount=format_number(policy.minimum_amount))
        raise ValidationError(translator("payout.minimum_withdrawal", amount=minimum))
    if gross_amount > balance:
        raise ValidationError(
            f"Withdrawal amount {format_won(gross_amount)} exceeds the available "
            f"balance of {format_won(balance)}"
        )

    payout = calculate_payout(PayoutInput(gross_amount=gross_amount), config=config)
    if policy.fee > payout.actual_payout:
        raise ValidationError("Withdrawal fee exceeds the payout amount")

    _LOGGER.debug(
        "Withdrawal quoted: gross=%s withheld=%s fee=%s",
        gross_amount,
        payout.withholding_tax,
        policy.fee,
    )

    return WithdrawalQuote(
        payout=payout,
        fee=policy.fee,
        net_transfer=payout.actual_payout - policy.fee,
        balance_after=balance - gross_amount,
    )


__all__ = [
    "calculate_payout",
    "calculate_required_gross_amount",
    "quote_withdrawal",
]
