"""Domain-specific calculation helpers."""

from .campaign import (
    calculate_campaign_billing,
    calculate_campaign_billing_by_platform,
    compare_billing_by_payment_method,
)
from .payout import calculate_payout, calculate_required_gross_amount, quote_withdrawal
from .utils import (
    MAX_SAFE_AMOUNT,
    floor_amount,
    format_krw,
    format_number,
    format_percent,
    format_won,
)

__all__ = [
    "MAX_SAFE_AMOUNT",
    "calculate_campaign_billing",
    "calculate_campaign_billing_by_platform",
    "calculate_payout",
    "calculate_required_gross_amount",
    "compare_billing_by_payment_method",
    "floor_amount",
    "format_krw",
    "format_number",
    "format_percent",
    "format_won",
    "quote_withdrawal",
]
