"""Utilities for validating billing configuration data and surfacing issues."""

from __future__ import annotations

import argparse
import re
from decimal import Decimal
from pathlib import Path
from typing import Mapping, Sequence

from .billing_config import BILLING_CONFIG_FILE, read_billing_configuration
from .schema import BillingConfiguration, ConfigurationError

_BANK_CODE_PATTERN = re.compile(r"^\d{3}$")

# Rates above these bounds are legal but almost certainly a typo (3.5 vs 0.035).
_RATE_SANITY_LIMITS: Mapping[str, Decimal] = {
    "vat": Decimal("0.5"),
    "withholding_tax": Decimal("0.5"),
    "card_surcharge": Decimal("0.2"),
}


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_rates(config: BillingConfiguration) -> list[str]:
    errors: list[str] = []
    rates = {
        "vat": config.rates.vat,
        "withholding_tax": config.rates.withholding_tax,
        "card_surcharge": config.rates.card_surcharge,
    }

    for label, value in rates.items():
        if value < 0 or value >= 1:
            errors.append(
                _format_scope(f"rates.{label}", f"rate {value} must be within [0, 1)")
            )
            continue
        limit = _RATE_SANITY_LIMITS[label]
        if value > limit:
            errors.append(
                _format_scope(
                    f"rates.{label}",
                    f"rate {value} exceeds the expected ceiling of {limit}",
                )
            )

    if rates["vat"] == 0:
        errors.append(_format_scope("rates.vat", "VAT rate should not be zero"))

    return errors


def _validate_fees(config: BillingConfiguration) -> list[str]:
    errors: list[str] = []

    if config.fees.agency_fee_per_person < 0:
        errors.append(
            _format_scope("fees.agency_fee_per_person", "fee must be non-negative")
        )

    withdrawal = config.withdrawal
    if withdrawal.minimum_amount < 0:
        errors.append(
            _format_scope("withdrawal.minimum_amount", "amount must be non-negative")
        )
    if withdrawal.fee < 0:
        errors.append(_format_scope("withdrawal.fee", "fee must be non-negative"))
    elif withdrawal.minimum_amount and withdrawal.fee >= withdrawal.minimum_amount:
        errors.append(
            _format_scope(
                "withdrawal.fee",
                "fee must be lower than the minimum withdrawal amount",
            )
        )

    return errors


def _validate_bank_codes(bank_codes: Mapping[str, str]) -> list[str]:
    errors: list[str] = []

    if not bank_codes:
        errors.append(_format_scope("bank_codes", "no bank codes defined"))
        return errors

    for code, name in bank_codes.items():
        if not _BANK_CODE_PATTERN.match(code):
            errors.append(
                _format_scope(f"bank_codes.{code}", "codes must be three digits")
            )
        if not name.strip():
            errors.append(
                _format_scope(f"bank_codes.{code}", "bank name must be non-empty")
            )

    seen: dict[str, str] = {}
    for code, name in bank_codes.items():
        normalised = name.strip()
        if normalised in seen:
            errors.append(
                _format_scope(
                    f"bank_codes.{code}",
                    f"duplicate bank name also used by {seen[normalised]}",
                )
            )
        else:
            seen[normalised] = code

    return errors


def validate_billing_configuration(config: BillingConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    errors.extend(_validate_rates(config))
    errors.extend(_validate_fees(config))
    errors.extend(_validate_bank_codes(config.bank_codes))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reviewpay-validate-config",
        description="Check a billing configuration for values that load but look wrong.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        default=None,
        help="YAML file to check before deploying it (defaults to the bundled billing.yaml)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Validate ``billing.yaml`` or a candidate replacement; return the exit code."""

    args = _build_argument_parser().parse_args(argv)
    path: Path = args.config or BILLING_CONFIG_FILE

    try:
        config = read_billing_configuration(path)
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[billing] {path.name}: failed to load configuration: {error}")
        return 1

    issues = validate_billing_configuration(config)
    if issues:
        print(f"[billing] {path.name}: {len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"[billing] {path.name}: OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
