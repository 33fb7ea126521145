"""Pydantic models describing the billing configuration schema."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _coerce_rate(value: Any) -> Decimal:
    # Floats go through ``str`` so 0.035 stays 0.035 instead of its binary expansion.
    if isinstance(value, bool):
        raise ConfigurationError("Rates must be numeric values")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as error:
        raise ConfigurationError(f"Invalid rate value: {value!r}") from error


class BillingRates(ImmutableModel):
    """Statutory and commercial rates applied by the calculators."""

    vat: Decimal = Field(default=Decimal("0.1"))
    withholding_tax: Decimal = Field(default=Decimal("0.033"))
    card_surcharge: Decimal = Field(default=Decimal("0.035"))

    @field_validator("vat", "withholding_tax", "card_surcharge", mode="before")
    @classmethod
    def _parse_rate(cls, value: Any) -> Decimal:
        return _coerce_rate(value)

    @model_validator(mode="after")
    def _validate_ranges(self) -> BillingRates:
        for label, rate in (
            ("vat", self.vat),
            ("withholding_tax", self.withholding_tax),
            ("card_surcharge", self.card_surcharge),
        ):
            if not rate.is_finite() or rate < 0 or rate >= 1:
                raise ConfigurationError(f"Rate '{label}' must be within [0, 1)")
        return self


class FeeConfig(ImmutableModel):
    """Per-person fees charged to clients."""

    agency_fee_per_person: int = Field(default=3000)

    @model_validator(mode="after")
    def _validate_fee(self) -> FeeConfig:
        if self.agency_fee_per_person < 0:
            raise ConfigurationError("Agency fee per person must be non-negative")
        return self


class WithdrawalPolicy(ImmutableModel):
    """Rules governing reviewer point withdrawals."""

    minimum_amount: int = Field(default=10000)
    fee: int = Field(default=0)

    @model_validator(mode="after")
    def _validate_policy(self) -> WithdrawalPolicy:
        if self.minimum_amount < 0:
            raise ConfigurationError("Minimum withdrawal amount must be non-negative")
        if self.fee < 0:
            raise ConfigurationError("Withdrawal fee must be non-negative")
        return self


class BillingConfiguration(ImmutableModel):
    """Top-level billing configuration loaded from YAML."""

    currency: str = "KRW"
    rates: BillingRates = Field(default_factory=BillingRates)
    fees: FeeConfig = Field(default_factory=FeeConfig)
    withdrawal: WithdrawalPolicy = Field(default_factory=WithdrawalPolicy)
    bank_codes: Mapping[str, str] = Field(default_factory=dict)
    meta: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("bank_codes", mode="before")
    @classmethod
    def _coerce_bank_codes(cls, value: Any) -> Mapping[str, str]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ConfigurationError("Bank codes must be provided as a mapping")
        # YAML reads unquoted codes such as 004 as integers; restore the padding.
        return {
            (f"{key:03d}" if isinstance(key, int) else str(key)): str(name)
            for key, name in value.items()
        }

    def bank_name(self, code: str) -> str:
        """Return the display name for ``code`` or raise ``KeyError``."""

        return self.bank_codes[code]


__all__ = [
    "BillingConfiguration",
    "BillingRates",
    "ConfigurationError",
    "FeeConfig",
    "ImmutableModel",
    "WithdrawalPolicy",
]
