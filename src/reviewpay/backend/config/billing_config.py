"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    BillingConfiguration,
    BillingRates,
    ConfigurationError,
    FeeConfig,
    WithdrawalPolicy,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
BILLING_CONFIG_FILE = CONFIG_DIRECTORY / "billing.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def parse_billing_configuration(raw: dict[str, Any]) -> BillingConfiguration:
    """Validate a raw mapping into a :class:`BillingConfiguration`."""

    try:
        return BillingConfiguration.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Billing configuration validation failed: {error}") from error


def read_billing_configuration(path: Path) -> BillingConfiguration:
    """Parse and validate the billing configuration stored at ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Billing configuration missing: {path.name}")
    try:
        raw = _load_yaml(path)
    except yaml.YAMLError as error:
        raise ConfigurationError(f"{path.name} is not valid YAML: {error}") from error
    return parse_billing_configuration(raw)


@lru_cache(maxsize=1)
def load_billing_configuration() -> BillingConfiguration:
    """Load and cache the bundled billing configuration."""

    return read_billing_configuration(BILLING_CONFIG_FILE)


__all__ = [
    "BILLING_CONFIG_FILE",
    "BillingConfiguration",
    "BillingRates",
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "FeeConfig",
    "WithdrawalPolicy",
    "load_billing_configuration",
    "parse_billing_configuration",
    "read_billing_configuration",
]
