"""Expose billing configuration consumed by the front-end.

Forms use these values to show the current rates, the withdrawal minimum and
the list of supported banks without duplicating business rules.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from flask import Blueprint, jsonify, request
from pydantic import BaseModel

from reviewpay.backend.app.localization import form_labels
from reviewpay.backend.app.models import (
    CampaignBillingRequest,
    TaxInfoRequest,
    WithdrawalQuoteRequest,
)
from reviewpay.backend.config.billing_config import load_billing_configuration
from reviewpay.backend.services import negotiate_locale
from reviewpay.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")

FORM_MODELS: dict[str, type[BaseModel]] = {
    "billing": CampaignBillingRequest,
    "withdrawal": WithdrawalQuoteRequest,
    "tax_info": TaxInfoRequest,
}


def _rate(value: Decimal) -> float:
    return float(value)


def _form_labels(locale: str | None) -> dict[str, dict[str, str]]:
    return {
        name: form_labels(
            name, locale, fields=[field for field in model.model_fields if field != "locale"]
        )
        for name, model in FORM_MODELS.items()
    }


def get_configuration_metadata() -> dict[str, Any]:
    """Summarise the active configuration for health checks."""

    config = load_billing_configuration()
    return {
        "version": get_project_version(),
        "currency": config.currency,
        "rates": {
            "vat": _rate(config.rates.vat),
            "withholding_tax": _rate(config.rates.withholding_tax),
            "card_surcharge": _rate(config.rates.card_surcharge),
        },
    }


@blueprint.get("/billing")
def get_billing_configuration() -> tuple[Any, int]:
    """Return rates, fees, withdrawal policy, bank codes and form labels."""

    config = load_billing_configuration()
    payload = {
        **get_configuration_metadata(),
        "fees": {"agency_fee_per_person": config.fees.agency_fee_per_person},
        "withdrawal": {
            "minimum_amount": config.withdrawal.minimum_amount,
            "fee": config.withdrawal.fee,
        },
        "bank_codes": [
            {"code": code, "name": name} for code, name in sorted(config.bank_codes.items())
        ],
        "forms": _form_labels(negotiate_locale(request)),
        "meta": dict(config.meta),
    }
    return jsonify(payload), 200
