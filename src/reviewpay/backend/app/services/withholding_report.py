"""Monthly withholding-tax report for completed reviewer withdrawals."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from reviewpay.backend.app.models import (
    ReviewerWithholdingSummary,
    WithholdingEntry,
    WithholdingReport,
    WithholdingTotals,
)
from reviewpay.backend.errors import DecryptionError, ValidationError

from .calculators.utils import ensure_amount
from .tax_info import TaxInfoCipher, mask_rrn
from .tax_info_repository import InMemoryTaxInfoRepository

_LOGGER = logging.getLogger(__name__)

_PERIOD_PATTERN = re.compile(r"(\d{4})-(0[1-9]|1[0-2])")
_UNKNOWN_NAME = "unknown"


def validate_period(period: str) -> str:
    """Return ``period`` when it has the ``YYYY-MM`` form."""

    if not isinstance(period, str) or not _PERIOD_PATTERN.fullmatch(period.strip()):
        raise ValidationError("Period must use the YYYY-MM format")
    return period.strip()


def _start_summary(
    entry: WithholdingEntry,
    repository: InMemoryTaxInfoRepository | None,
    cipher: TaxInfoCipher | None,
    include_rrn: bool,
) -> ReviewerWithholdingSummary:
    summary = ReviewerWithholdingSummary(
        reviewer_id=entry.reviewer_id,
        name=entry.name or _UNKNOWN_NAME,
    )
    record = repository.find(entry.reviewer_id) if repository is not None else None
    if record is None:
        return summary

    summary.legal_name = record.legal_name
    summary.tax_info_registered = True
    if cipher is None:
        return summary

    try:
        rrn = cipher.decrypt(record.encrypted_rrn)
    except DecryptionError:
        _LOGGER.warning(
            "Could not decrypt tax information for reviewer %s", entry.reviewer_id
        )
        summary.decryption_failed = True
        return summary

    summary.masked_rrn = mask_rrn(rrn)
    if include_rrn:
        summary.rrn = rrn
    return summary


def build_withholding_report(
    period: str,
    entries: Iterable[WithholdingEntry],
    *,
    repository: InMemoryTaxInfoRepository | None = None,
    cipher: TaxInfoCipher | None = None,
    include_rrn: bool = False,
) -> WithholdingReport:
    """Aggregate ``entries`` per reviewer for the reporting ``period``.

    Reviewers appear in the order they are first seen. A reviewer counts as
    reported only when every one of their withdrawals was reported. Legal
    names and RRNs come from the tax information stored in ``repository`` for
    each reviewer; entries never carry them.
    """

    period = validate_period(period)
    summaries: dict[str, ReviewerWithholdingSummary] = {}
    totals = WithholdingTotals()

    for entry in entries:
        gross = ensure_amount(entry.gross_amount, "gross_amount")
        tax = ensure_amount(entry.withholding_tax, "withholding_tax")
        payout = ensure_amount(entry.actual_payout, "actual_payout")
        if tax + payout != gross:
            raise ValidationError(
                f"Withdrawal {entry.withdrawal_id}: withholding and payout do not add up "
                "to the gross amount"
            )

        summary = summaries.get(entry.reviewer_id)
        if summary is None:
            summary = _start_summary(entry, repository, cipher, include_rrn)
            summaries[entry.reviewer_id] = summary

        summary.totals.add(gross, tax, payout)
        summary.withdrawal_ids.append(entry.withdrawal_id)
        if not entry.tax_reported:
            summary.tax_reported = False
        totals.add(gross, tax, payout)

    reviewers = tuple(summaries.values())
    return WithholdingReport(
        period=period,
        reviewers=reviewers,
        totals=totals,
        unreported_count=sum(1 for summary in reviewers if not summary.tax_reported),
    )


__all__ = ["build_withholding_report", "validate_period"]
