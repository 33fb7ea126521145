"""Billing, payout and tax-information services."""
