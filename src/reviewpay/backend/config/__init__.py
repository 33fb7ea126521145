"""Billing configuration loading, validation and process settings."""
