"""Per-application services stored on ``Flask.extensions``."""

from __future__ import annotations

from flask import Flask, current_app

from reviewpay.backend.app.services.tax_info import TaxInfoCipher
from reviewpay.backend.app.services.tax_info_repository import InMemoryTaxInfoRepository

CIPHER_EXTENSION = "reviewpay.tax_info_cipher"
REPOSITORY_EXTENSION = "reviewpay.tax_info_repository"


def init_extensions(
    app: Flask,
    cipher: TaxInfoCipher,
    repository: InMemoryTaxInfoRepository,
) -> None:
    app.extensions[CIPHER_EXTENSION] = cipher
    app.extensions[REPOSITORY_EXTENSION] = repository


def get_cipher() -> TaxInfoCipher:
    return current_app.extensions[CIPHER_EXTENSION]


def get_repository() -> InMemoryTaxInfoRepository:
    return current_app.extensions[REPOSITORY_EXTENSION]


__all__ = ["get_cipher", "get_repository", "init_extensions"]
