"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from reviewpay.backend.app import create_app  # noqa: E402
from reviewpay.backend.app.services.tax_info import TaxInfoCipher  # noqa: E402
from reviewpay.backend.config.settings import EncryptionSettings  # noqa: E402

# Throwaway keys; never used outside the test suite.
TEST_KEY_HEX = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"
OTHER_KEY_HEX = "ffeeddccbbaa99887766554433221100ffeeddccbbaa99887766554433221100"


@pytest.fixture()
def encryption_settings() -> EncryptionSettings:
    return EncryptionSettings.from_hex(TEST_KEY_HEX)


@pytest.fixture()
def cipher(encryption_settings: EncryptionSettings) -> TaxInfoCipher:
    return TaxInfoCipher.from_settings(encryption_settings)


@pytest.fixture()
def app(encryption_settings: EncryptionSettings) -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app(encryption_settings)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
