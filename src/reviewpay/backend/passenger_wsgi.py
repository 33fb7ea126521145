"""WSGI entrypoint for deploying the ReviewPay backend under Passenger."""

import logging

from reviewpay.backend.app import create_app

logging.basicConfig(level=logging.INFO)

# Passenger expects a module-level variable named ``application``.
application = create_app()
