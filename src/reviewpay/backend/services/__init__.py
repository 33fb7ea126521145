"""Request and response helpers for the ReviewPay HTTP layer."""

from .request_parser import negotiate_locale, parse_json_payload
from .response_builder import build_json_response

__all__ = ["build_json_response", "negotiate_locale", "parse_json_payload"]
