"""Integration tests for the configuration API."""

from __future__ import annotations

from flask.testing import FlaskClient

from reviewpay.backend.config.billing_config import load_billing_configuration


def test_billing_configuration_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/billing")

    assert response.status_code == 200
    payload = response.get_json()
    config = load_billing_configuration()

    assert payload["fees"] == {"agency_fee_per_person": 3000}
    assert payload["withdrawal"] == {"minimum_amount": 10000, "fee": 0}
    assert payload["rates"]["withholding_tax"] == 0.033
    assert len(payload["bank_codes"]) == len(config.bank_codes)
    assert {"code": "004", "name": "KB국민은행"} in payload["bank_codes"]

    codes = [entry["code"] for entry in payload["bank_codes"]]
    assert codes == sorted(codes)


def test_billing_configuration_labels_each_form_field(client: FlaskClient) -> None:
    payload = client.get("/api/v1/config/billing").get_json()

    assert list(payload["forms"]) == ["billing", "withdrawal", "tax_info"]
    assert payload["forms"]["billing"]["recruit_count"] == "모집 인원"
    assert payload["forms"]["withdrawal"] == {
        "gross_amount": "출금 신청액",
        "balance": "보유 포인트",
    }
    assert "locale" not in payload["forms"]["tax_info"]


def test_billing_configuration_labels_follow_locale(client: FlaskClient) -> None:
    english = client.get("/api/v1/config/billing?locale=en").get_json()
    negotiated = client.get(
        "/api/v1/config/billing", headers={"Accept-Language": "en-US"}
    ).get_json()

    assert english["forms"]["tax_info"] == {
        "rrn": "Resident registration number",
        "legal_name": "Legal name",
    }
    assert negotiated["forms"] == english["forms"]
