"""Integration tests for application endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient

from reviewpay.backend.version import get_project_version


def test_health_endpoint(client: FlaskClient) -> None:
    """Ensure the health endpoint returns a successful status payload."""
    response = client.get("/health")
    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["version"] == get_project_version()
    assert payload["currency"] == "KRW"
    assert payload["rates"] == {
        "vat": 0.1,
        "withholding_tax": 0.033,
        "card_surcharge": 0.035,
    }
    assert response.mimetype == "application/json"
