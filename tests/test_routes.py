# This project was developed with assistance from AI tools.
"""Tests for the HTTP surface: calculator, alternatives and chat turns."""

import pytest
from fastapi.testclient import TestClient

from seller_finance.main import create_app
from seller_finance.services.discounting import geometric_sum_discount

NPV_BODY = {
    "target_pv": 1_000_000,
    "monthly_rate": 0.02,
    "down_amount": 300_000,
    "down_year": 2026,
    "down_month": 11,
    "n_installments": 24,
    "start_year": 2026,
    "start_month": 10,
}


@pytest.fixture
def client(catalog):
    return TestClient(create_app(catalog))


def test_health(client):
    response = client.get("/health/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestNPVEndpoint:
    def test_happy_path(self, client):
        response = client.post("/api/calculator/npv", json=NPV_BODY)
        assert response.status_code == 200
        data = response.json()
        expected = (1_000_000 - 300_000 / 1.02) / geometric_sum_discount(24, 0.02)
        assert data["model_a"]["monthly_installment"] == pytest.approx(expected)
        assert data["down_payment_date"] == "2026-11"
        assert len(data["model_b"]["schedule"]) == 24

    def test_both_targets_is_problem_response(self, client):
        response = client.post("/api/calculator/npv", json={**NPV_BODY, "target_nominal": 1})
        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "invalid_input"
        assert body["title"] == "Unprocessable Entity"

    def test_degenerate_input(self, client):
        response = client.post("/api/calculator/npv", json={**NPV_BODY, "n_installments": 0})
        assert response.status_code == 422
        assert response.json()["code"] == "degenerate_input"

    def test_overflowing_rate_is_degenerate(self, client):
        body = {**NPV_BODY, "monthly_rate": -0.9, "n_installments": 360}
        response = client.post("/api/calculator/npv", json=body)
        assert response.status_code == 422
        assert response.json()["code"] == "degenerate_input"

    def test_schema_validation(self, client):
        response = client.post("/api/calculator/npv", json={**NPV_BODY, "down_month": 13})
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_request_id_echoed(self, client):
        response = client.post(
            "/api/calculator/npv",
            json={**NPV_BODY, "n_installments": 0},
            headers={"x-request-id": "req-123"},
        )
        assert response.json()["request_id"] == "req-123"


class TestAlternativesEndpoint:
    def _body(self, **overrides):
        body = {
            "property_id": "GZP-H04-001",
            "desired_installment": 40_000,
            "monthly_rate": 0.02,
            "down_amount": 0,
            "down_year": 2026,
            "down_month": 10,
            "n_installments": 24,
            "start_year": 2026,
            "start_month": 10,
        }
        body.update(overrides)
        return body

    def test_ranked_matches(self, client):
        response = client.post("/api/calculator/alternatives", json=self._body())
        assert response.status_code == 200
        ids = [match["property"]["id"] for match in response.json()]
        assert ids == ["GZP-H05-003", "GZP-H04-002", "GZP-H06-004"]

    def test_tolerance_override(self, client):
        response = client.post("/api/calculator/alternatives", json=self._body(tolerance=500))
        assert len(response.json()) == 2

    def test_unknown_property(self, client):
        response = client.post(
            "/api/calculator/alternatives", json=self._body(property_id="GZP-X99-999")
        )
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_empty_catalog(self):
        client = TestClient(create_app())
        response = client.post("/api/calculator/alternatives", json=self._body())
        assert response.status_code == 404


class TestChatEndpoint:
    def _turn(self, client, utterance, context=None):
        response = client.post(
            "/api/chat/turn", json={"utterance": utterance, "context": context}
        )
        assert response.status_code == 200
        return response.json()

    def test_first_turn_starts_session(self, client):
        data = self._turn(client, "")
        assert data["context"]["step"] == "collecting_property"
        assert data["npv_result"] is None

    def test_context_round_trips_through_client(self, client):
        data = self._turn(client, "GZP-H04-001")
        for utterance in ["monthly", "2", "0", "", "", "24"]:
            data = self._turn(client, utterance, data["context"])
        assert data["context"]["step"] == "completed"
        assert data["npv_result"]["model_a"]["present_value"] == pytest.approx(1_000_000)
        assert data["context"]["last_result"] == data["npv_result"]

    def test_negotiation_over_http(self, client):
        data = self._turn(client, "GZP-H04-001")
        for utterance in ["monthly", "2", "0", "", "", "", "too high", "40000"]:
            data = self._turn(client, utterance, data["context"])
        assert data["context"]["step"] == "showing_alternatives"
        assert data["context"]["alternatives"][0] == "GZP-H05-003"

    def test_bad_context_is_rejected(self, client):
        response = client.post(
            "/api/chat/turn", json={"utterance": "2", "context": {"step": "nonsense"}}
        )
        assert response.status_code == 422
