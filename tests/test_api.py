"""HTTP surface tests for the FastAPI app."""

from fastapi.testclient import TestClient

from conftest import ECOMMERCE_DESCRIPTION
from scenario_builder.api.routes import scenarios
from scenario_builder.main import app
from scenario_builder.services.scenario_service import ScenarioService


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == "0.1.0"
    assert body["timestamp"].endswith("Z")


def test_generate_scenario(client):
    response = client.post("/api/scenario", json={"description": ECOMMERCE_DESCRIPTION})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert len(data["workflow"]) == 10
    assert data["diagram"].startswith("graph TD")
    assert "Product" in data["dataModel"]["entities"]
    assert "Order" in data["dataModel"]["entities"]
    assert data["summary"]
    assert data["metadata"]["detectedType"] == "ecommerce"


def test_auth_scenario(client):
    response = client.post(
        "/api/scenario",
        json={"description": "Build a user authentication flow with login and signup"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["metadata"]["detectedType"] == "auth"
    assert "User" in data["dataModel"]["entities"]
    assert "Session" in data["dataModel"]["entities"]


def test_missing_description(client):
    response = client.post("/api/scenario", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


def test_empty_description(client):
    response = client.post("/api/scenario", json={"description": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


def test_non_string_description(client):
    response = client.post("/api/scenario", json={"description": 12345678901})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


def test_short_description(client):
    response = client.post("/api/scenario", json={"description": "short"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Description too short"
    assert "at least 10 characters" in body["message"]


def test_body_not_an_object(client):
    response = client.post("/api/scenario", json=["not", "an", "object"])

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


def test_generation_failure_returns_500(client, settings):
    class BrokenGenerator:
        async def generate(self, description):
            raise RuntimeError("boom")

    app.dependency_overrides[scenarios._svc] = lambda: ScenarioService(
        settings=settings, generator=BrokenGenerator()
    )

    response = client.post("/api/scenario", json={"description": ECOMMERCE_DESCRIPTION})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Generation failed",
        "message": "An error occurred while generating the scenario",
    }


def test_unknown_endpoint(client):
    response = client.get("/unknown")

    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found"}


def test_wrong_method_reported_as_unknown_endpoint(client):
    response = client.get("/api/scenario")

    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found"}


def test_unhandled_error_returns_json_500():
    def broken_service():
        raise RuntimeError("service wiring failed")

    app.dependency_overrides[scenarios._svc] = broken_service
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.post(
                "/api/scenario", json={"description": ECOMMERCE_DESCRIPTION}
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"error": "Internal server error"}
