"""Shared fixtures: zero-latency settings and service, API client."""

import pytest
from fastapi.testclient import TestClient

from scenario_builder.core.config import Settings
from scenario_builder.core.logging import configure_logging
from scenario_builder.generators.mock_ai import MockAIGenerator
from scenario_builder.models.scenario import WorkflowStep
from scenario_builder.services.scenario_service import ScenarioService

# Bind the package handler once, before any CliRunner swaps out stderr
configure_logging("WARNING")

ECOMMERCE_DESCRIPTION = (
    "Build an e-commerce checkout flow where users can browse products, "
    "add items to cart, and complete purchase with payment"
)


@pytest.fixture
def settings() -> Settings:
    return Settings(simulated_latency_min_ms=0, simulated_latency_max_ms=0)


@pytest.fixture
def service(settings: Settings) -> ScenarioService:
    return ScenarioService(settings=settings)


@pytest.fixture
def client(service: ScenarioService):
    from scenario_builder.api.routes import scenarios
    from scenario_builder.main import app

    app.dependency_overrides[scenarios._svc] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def instant_generator() -> MockAIGenerator:
    return MockAIGenerator(latency_ms=(0, 0))


def make_steps(*rows: tuple[str, str]) -> list[WorkflowStep]:
    """Build steps from (name, type) rows with 1-based ids."""
    return [
        WorkflowStep(id=i, name=name, description="", type=step_type)
        for i, (name, step_type) in enumerate(rows, start=1)
    ]
