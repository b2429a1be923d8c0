"""End-to-end pipeline tests through ScenarioService."""

import pytest

from conftest import ECOMMERCE_DESCRIPTION
from scenario_builder.core.errors import GenerationError, ScenarioValidationError
from scenario_builder.generators.diagram import HEADER
from scenario_builder.services.scenario_service import (
    ScenarioService,
    run_pipeline,
    validate_description,
)


def _without_timestamp(data):
    data = dict(data)
    data["metadata"] = {k: v for k, v in data["metadata"].items() if k != "generatedAt"}
    return data


@pytest.mark.asyncio
async def test_ecommerce_end_to_end(service):
    result = await service.generate(ECOMMERCE_DESCRIPTION)

    assert result.metadata.detectedType == "ecommerce"
    assert result.metadata.aiProvider == "mock"
    assert len(result.workflow) == 10
    assert result.diagram.startswith(HEADER)
    assert {"Product", "Order"} <= set(result.dataModel.entities)
    assert any(
        {rel.from_, rel.to} == {"Product", "Order"} for rel in result.dataModel.relationships
    )
    assert "e-commerce" in result.summary


@pytest.mark.asyncio
async def test_unrecognized_description_uses_general(service):
    result = await service.generate("Something completely random and unique")

    assert result.metadata.detectedType == "general"
    assert result.workflow[-1].type == "end"
    assert result.summary.startswith("This workflow outlines")


@pytest.mark.asyncio
async def test_same_description_gives_same_result(service):
    first = await service.generate("Book an appointment with a doctor")
    second = await service.generate("Book an appointment with a doctor")

    assert _without_timestamp(first.to_dict()) == _without_timestamp(second.to_dict())


@pytest.mark.asyncio
async def test_description_is_trimmed_before_pipeline(service):
    result = await service.generate("   " + "y" * 150 + "   ")

    assert result.dataModel.description == "Data model generated for: " + "y" * 100 + "..."


@pytest.mark.asyncio
async def test_short_description_rejected(service):
    with pytest.raises(ScenarioValidationError) as exc_info:
        await service.generate("short")

    assert exc_info.value.error == "Description too short"


@pytest.mark.asyncio
@pytest.mark.parametrize("description", [None, "", 42, ["a" * 20]])
async def test_invalid_description_rejected(service, description):
    with pytest.raises(ScenarioValidationError) as exc_info:
        await service.generate(description)

    assert exc_info.value.error == "Invalid input"


@pytest.mark.asyncio
async def test_internal_failure_becomes_generation_error(settings):
    class BrokenGenerator:
        async def generate(self, description):
            raise RuntimeError("model exploded")

    svc = ScenarioService(settings=settings, generator=BrokenGenerator())

    with pytest.raises(GenerationError) as exc_info:
        await svc.generate("A perfectly valid description")

    assert exc_info.value.to_dict() == {
        "error": "Generation failed",
        "message": "An error occurred while generating the scenario",
    }
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_run_pipeline_helper(settings):
    result = await run_pipeline("Create a customer support ticket system", settings)

    assert result.metadata.detectedType == "support"
    assert "Ticket" in result.dataModel.entities


def test_validate_description_boundaries():
    assert validate_description("  ten chars!  ") == "ten chars!"
    with pytest.raises(ScenarioValidationError):
        validate_description("  nine chr  ")
    assert validate_description("abc", min_length=3) == "abc"


def test_to_dict_wire_format():
    import asyncio

    from scenario_builder.core.config import Settings

    settings = Settings(simulated_latency_min_ms=0, simulated_latency_max_ms=0)
    result = asyncio.run(ScenarioService(settings=settings).generate(ECOMMERCE_DESCRIPTION))
    data = result.to_dict()

    assert set(data) == {"workflow", "diagram", "dataModel", "summary", "metadata"}
    assert data["workflow"][0] == {
        "id": 1,
        "name": "Browse Products",
        "description": "User browses available products",
        "type": "user_action",
    }
    assert "$schema" in data["dataModel"]
    assert set(data["metadata"]) == {"detectedType", "generatedAt", "aiProvider"}


@pytest.mark.asyncio
async def test_generated_at_is_utc_with_z_suffix(service):
    result = await service.generate("Book an appointment with a doctor")

    assert result.metadata.generatedAt.endswith("Z")
    assert "+00:00" not in result.metadata.generatedAt
