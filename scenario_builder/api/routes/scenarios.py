"""
Scenario router, mounted at settings.api_prefix (default /api)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from scenario_builder.models.scenario import (
    ErrorResponse,
    ScenarioRequest,
    ScenarioResponse,
)
from scenario_builder.services.scenario_service import ScenarioService

router = APIRouter()


def _svc() -> ScenarioService:
    return ScenarioService()


ScenarioServiceDep = Annotated[ScenarioService, Depends(_svc)]


# ── POST /api/scenario  ───────────────────────────────────────────────────────

@router.post(
    "/scenario",
    response_model=ScenarioResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate workflow, diagram and data model from a description",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def generate_scenario(
    body: ScenarioRequest,
    svc: ScenarioServiceDep,
) -> ScenarioResponse:
    """
    Break a scenario description down into:
    - **workflow**: ordered, typed steps
    - **diagram**: Mermaid flowchart source
    - **dataModel**: entity schemas and relationships
    - **summary**: one paragraph describing the workflow

    Rejects descriptions shorter than 10 characters (after trimming) with 400.
    """
    result = await svc.generate(body.description)
    return ScenarioResponse(success=True, data=result.to_dict())
