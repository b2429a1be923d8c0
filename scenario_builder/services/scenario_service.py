"""
ScenarioService: POST /api/scenario

Pipeline
--------
1. Validate the description (string, >= min_description_length after trim)
2. Mock AI     → category, ordered workflow steps, summary
3. In parallel → Mermaid diagram (synthesize_diagram)
                 data model      (build_data_model)
4. Assemble the ScenarioResult

Every call is an independent computation over read-only lookup tables.
Any unexpected failure in steps 2-4 becomes a GenerationError; a partial
result is never returned.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

from scenario_builder.core.config import Settings, get_settings
from scenario_builder.core.errors import GenerationError, ScenarioValidationError
from scenario_builder.generators.data_model import build_data_model
from scenario_builder.generators.diagram import synthesize_diagram
from scenario_builder.generators.mock_ai import MockAIGenerator
from scenario_builder.models.scenario import ScenarioMetadata, ScenarioResult

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with a `Z` suffix, e.g. 2026-01-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def validate_description(description: Any, min_length: int = 10) -> str:
    """Return the trimmed description or raise ScenarioValidationError."""
    if not description or not isinstance(description, str):
        raise ScenarioValidationError(
            "Invalid input", "Please provide a valid scenario description"
        )

    trimmed = description.strip()
    if len(trimmed) < min_length:
        raise ScenarioValidationError(
            "Description too short",
            "Please provide a more detailed scenario description "
            f"(at least {min_length} characters)",
        )
    return trimmed


class ScenarioService:

    def __init__(
        self,
        settings: Settings | None = None,
        generator: MockAIGenerator | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._generator = generator or MockAIGenerator(
            latency_ms=(
                self._settings.simulated_latency_min_ms,
                self._settings.simulated_latency_max_ms,
            )
        )

    # ── Public API ────────────────────────────────────────────────────────────

    async def generate(self, description: Any) -> ScenarioResult:
        """Validate `description`, then run the pipeline on the trimmed text."""
        trimmed = validate_description(
            description, self._settings.min_description_length
        )
        try:
            return await self._run_pipeline(trimmed)
        except Exception as exc:
            logger.exception("Scenario generation failed")
            raise GenerationError() from exc

    # ── Pipeline ──────────────────────────────────────────────────────────────

    async def _run_pipeline(self, description: str) -> ScenarioResult:
        generated = await self._generator.generate(description)
        logger.info(
            "Generating scenario: category=%s steps=%d",
            generated.category,
            len(generated.steps),
        )

        # Both depend only on the step list
        diagram, data_model = await asyncio.gather(
            asyncio.to_thread(synthesize_diagram, generated.steps),
            asyncio.to_thread(build_data_model, generated.steps, description),
        )

        return ScenarioResult(
            workflow=tuple(generated.steps),
            diagram=diagram,
            dataModel=data_model,
            summary=generated.summary,
            metadata=ScenarioMetadata(
                detectedType=generated.category,
                generatedAt=utc_timestamp(),
                aiProvider=self._settings.ai_provider,
            ),
        )


async def run_pipeline(description: str, settings: Settings | None = None) -> ScenarioResult:
    """Convenience wrapper: one-shot `ScenarioService(settings).generate(description)`."""
    return await ScenarioService(settings).generate(description)
