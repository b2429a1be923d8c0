"""
Domain exceptions raised by the scenario pipeline.

The HTTP layer maps these to response envelopes in `scenario_builder.main`;
the CLI maps them to exit codes.
"""

from __future__ import annotations


class ScenarioError(Exception):
    """Base class; carries the short `error` title and a human `message`."""

    def __init__(self, error: str, message: str) -> None:
        super().__init__(message)
        self.error = error
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}


class ScenarioValidationError(ScenarioError):
    """Rejected input; the pipeline never starts."""


class GenerationError(ScenarioError):
    """Unexpected failure inside the pipeline. No partial result exists."""

    def __init__(
        self,
        message: str = "An error occurred while generating the scenario",
    ) -> None:
        super().__init__("Generation failed", message)
