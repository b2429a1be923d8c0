"""
Pydantic schemas for the Scenario module.

Pipeline values (steps, entity schemas, relationships, the data model and
the final result) are frozen models: every stage builds a new value from
its input and nothing is mutated afterwards.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# ── Closed enumerations ──────────────────────────────────────────────────────

ScenarioCategory = Literal[
    "ecommerce",
    "auth",
    "booking",
    "support",
    "content",
    "workflow",
    "data",
    "notification",
    "general",
]

StepType = Literal[
    "trigger",
    "end",
    "user_input",
    "user_action",
    "system_action",
    "system_check",
    "database_query",
    "database_write",
    "decision",
    "conditional",
    "notification",
    "navigation",
    "display",
    "logging",
    "integration",
    "review",
    "workflow_action",
    "ai_process",
    "data_operation",
    "error_handling",
]

EntityName = Literal[
    "User",
    "Product",
    "Order",
    "Cart",
    "Payment",
    "Ticket",
    "Booking",
    "Content",
    "Notification",
    "Session",
    "Task",
    "Record",
]

Cardinality = Literal["one-to-one", "one-to-many", "many-to-many"]


# ── Workflow ─────────────────────────────────────────────────────────────────

class WorkflowStep(BaseModel):
    """One step of a generated workflow. `id` is the 1-based position."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str
    description: str = ""
    # Templates only use StepType values; other strings are accepted for
    # externally supplied steps and render as rectangles
    type: StepType | str


# ── Data model ───────────────────────────────────────────────────────────────

class PropertySchema(BaseModel):
    """One property of an entity schema. Unset keys are left out on output."""
    model_config = ConfigDict(frozen=True)

    type: str                   # string | number | integer | boolean | array | object
    format: str | None = None   # uuid | email | date | date-time
    enum: tuple[str, ...] | None = None
    minimum: int | float | None = None
    default: Any = None
    items: dict[str, str] | None = None
    description: str | None = None


class EntitySchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["object"] = "object"
    properties: dict[str, PropertySchema]
    required: tuple[str, ...]


class Relationship(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # `from` is a Python keyword; exposed under its alias on the wire
    from_: EntityName = Field(alias="from")
    to: EntityName
    cardinality: Cardinality
    description: str


class DataModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schemaId: str = Field(
        default="http://json-schema.org/draft-07/schema#", alias="$schema"
    )
    title: str = "Scenario Data Model"
    description: str
    entities: dict[str, EntitySchema]
    relationships: tuple[Relationship, ...] = ()


# ── Pipeline result ──────────────────────────────────────────────────────────

class ScenarioMetadata(BaseModel):
    """
    detectedType  category chosen by the classifier
    generatedAt   ISO-8601 UTC timestamp, the only time-varying field
    aiProvider    which generator produced the workflow ("mock")
    """
    model_config = ConfigDict(frozen=True)

    detectedType: ScenarioCategory
    generatedAt: str
    aiProvider: str


class ScenarioResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    workflow: tuple[WorkflowStep, ...]
    diagram: str
    dataModel: DataModel
    summary: str
    metadata: ScenarioMetadata

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict using wire names (`$schema`, `from`), unset keys dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ── HTTP request / response ──────────────────────────────────────────────────

class ScenarioRequest(BaseModel):
    """Body for POST /api/scenario. Type and length are checked by the service."""
    description: Any = None


class ScenarioResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
