"""
Entity inference and data-model construction.

Entities
--------
For every step, "<name> <description>" is lower-cased and tested against
ENTITY_RULES in order; each rule whose keyword occurs as a substring adds
its entity. The result keeps first-detection order and holds no
duplicates. An empty result becomes {"Record"}.

Schemas
-------
ENTITY_SCHEMAS is static lookup data. Unknown names get the Record schema.

Relationships
-------------
Entity pairs (i < j, detection order) are looked up in RELATIONSHIP_TABLE
as (a, b) and then (b, a); the first hit is emitted, pairs with no entry
produce nothing.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from scenario_builder.models.scenario import (
    DataModel,
    EntitySchema,
    PropertySchema,
    Relationship,
    WorkflowStep,
)

logger = logging.getLogger(__name__)

FALLBACK_ENTITY = "Record"
DESCRIPTION_PREVIEW_CHARS = 100


# ── Inference rules ──────────────────────────────────────────────────────────

ENTITY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("user", "credential", "password"), "User"),
    (("product", "item"), "Product"),
    (("order", "purchase"), "Order"),
    (("cart",), "Cart"),
    (("payment",), "Payment"),
    (("ticket", "issue"), "Ticket"),
    (("booking", "reservation", "appointment"), "Booking"),
    (("content", "post", "article"), "Content"),
    (("notification", "alert"), "Notification"),
    (("session", "token"), "Session"),
    (("task", "workflow"), "Task"),
)


def infer_entities(steps: Iterable[WorkflowStep]) -> list[str]:
    """Entity names implied by the steps, deduplicated, in first-detection order."""
    found: dict[str, None] = {}
    for step in steps:
        text = f"{step.name} {step.description}".lower()
        for keywords, entity in ENTITY_RULES:
            if any(kw in text for kw in keywords):
                found.setdefault(entity)

    if not found:
        found[FALLBACK_ENTITY] = None
    return list(found)


# ── Static schemas ───────────────────────────────────────────────────────────

def _uuid(description: str | None = None) -> PropertySchema:
    return PropertySchema(type="string", format="uuid", description=description)


def _timestamp(description: str | None = None) -> PropertySchema:
    return PropertySchema(type="string", format="date-time", description=description)


def _text(description: str | None = None) -> PropertySchema:
    return PropertySchema(type="string", description=description)


def _choice(*values: str, description: str | None = None) -> PropertySchema:
    return PropertySchema(type="string", enum=values, description=description)


def _amount(description: str) -> PropertySchema:
    return PropertySchema(type="number", minimum=0, description=description)


ENTITY_SCHEMAS: Mapping[str, EntitySchema] = MappingProxyType({
    "User": EntitySchema(
        properties={
            "id": _uuid("Unique user identifier"),
            "email": PropertySchema(type="string", format="email", description="User email address"),
            "name": _text("User full name"),
            "role": _choice("user", "admin", "moderator", description="User role"),
            "created_at": _timestamp("Account creation timestamp"),
            "updated_at": _timestamp("Last update timestamp"),
        },
        required=("id", "email"),
    ),
    "Product": EntitySchema(
        properties={
            "id": _uuid("Product identifier"),
            "name": _text("Product name"),
            "description": _text("Product description"),
            "price": _amount("Product price"),
            "inventory": PropertySchema(type="integer", minimum=0, description="Available quantity"),
            "category": _text("Product category"),
        },
        required=("id", "name", "price"),
    ),
    "Order": EntitySchema(
        properties={
            "id": _uuid("Order identifier"),
            "user_id": _uuid("Customer reference"),
            "items": PropertySchema(type="array", items={"type": "object"}, description="Order items"),
            "total": _amount("Order total"),
            "status": _choice("pending", "paid", "shipped", "delivered", "cancelled"),
            "created_at": _timestamp(),
        },
        required=("id", "user_id", "items", "total", "status"),
    ),
    "Cart": EntitySchema(
        properties={
            "id": _uuid("Cart identifier"),
            "user_id": _uuid("User reference"),
            "items": PropertySchema(type="array", items={"type": "object"}, description="Cart items"),
            "subtotal": _amount("Cart subtotal"),
            "updated_at": _timestamp(),
        },
        required=("id", "items"),
    ),
    "Payment": EntitySchema(
        properties={
            "id": _uuid("Payment identifier"),
            "order_id": _uuid("Order reference"),
            "amount": _amount("Payment amount"),
            "method": _choice("card", "paypal", "bank_transfer"),
            "status": _choice("pending", "completed", "failed", "refunded"),
            "processed_at": _timestamp(),
        },
        required=("id", "order_id", "amount", "status"),
    ),
    "Ticket": EntitySchema(
        properties={
            "id": _uuid("Ticket identifier"),
            "user_id": _uuid("Submitter reference"),
            "subject": _text("Ticket subject"),
            "description": _text("Issue description"),
            "category": _text("Issue category"),
            "priority": _choice("low", "medium", "high", "urgent"),
            "status": _choice("open", "in_progress", "resolved", "closed"),
            "assigned_to": _uuid("Agent reference"),
            "created_at": _timestamp(),
        },
        required=("id", "subject", "status"),
    ),
    "Booking": EntitySchema(
        properties={
            "id": _uuid("Booking identifier"),
            "user_id": _uuid("Customer reference"),
            "service": _text("Service booked"),
            "date": PropertySchema(type="string", format="date", description="Booking date"),
            "time_slot": _text("Time slot"),
            "status": _choice("confirmed", "pending", "cancelled", "completed"),
            "notes": _text("Additional notes"),
        },
        required=("id", "user_id", "service", "date", "status"),
    ),
    "Content": EntitySchema(
        properties={
            "id": _uuid("Content identifier"),
            "author_id": _uuid("Author reference"),
            "title": _text("Content title"),
            "body": _text("Content body"),
            "tags": PropertySchema(type="array", items={"type": "string"}, description="Content tags"),
            "status": _choice("draft", "review", "published", "archived"),
            "published_at": _timestamp(),
        },
        required=("id", "title", "body", "status"),
    ),
    "Notification": EntitySchema(
        properties={
            "id": _uuid("Notification identifier"),
            "user_id": _uuid("Recipient reference"),
            "type": _text("Notification type"),
            "channel": _choice("email", "sms", "push", "in_app"),
            "content": _text("Message content"),
            "read": PropertySchema(type="boolean", default=False),
            "sent_at": _timestamp(),
        },
        required=("id", "user_id", "type", "content"),
    ),
    "Session": EntitySchema(
        properties={
            "id": _uuid("Session identifier"),
            "user_id": _uuid("User reference"),
            "token": _text("Session token"),
            "expires_at": _timestamp(),
            "created_at": _timestamp(),
            "ip_address": _text("Client IP"),
        },
        required=("id", "user_id", "token", "expires_at"),
    ),
    "Task": EntitySchema(
        properties={
            "id": _uuid("Task identifier"),
            "title": _text("Task title"),
            "description": _text("Task description"),
            "assignee_id": _uuid("Assignee reference"),
            "status": _choice("pending", "in_progress", "review", "completed"),
            "priority": _choice("low", "medium", "high"),
            "due_date": PropertySchema(type="string", format="date"),
        },
        required=("id", "title", "status"),
    ),
    "Record": EntitySchema(
        properties={
            "id": _uuid("Record identifier"),
            "type": _text("Record type"),
            "data": PropertySchema(type="object", description="Record data"),
            "status": _text("Record status"),
            "created_at": _timestamp(),
            "updated_at": _timestamp(),
        },
        required=("id", "type", "data"),
    ),
})


def entity_schema(entity: str) -> EntitySchema:
    return ENTITY_SCHEMAS.get(entity, ENTITY_SCHEMAS[FALLBACK_ENTITY])


# ── Relationships ────────────────────────────────────────────────────────────

def _rel(src: str, dst: str, cardinality: str, description: str) -> Relationship:
    return Relationship(from_=src, to=dst, cardinality=cardinality, description=description)


RELATIONSHIP_TABLE: Mapping[tuple[str, str], Relationship] = MappingProxyType({
    ("User", "Order"): _rel("User", "Order", "one-to-many", "User places orders"),
    ("User", "Cart"): _rel("User", "Cart", "one-to-one", "User has a cart"),
    ("User", "Ticket"): _rel("User", "Ticket", "one-to-many", "User creates tickets"),
    ("User", "Booking"): _rel("User", "Booking", "one-to-many", "User makes bookings"),
    ("User", "Content"): _rel("User", "Content", "one-to-many", "User creates content"),
    ("User", "Session"): _rel("User", "Session", "one-to-many", "User has sessions"),
    ("User", "Notification"): _rel("User", "Notification", "one-to-many", "User receives notifications"),
    ("Order", "Payment"): _rel("Order", "Payment", "one-to-one", "Order has payment"),
    ("Order", "Product"): _rel("Order", "Product", "many-to-many", "Order contains products"),
    ("Cart", "Product"): _rel("Cart", "Product", "many-to-many", "Cart contains products"),
})


def infer_relationships(entities: list[str]) -> list[Relationship]:
    relationships: list[Relationship] = []
    for i, first in enumerate(entities):
        for second in entities[i + 1:]:
            match = RELATIONSHIP_TABLE.get((first, second)) or RELATIONSHIP_TABLE.get(
                (second, first)
            )
            if match is not None:
                relationships.append(match)
    return relationships


# ── Data model ───────────────────────────────────────────────────────────────

def build_data_model(steps: Iterable[WorkflowStep], description: str) -> DataModel:
    """Infer entities from `steps` and assemble their schemas and relationships."""
    entities = infer_entities(steps)
    relationships = infer_relationships(entities)

    logger.debug(
        "Inferred %d entities and %d relationships", len(entities), len(relationships)
    )
    return DataModel(
        description=f"Data model generated for: {description[:DESCRIPTION_PREVIEW_CHARS]}...",
        entities={name: entity_schema(name) for name in entities},
        relationships=tuple(relationships),
    )
