"""
Mock AI generator: classification, step templates and summaries.

Stands in for an LLM call. Given a free-text scenario description it
  1. classifies the text into one ScenarioCategory (keyword membership)
  2. returns that category's hand-authored step template
  3. returns that category's canned summary paragraph

Classification order
--------------------
CATEGORY_KEYWORDS is checked top to bottom and the first category with any
keyword found as a substring of the lower-cased description wins. The
order is part of the contract: "purchase a support ticket" is `ecommerce`
because ecommerce is checked before support. `general` is returned when
nothing matches.

Swapping in a real model only requires a replacement for
`MockAIGenerator.generate` that returns the same `GeneratedWorkflow`.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from scenario_builder.models.scenario import ScenarioCategory, WorkflowStep

logger = logging.getLogger(__name__)

GENERAL: ScenarioCategory = "general"


# ── Classifier ───────────────────────────────────────────────────────────────

CATEGORY_KEYWORDS: tuple[tuple[ScenarioCategory, tuple[str, ...]], ...] = (
    ("ecommerce", ("shop", "cart", "buy", "purchase", "order", "payment", "checkout", "product")),
    ("auth", ("login", "signup", "register", "password", "authentication", "user account")),
    ("booking", ("book", "reserve", "appointment", "schedule", "calendar")),
    ("support", ("ticket", "support", "help", "issue", "complaint", "customer service")),
    ("content", ("post", "blog", "article", "publish", "content", "write")),
    ("workflow", ("approval", "review", "process", "workflow", "task", "assign")),
    ("data", ("import", "export", "sync", "migrate", "transfer", "data")),
    ("notification", ("notify", "alert", "email", "sms", "notification", "remind")),
)


def classify(description: str) -> ScenarioCategory:
    """Return the first category (in CATEGORY_KEYWORDS order) with a keyword hit."""
    text = description.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(kw in text for kw in keywords):
            return category
    return GENERAL


# ── Step templates ───────────────────────────────────────────────────────────

def _template(*rows: tuple[str, str, str]) -> tuple[WorkflowStep, ...]:
    """Build a template from (name, description, type) rows; ids are 1-based positions."""
    return tuple(
        WorkflowStep(id=i, name=name, description=desc, type=step_type)
        for i, (name, desc, step_type) in enumerate(rows, start=1)
    )


STEP_TEMPLATES: Mapping[str, tuple[WorkflowStep, ...]] = MappingProxyType({
    "ecommerce": _template(
        ("Browse Products", "User browses available products", "user_action"),
        ("Add to Cart", "User adds selected items to shopping cart", "user_action"),
        ("Validate Cart", "System validates cart items and availability", "system_check"),
        ("Enter Shipping Info", "User provides shipping address", "user_input"),
        ("Select Payment Method", "User chooses payment option", "user_action"),
        ("Process Payment", "System processes the payment transaction", "system_action"),
        ("Payment Verification", "Verify payment success or failure", "decision"),
        ("Generate Order", "System creates order record", "system_action"),
        ("Send Confirmation", "Email confirmation sent to user", "notification"),
        ("Update Inventory", "System updates product inventory", "system_action"),
    ),
    "auth": _template(
        ("Enter Credentials", "User enters username/email and password", "user_input"),
        ("Validate Input", "System validates input format", "system_check"),
        ("Check User Exists", "Database lookup for user record", "database_query"),
        ("Verify Password", "Compare password hash", "system_check"),
        ("Authentication Decision", "Determine if credentials are valid", "decision"),
        ("Generate Session", "Create session token or JWT", "system_action"),
        ("Log Authentication", "Record login attempt for security", "logging"),
        ("Redirect User", "Send user to dashboard or home", "navigation"),
    ),
    "booking": _template(
        ("Select Service", "User chooses the service to book", "user_action"),
        ("Check Availability", "System checks available time slots", "system_check"),
        ("Display Slots", "Show available dates and times", "display"),
        ("Select Time Slot", "User picks preferred date and time", "user_action"),
        ("Enter Details", "User provides contact and booking details", "user_input"),
        ("Validate Booking", "System validates the booking request", "system_check"),
        ("Create Reservation", "System creates the booking record", "database_write"),
        ("Send Confirmation", "Email/SMS confirmation sent", "notification"),
        ("Add to Calendar", "Optional calendar integration", "integration"),
    ),
    "support": _template(
        ("Open Ticket Form", "User accesses support request form", "navigation"),
        ("Select Category", "User chooses issue category", "user_action"),
        ("Describe Issue", "User describes the problem in detail", "user_input"),
        ("Attach Files", "User uploads supporting documents", "user_action"),
        ("Auto-Categorize", "AI analyzes and tags the ticket", "ai_process"),
        ("Priority Assignment", "System assigns priority level", "system_action"),
        ("Route to Agent", "Ticket assigned to appropriate agent", "system_action"),
        ("Notify User", "Confirmation sent with ticket number", "notification"),
        ("Notify Agent", "Agent receives new ticket alert", "notification"),
    ),
    "content": _template(
        ("Create Draft", "User starts new content draft", "user_action"),
        ("Write Content", "User writes the main content", "user_input"),
        ("Add Media", "User uploads images or videos", "user_action"),
        ("Set Metadata", "User adds title, tags, category", "user_input"),
        ("Preview Content", "System renders preview", "display"),
        ("Content Validation", "System checks for required fields", "system_check"),
        ("Submit for Review", "Content sent for approval", "workflow_action"),
        ("Review Decision", "Reviewer approves or requests changes", "decision"),
        ("Publish Content", "Content goes live", "system_action"),
        ("Notify Subscribers", "Followers notified of new content", "notification"),
    ),
    "workflow": _template(
        ("Task Creation", "New task or request is created", "trigger"),
        ("Initial Review", "First level review of the request", "review"),
        ("Completeness Check", "Verify all required info is present", "system_check"),
        ("Assign Reviewer", "Route to appropriate reviewer", "system_action"),
        ("Review Process", "Reviewer examines the request", "user_action"),
        ("Approval Decision", "Approve, reject, or request changes", "decision"),
        ("Handle Rejection", "Process rejection with feedback", "conditional"),
        ("Execute Approval", "Perform the approved action", "system_action"),
        ("Audit Log", "Record the complete workflow trail", "logging"),
        ("Notify Stakeholders", "Inform all parties of outcome", "notification"),
    ),
    "data": _template(
        ("Select Source", "Choose data source for operation", "user_action"),
        ("Configure Mapping", "Define field mappings", "user_input"),
        ("Validate Configuration", "System checks configuration validity", "system_check"),
        ("Preview Data", "Show sample of data to be processed", "display"),
        ("Confirm Operation", "User confirms to proceed", "user_action"),
        ("Extract Data", "Read data from source", "data_operation"),
        ("Transform Data", "Apply transformations and mappings", "data_operation"),
        ("Validate Data", "Check data integrity and format", "system_check"),
        ("Load Data", "Write data to destination", "data_operation"),
        ("Generate Report", "Create operation summary report", "system_action"),
    ),
    "notification": _template(
        ("Trigger Event", "Event occurs that requires notification", "trigger"),
        ("Fetch Recipients", "Query notification preferences", "database_query"),
        ("Filter Recipients", "Apply opt-out and preferences", "system_check"),
        ("Prepare Content", "Generate notification content", "system_action"),
        ("Channel Selection", "Determine delivery channel", "decision"),
        ("Queue Notification", "Add to notification queue", "system_action"),
        ("Send Notification", "Dispatch via selected channel", "integration"),
        ("Track Delivery", "Monitor delivery status", "logging"),
        ("Handle Failures", "Retry or escalate failed sends", "error_handling"),
    ),
    "general": _template(
        ("Initialize Process", "Start the workflow process", "trigger"),
        ("Gather Input", "Collect required information", "user_input"),
        ("Validate Input", "Check input completeness and format", "system_check"),
        ("Process Request", "Execute main business logic", "system_action"),
        ("Decision Point", "Evaluate conditions for next step", "decision"),
        ("Execute Action", "Perform the required action", "system_action"),
        ("Store Results", "Save outcome to database", "database_write"),
        ("Generate Response", "Prepare response for user", "system_action"),
        ("Send Notifications", "Alert relevant parties", "notification"),
        ("Complete Process", "Finalize and close the workflow", "end"),
    ),
})


def generate_steps(
    category: str, description: str | None = None
) -> list[WorkflowStep]:
    """
    Return the step template for `category` (the `general` one when unknown).

    `description` is accepted so a real generator can tailor the steps;
    the template is returned unchanged.
    """
    template = STEP_TEMPLATES.get(category, STEP_TEMPLATES[GENERAL])
    return list(template)


# ── Summaries ────────────────────────────────────────────────────────────────

SUMMARIES: Mapping[str, str] = MappingProxyType({
    "ecommerce": (
        "This e-commerce workflow handles the complete purchase journey from product "
        "browsing to order confirmation. It includes cart management, payment processing, "
        "and inventory updates to ensure a smooth shopping experience."
    ),
    "auth": (
        "This authentication workflow securely handles user login with input validation, "
        "credential verification, and session management. It includes security logging "
        "for audit purposes."
    ),
    "booking": (
        "This booking workflow manages appointment scheduling from service selection to "
        "confirmation. It includes availability checking, slot selection, and calendar "
        "integration capabilities."
    ),
    "support": (
        "This customer support workflow handles ticket creation and routing. It uses "
        "AI-powered categorization and priority assignment to ensure efficient issue "
        "resolution."
    ),
    "content": (
        "This content management workflow covers the complete publishing lifecycle from "
        "draft creation to publication. It includes review processes and subscriber "
        "notifications."
    ),
    "workflow": (
        "This approval workflow manages multi-level review processes with proper routing, "
        "decision handling, and audit logging for compliance."
    ),
    "data": (
        "This data operation workflow handles ETL (Extract, Transform, Load) processes "
        "with validation, preview, and comprehensive reporting."
    ),
    "notification": (
        "This notification workflow manages multi-channel message delivery with preference "
        "handling, delivery tracking, and failure recovery."
    ),
    "general": (
        "This workflow outlines a structured process to accomplish the described scenario. "
        "It includes input handling, processing logic, and appropriate notifications."
    ),
})


def generate_summary(category: str, description: str | None = None) -> str:
    """Return the canned summary for `category` (the `general` one when unknown)."""
    return SUMMARIES.get(category, SUMMARIES[GENERAL])


# ── Generator ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class GeneratedWorkflow:
    """What the AI stage hands to the rest of the pipeline."""
    category: ScenarioCategory
    steps: list[WorkflowStep]
    summary: str


class MockAIGenerator:
    """
    Offline stand-in for an LLM backend.

    `latency_ms` is a (min, max) range; a random wait inside it is awaited
    before classifying to mimic a model round-trip. (0, 0) skips the wait.
    """

    provider = "mock"

    def __init__(self, latency_ms: tuple[int, int] = (50, 150)) -> None:
        low, high = latency_ms
        self._latency_ms = (min(low, high), max(low, high))

    async def generate(self, description: str) -> GeneratedWorkflow:
        await self._simulate_latency()

        category = classify(description)
        steps = generate_steps(category, description)
        summary = generate_summary(category, description)

        logger.debug("Mock AI classified description as %s (%d steps)", category, len(steps))
        return GeneratedWorkflow(category=category, steps=steps, summary=summary)

    async def _simulate_latency(self) -> None:
        low, high = self._latency_ms
        if high <= 0:
            return
        await asyncio.sleep(random.uniform(low, high) / 1000)
