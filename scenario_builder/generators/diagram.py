"""
Mermaid flowchart synthesis from workflow steps.

Output layout (byte-stable for a given step sequence):

    graph TD
      %% Style definitions
      classDef ...
                                  (blank)
      %% Nodes
      step1(["Label"])
                                  (blank)
      %% Connections
      step1 --> step2
      step2 -->|Yes| step3        decision / conditional step
      step2 -.->|No| step4        ...skips one step when a second successor exists
                                  (blank)
      %% Apply styles
      class step1 trigger

Branching is approximated: a decision only gets a single-level bypass edge,
there is no merge node.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Iterable, Mapping

from scenario_builder.models.scenario import WorkflowStep

logger = logging.getLogger(__name__)

HEADER = "graph TD"
EMPTY_DIAGRAM = f"{HEADER}\n  empty[No workflow steps]"

BRANCH_TYPES = frozenset({"decision", "conditional"})

# (open, close) delimiters per step type
_STADIUM = ("([", "])")
_DIAMOND = ("{", "}")
_RECTANGLE = ("[", "]")
_PARALLELOGRAM = ("[/", "/]")
_SUBROUTINE = ("[[", "]]")
_HEXAGON = ("{{", "}}")
_CYLINDER = ("[(", ")]")
_ASYMMETRIC = (">", "]")

NODE_SHAPES: Mapping[str, tuple[str, str]] = MappingProxyType({
    "trigger": _STADIUM,
    "end": _STADIUM,
    "decision": _DIAMOND,
    "user_action": _RECTANGLE,
    "user_input": _PARALLELOGRAM,
    "system_action": _SUBROUTINE,
    "system_check": _HEXAGON,
    "database_query": _CYLINDER,
    "database_write": _CYLINDER,
    "notification": _ASYMMETRIC,
    "navigation": _RECTANGLE,
    "display": _RECTANGLE,
    "logging": _CYLINDER,
    "integration": _SUBROUTINE,
    "review": _RECTANGLE,
    "workflow_action": _SUBROUTINE,
    "conditional": _DIAMOND,
    "ai_process": _SUBROUTINE,
    "data_operation": _SUBROUTINE,
    "error_handling": _DIAMOND,
})

STYLE_DEFINITIONS: tuple[str, ...] = (
    "classDef trigger fill:#e1f5fe,stroke:#01579b",
    "classDef decision fill:#fff3e0,stroke:#e65100",
    "classDef action fill:#e8f5e9,stroke:#1b5e20",
    "classDef notification fill:#fce4ec,stroke:#880e4f",
    "classDef database fill:#f3e5f5,stroke:#4a148c",
    "classDef system fill:#e3f2fd,stroke:#0d47a1",
)

_BRACKETS = re.compile(r"[\[\]{}()]")


def node_shape(step_type: str) -> tuple[str, str]:
    return NODE_SHAPES.get(step_type, _RECTANGLE)


def node_id(step_id: int) -> str:
    return f"step{step_id}"


def escape_label(text: str) -> str:
    """
    Make `text` safe inside a quoted Mermaid node label.

    Double quotes become single quotes, bracket characters are dropped,
    `>` becomes `->` and `<` becomes `<-`.

    Arrows are rewritten only where not already rewritten, so escaping an
    escaped label leaves it unchanged.
    """
    text = text.replace('"', "'")
    text = _BRACKETS.sub("", text)
    text = re.sub(r"(?<!-)>", "->", text)
    text = re.sub(r"<(?!-)", "<-", text)
    return text


def style_class(step_type: str) -> str:
    """Pick the style class; checks run in priority order."""
    if step_type in ("trigger", "end"):
        return "trigger"
    if step_type in BRANCH_TYPES:
        return "decision"
    if step_type == "notification":
        return "notification"
    if "database" in step_type:
        return "database"
    if "system" in step_type:
        return "system"
    return "action"


def synthesize_diagram(steps: Iterable[WorkflowStep]) -> str:
    """Render the step sequence as a Mermaid `graph TD` flowchart."""
    steps = list(steps)
    if not steps:
        return EMPTY_DIAGRAM

    lines = [HEADER]

    lines.append("  %% Style definitions")
    lines.extend(f"  {definition}" for definition in STYLE_DEFINITIONS)
    lines.append("")

    lines.append("  %% Nodes")
    for step in steps:
        open_, close = node_shape(step.type)
        lines.append(f'  {node_id(step.id)}{open_}"{escape_label(step.name)}"{close}')
    lines.append("")

    lines.append("  %% Connections")
    lines.extend(_edges(steps))
    lines.append("")

    lines.append("  %% Apply styles")
    for step in steps:
        lines.append(f"  class {node_id(step.id)} {style_class(step.type)}")

    logger.debug("Synthesized diagram with %d nodes", len(steps))
    return "\n".join(lines)


def _edges(steps: list[WorkflowStep]) -> list[str]:
    edges: list[str] = []
    for i, (current, nxt) in enumerate(zip(steps, steps[1:])):
        src = node_id(current.id)
        if current.type in BRANCH_TYPES:
            edges.append(f"  {src} -->|Yes| {node_id(nxt.id)}")
            if i + 2 < len(steps):
                edges.append(f"  {src} -.->|No| {node_id(steps[i + 2].id)}")
        else:
            edges.append(f"  {src} --> {node_id(nxt.id)}")
    return edges
