"""AI Scenario Builder: description → workflow, diagram and data model."""

__version__ = "0.1.0"
