"""Command line interface for generating scenarios and serving the API."""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import typer

from scenario_builder.core.config import get_settings
from scenario_builder.core.errors import ScenarioError
from scenario_builder.core.logging import configure_logging
from scenario_builder.services.scenario_service import ScenarioService

app = typer.Typer(help="CLI for the AI Scenario Builder")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, help="Override LOG_LEVEL for this invocation"
    ),
) -> None:
    """Scenario Builder CLI entry point."""
    configure_logging(log_level or get_settings().log_level)


@app.command("generate")
def generate(
    description: str,
    compact: bool = typer.Option(False, help="Print JSON on a single line"),
) -> None:
    """
    Break a scenario description into workflow, diagram and data model.

    Prints the result as JSON. Exits with status 1 when the description
    is rejected or generation fails.

    Example:
        scenario-builder generate "Customers browse products and check out"
    """
    svc = ScenarioService()
    try:
        result = asyncio.run(svc.generate(description))
    except ScenarioError as exc:
        typer.echo(f"{exc.error}: {exc.message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(result.to_dict(), indent=None if compact else 2))


@app.command("serve")
def serve(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: bool = typer.Option(False, help="Restart on code changes"),
) -> None:
    """Run the HTTP API under uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "scenario_builder.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
