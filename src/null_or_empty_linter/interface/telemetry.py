"""Console telemetry for CLI progress messages."""

import logging

import typer

from null_or_empty_linter.domain.protocols import TelemetryPort

logger = logging.getLogger(__name__)


class ProjectTelemetry(TelemetryPort):
    """Prefix every message with the project tag and mirror it to the log."""

    def __init__(self, tag: str = "NULL-OR-EMPTY", color: str = typer.colors.CYAN) -> None:
        self._tag = tag
        self._color = color

    def step(self, message: str) -> None:
        logger.debug(message)
        typer.secho(f"[{self._tag}] {message}", fg=self._color)

    def error(self, message: str) -> None:
        logger.debug("error: %s", message)
        typer.secho(f"[{self._tag}] {message}", fg=typer.colors.RED, err=True)
