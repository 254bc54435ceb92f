"""CLI entry points - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from null_or_empty_linter.domain.config import ConfigurationLoader
from null_or_empty_linter.domain.constants import RULE_ID, RULE_TITLE
from null_or_empty_linter.domain.protocols import (
    FileSystemProtocol,
    SourceModelProtocol,
    TelemetryPort,
)
from null_or_empty_linter.domain.rules import BaseRule
from null_or_empty_linter.interface.reporters import TerminalReporter
from null_or_empty_linter.use_cases.apply_fixes import ApplyFixesUseCase
from null_or_empty_linter.use_cases.check_files import CheckUseCase


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    source_model: SourceModelProtocol
    rule: BaseRule
    filesystem: FileSystemProtocol
    reporter: TerminalReporter


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_target_path(path: Optional[Path]) -> str:
        """Resolve target path: explicit path, else src/ if exists, else '.'."""
        if path and str(path) != ".":
            return str(path)
        src_dir = Path.cwd() / "src"
        if src_dir.is_dir():
            return "src"
        return "."

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="null-or-empty",
            help=f"{RULE_ID}: {RULE_TITLE}",
            add_completion=False,
        )

        @app.callback()
        def main(
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
        ) -> None:
            logging.basicConfig(
                level=logging.DEBUG if verbose else logging.WARNING,
                format="%(levelname)s %(name)s: %(message)s",
            )

        @app.command()
        def check(
            path: Optional[Path] = typer.Argument(None, help="File or directory to check (default: src/ or .)"),  # noqa: B008
            output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
        ) -> None:
            """Report every call to the disallowed is_null_or_empty helper."""
            if output_format not in ("text", "json"):
                raise typer.BadParameter("must be 'text' or 'json'", param_hint="--format")
            target_path = CLIAppFactory.resolve_target_path(path)
            use_case = CheckUseCase(
                source_model=deps.source_model,
                rule=deps.rule,
                filesystem=deps.filesystem,
                config_loader=deps.config_loader,
                telemetry=deps.telemetry if output_format == "text" else None,
            )
            reports = use_case.execute(target_path)
            if output_format == "json":
                deps.reporter.report_check_json(reports)
            else:
                deps.reporter.report_check(reports)
            if any(r.has_violations() for r in reports):
                raise typer.Exit(code=1)

        @app.command()
        def fix(
            path: Optional[Path] = typer.Argument(None, help="File or directory to fix (default: src/ or .)"),  # noqa: B008
            dry_run: bool = typer.Option(False, "--dry-run", help="Compute fixes without writing files."),
            diff: bool = typer.Option(False, "--diff", help="Print a unified diff of every change."),
        ) -> None:
            """Rewrite every fixable call in place and add the required import."""
            target_path = CLIAppFactory.resolve_target_path(path)
            use_case = ApplyFixesUseCase(
                source_model=deps.source_model,
                rule=deps.rule,
                filesystem=deps.filesystem,
                config_loader=deps.config_loader,
                telemetry=deps.telemetry,
            )
            outcomes = use_case.execute(target_path, dry_run=dry_run)
            deps.reporter.report_fixes(outcomes, show_diff=diff)
            if any(o.failed for o in outcomes):
                raise typer.Exit(code=1)

        return app
