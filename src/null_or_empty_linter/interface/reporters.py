"""Terminal and JSON reporters for check and fix results."""

import difflib
import json

import typer

from null_or_empty_linter.domain.entities import FileReport, FixOutcome


class TerminalReporter:
    """Renders reports as compiler-style lines via typer."""

    def report_check(self, reports: list[FileReport]) -> None:
        for report in reports:
            if report.skipped_reason:
                typer.secho(f"{report.path}: skipped ({report.skipped_reason})", fg=typer.colors.YELLOW)
            for d in report.diagnostics:
                typer.echo(f"{d.location()}: {d.rule_id} {d.severity.value} {d.message}")
        total = sum(len(r.diagnostics) for r in reports)
        color = typer.colors.RED if total else typer.colors.GREEN
        typer.secho(f"{total} violation(s) in {len(reports)} file(s)", fg=color, bold=True)

    def report_check_json(self, reports: list[FileReport]) -> None:
        payload = {
            "files": [
                {
                    "path": r.path,
                    "skipped_reason": r.skipped_reason,
                    "diagnostics": [d.to_dict() for d in r.diagnostics],
                }
                for r in reports
            ],
            "total": sum(len(r.diagnostics) for r in reports),
        }
        typer.echo(json.dumps(payload, indent=2))

    def report_fixes(self, outcomes: list[FixOutcome], show_diff: bool = False) -> None:
        for outcome in outcomes:
            if outcome.skipped_reason:
                typer.secho(f"{outcome.path}: skipped ({outcome.skipped_reason})", fg=typer.colors.YELLOW)
                continue
            if outcome.applied:
                typer.secho(f"{outcome.path}: {len(outcome.applied)} fix(es) applied", fg=typer.colors.GREEN)
            for failure in outcome.failed:
                typer.secho(
                    f"{failure.diagnostic.location()}: fix refused: {failure.reason}",
                    fg=typer.colors.YELLOW,
                )
            if show_diff and outcome.is_modified():
                typer.echo(self.render_diff(outcome), nl=False)

    def render_diff(self, outcome: FixOutcome) -> str:
        return "".join(
            difflib.unified_diff(
                outcome.original_code.splitlines(keepends=True),
                outcome.new_code.splitlines(keepends=True),
                fromfile=f"a/{outcome.path}",
                tofile=f"b/{outcome.path}",
            )
        )
