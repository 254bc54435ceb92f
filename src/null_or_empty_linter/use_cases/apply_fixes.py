"""Use Case: Apply Fixes to Source Code."""

import logging
from typing import Optional

from null_or_empty_linter.domain.config import ConfigurationLoader
from null_or_empty_linter.domain.entities import Diagnostic, FixFailure, FixOutcome, SourceUnit
from null_or_empty_linter.domain.errors import FixError, SourceParseError
from null_or_empty_linter.domain.protocols import (
    FileSystemProtocol,
    SourceModelProtocol,
    TelemetryPort,
)
from null_or_empty_linter.domain.rules import BaseRule

logger = logging.getLogger(__name__)


class ApplyFixesUseCase:
    """Orchestrate the detection and rewriting of null-or-empty calls."""

    def __init__(
        self,
        source_model: SourceModelProtocol,
        rule: BaseRule,
        filesystem: FileSystemProtocol,
        config_loader: ConfigurationLoader,
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.source_model = source_model
        self.rule = rule
        self.filesystem = filesystem
        self.config_loader = config_loader
        self.telemetry = telemetry

    def execute(self, target_path: str, dry_run: bool = False) -> list[FixOutcome]:
        """Fix every file under target path. With dry_run, nothing is written."""
        if self.telemetry:
            mode = " (dry run)" if dry_run else ""
            self.telemetry.step(f"Starting Fix Logic on {target_path}{mode}")

        outcomes: list[FixOutcome] = []
        for file_path in self.filesystem.glob_python_files(target_path):
            if self.config_loader.is_excluded(file_path):
                continue
            outcome = self.fix_file(file_path)
            if outcome.is_modified() and not dry_run:
                self.filesystem.write_text(file_path, outcome.new_code)
            outcomes.append(outcome)

        if self.telemetry:
            modified = sum(1 for o in outcomes if o.is_modified())
            failed = [f for o in outcomes for f in o.failed]
            self.telemetry.step(f"Fix Suite complete. Files repaired: {modified}")
            if failed:
                self.telemetry.step(f"{len(failed)} fix(es) could not be applied:")
                for failure in failed:
                    self.telemetry.error(f"  {failure.diagnostic.location()}: {failure.reason}")
                self.telemetry.step(self.rule.get_fix_instructions(failed[0].diagnostic))
        return outcomes

    def fix_file(self, file_path: str) -> FixOutcome:
        try:
            text = self.filesystem.read_text(file_path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", file_path, exc)
            return FixOutcome(path=file_path, original_code="", skipped_reason=str(exc))
        try:
            unit = self.source_model.parse(text, file_path)
        except SourceParseError as exc:
            logger.warning("Skipping %s: %s", file_path, exc)
            return FixOutcome(path=file_path, original_code=text, skipped_reason=str(exc))

        new_unit, applied, failed = self.fix_unit(unit)
        return FixOutcome(
            path=file_path,
            original_code=text,
            unit=new_unit,
            applied=applied,
            failed=failed,
        )

    def fix_unit(
        self, unit: SourceUnit
    ) -> tuple[SourceUnit, list[Diagnostic], list[FixFailure]]:
        """
        Detect and fix every violation in a unit.

        Each fix is first tried alone on the original unit; refused fixes are
        reported and the rest are applied together.
        """
        diagnostics = list(self.rule.check(unit))
        applicable: list[Diagnostic] = []
        failed: list[FixFailure] = []
        for diagnostic in diagnostics:
            try:
                self.rule.apply_fix(unit, diagnostic.span)
            except FixError as exc:
                logger.info("Fix refused at %s: %s", diagnostic.location(), exc.reason)
                failed.append(FixFailure(diagnostic=diagnostic, reason=exc.reason))
            else:
                applicable.append(diagnostic)

        if not applicable:
            return unit, [], failed
        new_unit = self.rule.apply_fix_all(unit, [d.span for d in applicable])
        return new_unit, applicable, failed
