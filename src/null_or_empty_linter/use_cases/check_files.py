"""Use Case: Report null-or-empty violations in Python files."""

import logging
from typing import Optional

from null_or_empty_linter.domain.config import ConfigurationLoader
from null_or_empty_linter.domain.entities import FileReport
from null_or_empty_linter.domain.errors import SourceParseError
from null_or_empty_linter.domain.protocols import (
    FileSystemProtocol,
    SourceModelProtocol,
    TelemetryPort,
)
from null_or_empty_linter.domain.rules import BaseRule

logger = logging.getLogger(__name__)


class CheckUseCase:
    """Run the detector over every Python file under a target path."""

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

    def execute(self, target_path: str) -> list[FileReport]:
        files = [
            f for f in self.filesystem.glob_python_files(target_path)
            if not self.config_loader.is_excluded(f)
        ]
        if self.telemetry:
            self.telemetry.step(f"Checking {len(files)} file(s) under {target_path}")

        reports = [self.check_file(f) for f in files]

        if self.telemetry:
            total = sum(len(r.diagnostics) for r in reports)
            self.telemetry.step(f"Found {total} violation(s) of {self.rule.code}")
        return reports

    def check_file(self, file_path: str) -> FileReport:
        try:
            text = self.filesystem.read_text(file_path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", file_path, exc)
            return FileReport(path=file_path, skipped_reason=str(exc))
        try:
            unit = self.source_model.parse(text, file_path)
        except SourceParseError as exc:
            logger.warning("Skipping %s: %s", file_path, exc)
            return FileReport(path=file_path, skipped_reason=str(exc))
        return FileReport(path=file_path, diagnostics=list(self.rule.check(unit)))
