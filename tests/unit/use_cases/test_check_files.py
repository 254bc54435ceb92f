"""Unit tests for CheckUseCase."""

from pathlib import Path
from typing import Optional
from unittest.mock import MagicMock

from null_or_empty_linter.domain.config import ConfigurationLoader
from null_or_empty_linter.domain.rules.null_or_empty import NullOrEmptyRule
from null_or_empty_linter.infrastructure.gateways.astroid_gateway import AstroidSourceModel
from null_or_empty_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from null_or_empty_linter.use_cases.check_files import CheckUseCase

VIOLATION = (
    "from identitymodel.tokens import CollectionUtilities\n"
    "\n"
    "flag = CollectionUtilities.is_null_or_empty(items)\n"
)


def _use_case(
    source_model: AstroidSourceModel,
    rule: NullOrEmptyRule,
    config: Optional[dict] = None,
    telemetry: Optional[MagicMock] = None,
) -> CheckUseCase:
    return CheckUseCase(
        source_model=source_model,
        rule=rule,
        filesystem=FileSystemGateway(),
        config_loader=ConfigurationLoader(config or {}),
        telemetry=telemetry,
    )


class TestCheckUseCase:
    """Test CheckUseCase."""

    def test_reports_each_file(
        self, tmp_path: Path, source_model: AstroidSourceModel, rule: NullOrEmptyRule
    ) -> None:
        (tmp_path / "bad.py").write_text(VIOLATION)
        (tmp_path / "good.py").write_text("x = 1\n")

        reports = _use_case(source_model, rule).execute(str(tmp_path))

        by_name = {Path(r.path).name: r for r in reports}
        assert set(by_name) == {"bad.py", "good.py"}
        assert by_name["bad.py"].has_violations()
        assert by_name["bad.py"].diagnostics[0].line == 3
        assert not by_name["good.py"].has_violations()

    def test_syntax_error_is_skipped_not_fatal(
        self, tmp_path: Path, source_model: AstroidSourceModel, rule: NullOrEmptyRule
    ) -> None:
        (tmp_path / "broken.py").write_text("def broken(:\n")
        (tmp_path / "bad.py").write_text(VIOLATION)

        reports = _use_case(source_model, rule).execute(str(tmp_path))

        broken = next(r for r in reports if r.path.endswith("broken.py"))
        assert broken.skipped_reason
        assert not broken.diagnostics
        assert any(r.has_violations() for r in reports)

    def test_excluded_paths_are_not_checked(
        self, tmp_path: Path, source_model: AstroidSourceModel, rule: NullOrEmptyRule
    ) -> None:
        (tmp_path / "fixtures").mkdir()
        (tmp_path / "fixtures" / "bad.py").write_text(VIOLATION)

        reports = _use_case(source_model, rule, {"exclude_paths": ["fixtures/"]}).execute(str(tmp_path))

        assert reports == []

    def test_single_file_target(
        self, tmp_path: Path, source_model: AstroidSourceModel, rule: NullOrEmptyRule
    ) -> None:
        target = tmp_path / "bad.py"
        target.write_text(VIOLATION)

        reports = _use_case(source_model, rule).execute(str(target))

        assert len(reports) == 1
        assert len(reports[0].diagnostics) == 1

    def test_reports_progress_to_telemetry(
        self, tmp_path: Path, source_model: AstroidSourceModel, rule: NullOrEmptyRule
    ) -> None:
        (tmp_path / "bad.py").write_text(VIOLATION)
        telemetry = MagicMock()

        _use_case(source_model, rule, telemetry=telemetry).execute(str(tmp_path))

        messages = [c.args[0] for c in telemetry.step.call_args_list]
        assert messages[0].startswith("Checking 1 file(s)")
        assert messages[-1] == "Found 1 violation(s) of DIAG0001"
