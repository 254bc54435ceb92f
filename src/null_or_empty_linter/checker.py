from pylint.lint import PyLinter

from null_or_empty_linter.checks.null_or_empty import NullOrEmptyChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    linter.register_checker(NullOrEmptyChecker(linter))
