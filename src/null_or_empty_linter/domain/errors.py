"""Domain exceptions for detection and rewriting."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from null_or_empty_linter.domain.entities import Span


class NullOrEmptyLinterError(Exception):
    """Base class for every error raised by the linter."""


class SourceParseError(NullOrEmptyLinterError):
    """Source text could not be turned into a SourceUnit."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        prefix = f"{path}: " if path else ""
        super().__init__(f"{prefix}{message}")


class FixError(NullOrEmptyLinterError):
    """A fix was refused. The unit it was applied to is left untouched."""

    def __init__(self, span: "Span", reason: str) -> None:
        self.span = span
        self.reason = reason
        super().__init__(f"{reason} (offsets {span.start_offset}-{span.end_offset})")


class TargetNotFoundError(FixError):
    """The supplied span no longer identifies a call expression."""

    def __init__(self, span: "Span") -> None:
        super().__init__(span, "No call expression found at the given location")


class MalformedReceiverError(FixError):
    """The receiver cannot be extracted or bound as a standalone expression."""
