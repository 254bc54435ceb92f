from collections.abc import Iterator
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from null_or_empty_linter.domain.entities import (
        CallSite,
        ResolvedSymbol,
        SourceUnit,
        TransformationPlan,
    )


class SourceModelProtocol(Protocol):
    """
    Host capability that turns text into units and answers semantic questions.

    The detector only talks to this port, so it can run against an in-memory
    fake as well as the astroid/LibCST adapter.
    """

    def parse(self, text: str, path: Optional[str] = None) -> "SourceUnit":
        """Parse source text. Raises SourceParseError on invalid syntax."""
        ...

    def iter_calls(self, unit: "SourceUnit") -> Iterator["CallSite"]:
        """Yield every call expression in deterministic pre-order."""
        ...

    def resolve_symbol(self, call: "CallSite") -> Optional["ResolvedSymbol"]:
        """Resolve the callee of a call, or None when it cannot be resolved."""
        ...

    def render(self, unit: "SourceUnit") -> str:
        ...


class FixerGatewayProtocol(Protocol):
    """Protocol for applying code fixes. Implementers accept only TransformationPlan at boundary."""

    def apply_plans(
        self, unit: "SourceUnit", plans: list["TransformationPlan"]
    ) -> "SourceUnit":
        """Apply plans in order and return the new unit. The input unit is not modified."""
        ...


class FileSystemProtocol(Protocol):
    def glob_python_files(self, path: str) -> list[str]: ...
    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...
    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None: ...


class TelemetryPort(Protocol):
    """Protocol for user-facing progress updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
