"""Domain models for rules."""

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from null_or_empty_linter.domain.entities import Diagnostic, SourceUnit, Span


class BaseRule(Protocol):
    """A single lint rule that can detect and rewrite its own findings."""

    code: str
    description: str

    def check(self, unit: "SourceUnit") -> Iterator["Diagnostic"]:
        """Lazily yield every finding in the unit."""
        ...

    def apply_fix(self, unit: "SourceUnit", span: "Span") -> "SourceUnit":
        """
        Return a new unit with the finding at ``span`` rewritten.

        Raises FixError (and leaves ``unit`` untouched) when the fix is refused.
        """
        ...

    def apply_fix_all(self, unit: "SourceUnit", spans: list["Span"]) -> "SourceUnit":
        """Rewrite every finding at ``spans`` in one go."""
        ...

    def get_fix_instructions(self, diagnostic: "Diagnostic") -> str:
        """Provide human/AI instructions for a manual fix."""
        ...
