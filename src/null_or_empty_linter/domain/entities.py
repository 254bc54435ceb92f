import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any, Optional

import libcst as cst

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


class Severity(Enum):
    """Severity of a reported finding."""
    WARNING = "warning"


class TransformationType(Enum):
    """Types of code transformations the fixer can apply."""
    REPLACE_NULL_OR_EMPTY = "replace_null_or_empty"
    ADD_IMPORT = "add_import"


@dataclass(frozen=True)
class Span:
    """Half-open range of character offsets into a unit's code."""
    start_offset: int
    end_offset: int

    def to_dict(self) -> dict[str, int]:
        return {"start_offset": self.start_offset, "end_offset": self.end_offset}


@dataclass(frozen=True)
class ResolvedSymbol:
    """Identity of the function a call resolves to."""
    containing_type: str
    method_name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.containing_type}.{self.method_name}"


@dataclass(frozen=True)
class SourceUnit:
    """
    One parsed compilation unit.

    Wraps an immutable LibCST module. Edits never touch the wrapped tree;
    they produce a new SourceUnit. Offsets used across the linter are
    character offsets into ``code``.
    """
    module: cst.Module
    path: Optional[str] = None

    @property
    def code(self) -> str:
        return self.module.code

    @cached_property
    def _line_starts(self) -> list[int]:
        return [0] + [m.end() for m in _NEWLINE_RE.finditer(self.code)]

    def line_text(self, line: int) -> str:
        """Return the text of a 1-based line, including its line ending."""
        starts = self._line_starts
        start = starts[line - 1]
        end = starts[line] if line < len(starts) else len(self.code)
        return self.code[start:end]

    def offset_of(self, line: int, column: int) -> int:
        """Convert a 1-based line and 0-based character column into an offset."""
        return self._line_starts[line - 1] + column

    def offset_of_byte_column(self, line: int, byte_column: int) -> int:
        """Convert a 1-based line and 0-based UTF-8 byte column into an offset."""
        return self.offset_of(line, self.char_column(line, byte_column))

    def char_column(self, line: int, byte_column: int) -> int:
        encoded = self.line_text(line).encode("utf-8")
        return len(encoded[:byte_column].decode("utf-8", errors="ignore"))


@dataclass(frozen=True)
class CallSite:
    """A call expression exposed by a source model, with its location."""
    node: Any
    span: Span
    line: int
    column: int


@dataclass(frozen=True)
class Diagnostic:
    """A reported finding with a stable rule id, severity, message and location."""
    rule_id: str
    severity: Severity
    message: str
    span: Span
    line: int
    column: int
    path: Optional[str] = None

    def location(self) -> str:
        """Human readable ``path:line:col`` (1-based column)."""
        prefix = self.path or "<unknown>"
        return f"{prefix}:{self.line}:{self.column + 1}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "span": self.span.to_dict(),
        }


@dataclass(frozen=True)
class TransformationPlan:
    """
    Pure data structure describing a code transformation.

    Rules return plans instead of LibCST transformers. The fixer gateway
    interprets each plan and applies the actual LibCST transformation.
    """
    transformation_type: TransformationType
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def replace_null_or_empty(
        cls, spans: list[Span], bind_complex_receivers: bool = True
    ) -> "TransformationPlan":
        """Create plan to rewrite every flagged call found at ``spans``."""
        return cls(
            transformation_type=TransformationType.REPLACE_NULL_OR_EMPTY,
            params={
                "spans": tuple(spans),
                "bind_complex_receivers": bind_complex_receivers,
            },
        )

    @classmethod
    def add_import(cls, module: str, imports: list[str]) -> "TransformationPlan":
        """Create plan to add an import statement."""
        return cls(
            transformation_type=TransformationType.ADD_IMPORT,
            params={"module": module, "imports": list(imports)}
        )


@dataclass(frozen=True)
class FixFailure:
    """A diagnostic whose fix was refused, with the reason."""
    diagnostic: Diagnostic
    reason: str


@dataclass(frozen=True)
class FileReport:
    """Diagnostics found in one file."""
    path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    skipped_reason: Optional[str] = None

    def has_violations(self) -> bool:
        return bool(self.diagnostics)


@dataclass(frozen=True)
class FixOutcome:
    """Result of fixing one file."""
    path: str
    original_code: str
    unit: Optional[SourceUnit] = None
    applied: list[Diagnostic] = field(default_factory=list)
    failed: list[FixFailure] = field(default_factory=list)
    skipped_reason: Optional[str] = None

    @property
    def new_code(self) -> str:
        if self.unit is None:
            return self.original_code
        return self.unit.code

    def is_modified(self) -> bool:
        return self.new_code != self.original_code
