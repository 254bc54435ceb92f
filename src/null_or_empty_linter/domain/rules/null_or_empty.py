"""Null-or-empty Rule (DIAG0001) - detection and auto-fix."""

import logging
from collections.abc import Iterator
from typing import Optional

from null_or_empty_linter.domain.constants import (
    DISALLOWED_CONTAINING_TYPE,
    DISALLOWED_METHOD_NAME,
    EMPTINESS_FUNCTION,
    EMPTINESS_MODULE,
    RULE_ID,
    RULE_MESSAGE,
    RULE_TITLE,
)
from null_or_empty_linter.domain.entities import (
    Diagnostic,
    ResolvedSymbol,
    Severity,
    SourceUnit,
    Span,
    TransformationPlan,
)
from null_or_empty_linter.domain.protocols import FixerGatewayProtocol, SourceModelProtocol

logger = logging.getLogger(__name__)


class NullOrEmptyRule:
    """
    Rule for DIAG0001: calls to CollectionUtilities.is_null_or_empty().

    Calls are recognised by the identity their callee resolves to, never by
    source text, so a same-named method on another class is left alone.

    Auto-fix rewrites ``is_null_or_empty(r)`` to
    ``r is None or not list(islice(r, 1))`` and adds
    ``from itertools import islice`` when it is missing.
    """

    code: str = RULE_ID
    description: str = RULE_TITLE

    def __init__(
        self,
        source_model: SourceModelProtocol,
        fixer_gateway: FixerGatewayProtocol,
        bind_complex_receivers: bool = True,
    ) -> None:
        self._source_model = source_model
        self._fixer_gateway = fixer_gateway
        self._bind_complex_receivers = bind_complex_receivers

    @staticmethod
    def matches(symbol: Optional[ResolvedSymbol]) -> bool:
        """True iff ``symbol`` is exactly the disallowed helper."""
        if symbol is None:
            return False
        return (
            symbol.containing_type == DISALLOWED_CONTAINING_TYPE
            and symbol.method_name == DISALLOWED_METHOD_NAME
        )

    def check(self, unit: SourceUnit) -> Iterator[Diagnostic]:
        """Yield one diagnostic per call that resolves to the disallowed helper."""
        for call in self._source_model.iter_calls(unit):
            symbol = self._source_model.resolve_symbol(call)
            if symbol is None:
                logger.debug("Skipping unresolved call at %s:%d", unit.path, call.line)
                continue
            if not self.matches(symbol):
                continue
            yield Diagnostic(
                rule_id=RULE_ID,
                severity=Severity.WARNING,
                message=RULE_MESSAGE,
                span=call.span,
                line=call.line,
                column=call.column,
                path=unit.path,
            )

    def plan_fixes(self, spans: list[Span]) -> list[TransformationPlan]:
        """Describe the rewrite of ``spans`` without applying it."""
        unique = sorted(set(spans), key=lambda s: (s.start_offset, s.end_offset))
        if not unique:
            return []
        return [
            TransformationPlan.replace_null_or_empty(unique, self._bind_complex_receivers),
            TransformationPlan.add_import(EMPTINESS_MODULE, [EMPTINESS_FUNCTION]),
        ]

    def apply_fix(self, unit: SourceUnit, span: Span) -> SourceUnit:
        """Rewrite the single call at ``span``."""
        return self.apply_fix_all(unit, [span])

    def apply_fix_all(self, unit: SourceUnit, spans: list[Span]) -> SourceUnit:
        """
        Rewrite every call at ``spans``.

        Spans must come from diagnostics computed on ``unit``. They are
        applied in one traversal, so their order does not matter.
        """
        plans = self.plan_fixes(spans)
        if not plans:
            return unit
        return self._fixer_gateway.apply_plans(unit, plans)

    def get_fix_instructions(self, diagnostic: Diagnostic) -> str:
        """Provide human/AI instructions for manual fix."""
        return (
            "Replace the call with an explicit check: "
            "1. Test the argument with 'is None' "
            "2. Or it with 'not list(islice(<argument>, 1))' "
            f"3. Add 'from {EMPTINESS_MODULE} import {EMPTINESS_FUNCTION}' "
            "4. Bind the argument to a local first if evaluating it has side effects"
        )
