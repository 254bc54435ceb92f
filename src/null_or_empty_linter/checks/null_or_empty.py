"""Null-or-empty checks (W9701 / DIAG0001)."""

from typing import TYPE_CHECKING, Optional

import astroid  # type: ignore[import-untyped]
from pylint.checkers import BaseChecker

from null_or_empty_linter.domain.constants import (
    PYLINT_MSG_ID,
    PYLINT_SYMBOL,
    RULE_ID,
    RULE_MESSAGE,
    RULE_TITLE,
)
from null_or_empty_linter.domain.rules.null_or_empty import NullOrEmptyRule
from null_or_empty_linter.infrastructure.gateways.astroid_gateway import AstroidSourceModel

if TYPE_CHECKING:
    from pylint.lint import PyLinter


class NullOrEmptyChecker(BaseChecker):
    """W9701: calls to identitymodel.tokens.CollectionUtilities.is_null_or_empty()."""

    name = "null-or-empty"
    msgs = {
        PYLINT_MSG_ID: (
            f"{RULE_MESSAGE} ({RULE_ID})",
            PYLINT_SYMBOL,
            RULE_TITLE,
        )
    }

    def __init__(
        self, linter: "PyLinter", source_model: Optional[AstroidSourceModel] = None
    ) -> None:
        super().__init__(linter)
        self._source_model = source_model or AstroidSourceModel()

    def visit_call(self, node: astroid.nodes.Call) -> None:
        """Flag the whole invocation when the callee resolves to the disallowed helper."""
        if NullOrEmptyRule.matches(self._source_model.resolve_call(node)):
            self.add_message(PYLINT_SYMBOL, node=node)
