"""
Rule identity and rewrite constants for the null-or-empty rule.
"""

# Diagnostic identity
RULE_ID: str = "DIAG0001"
RULE_TITLE: str = (
    "Use an explicit None and emptiness check instead of the falsely exposed "
    "CollectionUtilities helper"
)
RULE_MESSAGE: str = (
    "Replace usage of identitymodel.tokens.CollectionUtilities.is_null_or_empty()"
)

# Pylint surface. Pylint message ids must follow the [CEFIRW]dddd shape.
PYLINT_MSG_ID: str = "W9701"
PYLINT_SYMBOL: str = "disallowed-is-null-or-empty"

# Resolved identity of the disallowed helper
DISALLOWED_CONTAINING_TYPE: str = "identitymodel.tokens.CollectionUtilities"
DISALLOWED_METHOD_NAME: str = "is_null_or_empty"

# Rewrite shape: <receiver> is None or not list(islice(<receiver>, 1))
EMPTINESS_MODULE: str = "itertools"
EMPTINESS_FUNCTION: str = "islice"
BOUND_RECEIVER_NAME: str = "_null_or_empty_receiver"

# pyproject.toml section
CONFIG_SECTION: str = "null-or-empty-linter"
