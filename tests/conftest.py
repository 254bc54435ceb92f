"""Shared fixtures.

Run pytest from the project root; pythonpath in pyproject.toml puts src/ on
the path. The disallowed helper lives in a third-party package that is not
installed here, so fixtures provide it two ways: as an astroid module for
inference and as a runtime module for executing rewritten code.
"""

import sys
import types
from collections.abc import Callable, Iterator

import astroid
import pytest
from astroid.builder import AstroidBuilder

from null_or_empty_linter.domain.entities import SourceUnit
from null_or_empty_linter.domain.rules.null_or_empty import NullOrEmptyRule
from null_or_empty_linter.infrastructure.gateways.astroid_gateway import AstroidSourceModel
from null_or_empty_linter.infrastructure.gateways.libcst_fixer_gateway import LibCSTFixerGateway

LIBRARY_MODULE = "identitymodel.tokens"
LIBRARY_SOURCE = '''
class CollectionUtilities:
    @staticmethod
    def is_null_or_empty(collection):
        return collection is None or len(collection) == 0
'''


@pytest.fixture
def identity_tokens_library() -> Iterator[None]:
    """Make identitymodel.tokens inferable by astroid."""
    module = AstroidBuilder(astroid.MANAGER).string_build(LIBRARY_SOURCE, modname=LIBRARY_MODULE)
    astroid.MANAGER.astroid_cache[LIBRARY_MODULE] = module
    yield
    astroid.MANAGER.astroid_cache.pop(LIBRARY_MODULE, None)


@pytest.fixture
def identity_tokens_runtime(monkeypatch: pytest.MonkeyPatch) -> Callable[[], None]:
    """
    Return a function that makes identitymodel.tokens importable.

    Call it after analysis is done, so astroid never sees the runtime modules.
    """

    def _install() -> None:
        package = types.ModuleType("identitymodel")
        tokens = types.ModuleType(LIBRARY_MODULE)
        exec(LIBRARY_SOURCE, tokens.__dict__)
        package.tokens = tokens  # type: ignore[attr-defined]
        monkeypatch.setitem(sys.modules, "identitymodel", package)
        monkeypatch.setitem(sys.modules, LIBRARY_MODULE, tokens)

    return _install


@pytest.fixture
def source_model() -> AstroidSourceModel:
    return AstroidSourceModel()


@pytest.fixture
def rule(source_model: AstroidSourceModel) -> NullOrEmptyRule:
    return NullOrEmptyRule(source_model=source_model, fixer_gateway=LibCSTFixerGateway())


@pytest.fixture
def duplicating_rule(source_model: AstroidSourceModel) -> NullOrEmptyRule:
    return NullOrEmptyRule(
        source_model=source_model,
        fixer_gateway=LibCSTFixerGateway(),
        bind_complex_receivers=False,
    )


def fix_all(rule: NullOrEmptyRule, unit: SourceUnit) -> SourceUnit:
    return rule.apply_fix_all(unit, [d.span for d in rule.check(unit)])


@pytest.fixture
def fix_code(source_model: AstroidSourceModel, rule: NullOrEmptyRule):
    """Detect and fix every violation in a snippet, returning the new code."""

    def _fix(code: str, use_rule: NullOrEmptyRule = rule) -> str:
        unit = source_model.parse(code, "example.py")
        return fix_all(use_rule, unit).code

    return _fix
