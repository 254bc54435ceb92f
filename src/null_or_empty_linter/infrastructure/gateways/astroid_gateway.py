import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

import astroid  # type: ignore[import-untyped]
import libcst as cst
from astroid.bases import UnboundMethod
from astroid.builder import AstroidBuilder
from astroid.helpers import safe_infer

from null_or_empty_linter.domain.entities import CallSite, ResolvedSymbol, SourceUnit, Span
from null_or_empty_linter.domain.errors import SourceParseError
from null_or_empty_linter.domain.protocols import SourceModelProtocol

logger = logging.getLogger(__name__)


class AstroidSourceModel(SourceModelProtocol):
    """
    Source model backed by LibCST for syntax and astroid for semantics.

    LibCST owns the lossless tree that is rendered back to text. astroid
    builds a second, semantic view of the same code on demand so callees can
    be resolved by inference. Both views agree on line numbers; columns are
    normalised to character offsets through the SourceUnit.
    """

    def parse(self, text: str, path: Optional[str] = None) -> SourceUnit:
        try:
            module = cst.parse_module(text)
        except cst.ParserSyntaxError as exc:
            raise SourceParseError(str(exc), path) from exc
        return SourceUnit(module=module, path=path)

    def render(self, unit: SourceUnit) -> str:
        return unit.code

    def build_semantic_tree(self, unit: SourceUnit) -> Optional[astroid.nodes.Module]:
        """Build the astroid tree for a unit, or None if astroid rejects the code."""
        module_name = Path(unit.path).stem if unit.path else ""
        try:
            builder = AstroidBuilder(astroid.MANAGER)
            return builder.string_build(unit.code, modname=module_name, path=unit.path)
        except astroid.AstroidSyntaxError as exc:
            logger.warning("Cannot build semantic tree for %s: %s", unit.path or "<string>", exc)
            return None

    def iter_calls(self, unit: SourceUnit) -> Iterator[CallSite]:
        """Yield every call in pre-order depth-first order."""
        tree = self.build_semantic_tree(unit)
        if tree is None:
            return
        for node in tree.nodes_of_class(astroid.nodes.Call):
            if node.end_lineno is None or node.end_col_offset is None:
                continue
            start = unit.offset_of_byte_column(node.lineno, node.col_offset)
            end = unit.offset_of_byte_column(node.end_lineno, node.end_col_offset)
            yield CallSite(
                node=node,
                span=Span(start, end),
                line=node.lineno,
                column=unit.char_column(node.lineno, node.col_offset),
            )

    def resolve_symbol(self, call: CallSite) -> Optional[ResolvedSymbol]:
        node = call.node
        if not isinstance(node, astroid.nodes.Call):
            return None
        return self.resolve_call(node)

    def resolve_call(self, node: astroid.nodes.Call) -> Optional[ResolvedSymbol]:
        """
        Resolve the function a call invokes.

        1. True inference of the callee.
        2. Import tracing when inference fails, e.g. because the library is
           not installed where the linter runs.
        """
        inferred = safe_infer(node.func)
        if inferred is not None and inferred is not astroid.Uninferable:
            return self._symbol_from_function(inferred)
        symbol = self._resolve_by_import(node.func)
        if symbol is not None:
            logger.debug("Resolved %s by import tracing at line %s", symbol.qualified_name, node.lineno)
        return symbol

    def _symbol_from_function(self, inferred: astroid.nodes.NodeNG) -> Optional[ResolvedSymbol]:
        """Map an inferred function or method to its containing type and name."""
        if not isinstance(inferred, (astroid.nodes.FunctionDef, UnboundMethod)):
            return None
        parent = inferred.parent
        if parent is None:
            return None
        return ResolvedSymbol(containing_type=parent.frame().qname(), method_name=inferred.name)

    def _resolve_by_import(self, func: astroid.nodes.NodeNG) -> Optional[ResolvedSymbol]:
        """Build the qualified name of a dotted callee from the import that binds its root."""
        attrs: list[str] = []
        current = func
        while isinstance(current, astroid.nodes.Attribute):
            attrs.append(current.attrname)
            current = current.expr
        if not isinstance(current, astroid.nodes.Name):
            return None

        base = self._import_target(current)
        if base is None:
            return None
        qualified = ".".join([base, *reversed(attrs)])
        containing_type, _, method_name = qualified.rpartition(".")
        if not containing_type:
            return None
        return ResolvedSymbol(containing_type=containing_type, method_name=method_name)

    def _import_target(self, name: astroid.nodes.Name) -> Optional[str]:
        """Return the absolute dotted path a name is imported as, if it is bound only by an import."""
        assignments = name.lookup(name.name)[1]
        if len(assignments) != 1:
            return None
        stmt = assignments[0]
        try:
            if isinstance(stmt, astroid.nodes.ImportFrom):
                if stmt.level:
                    return None
                return f"{stmt.modname}.{stmt.real_name(name.name)}"
            if isinstance(stmt, astroid.nodes.Import):
                return str(stmt.real_name(name.name))
        except astroid.AttributeInferenceError:
            return None
        return None
