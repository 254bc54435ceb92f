"""LibCST Transformers for code fixes."""

from typing import Optional

import libcst as cst
from libcst.helpers import get_full_name_for_node
from libcst.metadata import ParentNodeProvider, PositionProvider

from null_or_empty_linter.domain.constants import BOUND_RECEIVER_NAME, EMPTINESS_FUNCTION
from null_or_empty_linter.domain.entities import SourceUnit, Span
from null_or_empty_linter.domain.errors import MalformedReceiverError, TargetNotFoundError

# Parents in which a bare ``a or b`` keeps its meaning without parentheses.
_OR_SAFE_PARENTS = (
    cst.If,
    cst.While,
    cst.Expr,
    cst.Assign,
    cst.AnnAssign,
    cst.AugAssign,
    cst.Return,
    cst.Arg,
    cst.Element,
    cst.DictElement,
    cst.Assert,
    cst.IfExp,
    cst.Lambda,
    cst.Index,
    cst.Param,
    cst.NamedExpr,
    cst.Yield,
    cst.WithItem,
    cst.For,
    cst.CompIf,
    cst.CompFor,
    cst.FormattedStringExpression,
)

# Receivers that bind looser than ``is`` and need parentheses on its left.
_LOOSE_RECEIVERS = (cst.BooleanOperation, cst.Comparison, cst.IfExp, cst.Lambda, cst.NamedExpr, cst.Yield)

_COMPREHENSIONS = (cst.ListComp, cst.SetComp, cst.DictComp, cst.GeneratorExp)


class AddImportTransformer(cst.CSTTransformer):
    """
    Transformer to add a ``from <module> import <names>`` statement.

    Names already imported at module level under their own name are skipped,
    so applying the transformer any number of times yields one import.
    """

    def __init__(self, context: dict) -> None:
        super().__init__()
        self.module = context.get("module")
        self.imports = context.get("imports", [])  # List[str]
        self.added = False

    def leave_Module(self, original_node: cst.Module, updated_node: cst.Module) -> cst.Module:
        if self.added or not self.module:
            return updated_node
        missing = [n for n in self.imports if not self._is_imported(updated_node, n)]
        if not missing:
            return updated_node

        names = [cst.ImportAlias(name=cst.Name(n)) for n in missing]

        # Support dotted module paths like "a.b.c"
        parts = self.module.split(".")
        module_expr: cst.BaseExpression = cst.Name(parts[0])
        for part in parts[1:]:
            module_expr = cst.Attribute(value=module_expr, attr=cst.Name(part))

        import_stmt = cst.ImportFrom(
            module=module_expr,
            names=names,
            whitespace_after_import=cst.SimpleWhitespace(" ")
        )

        new_body = list(updated_node.body)
        new_body.insert(self._insertion_index(new_body), cst.SimpleStatementLine(body=[import_stmt]))
        self.added = True
        return updated_node.with_changes(body=new_body)

    def _is_imported(self, module: cst.Module, name: str) -> bool:
        """Exact match on module and bound name among top-level imports."""
        for stmt in module.body:
            if not isinstance(stmt, cst.SimpleStatementLine):
                continue
            for item in stmt.body:
                if not isinstance(item, cst.ImportFrom) or item.relative or item.module is None:
                    continue
                if get_full_name_for_node(item.module) != self.module:
                    continue
                if isinstance(item.names, cst.ImportStar):
                    return True
                for alias in item.names:
                    if alias.evaluated_name == name and alias.evaluated_alias in (None, name):
                        return True
        return False

    def _insertion_index(self, body: list[cst.BaseStatement]) -> int:
        """Index right after the leading docstring and import block."""
        insert_idx = 0
        for i, stmt in enumerate(body):
            if i == 0 and self._is_docstring(stmt):
                insert_idx = 1
                continue
            if isinstance(stmt, cst.SimpleStatementLine) and all(
                isinstance(item, (cst.Import, cst.ImportFrom)) for item in stmt.body
            ):
                insert_idx = i + 1
                continue
            break
        return insert_idx

    def _is_docstring(self, stmt: cst.BaseStatement) -> bool:
        return (
            isinstance(stmt, cst.SimpleStatementLine)
            and len(stmt.body) == 1
            and isinstance(stmt.body[0], cst.Expr)
            and isinstance(stmt.body[0].value, (cst.SimpleString, cst.ConcatenatedString))
        )


class NullOrEmptyCallTransformer(cst.CSTTransformer):
    """
    Transformer replacing ``is_null_or_empty(r)`` calls found at given spans.

    Each call becomes ``r is None or not list(islice(r, 1))``. Calls are
    located by their character span, never by node identity. Every span must
    match a call or TargetNotFoundError is raised once the module is left.
    """

    METADATA_DEPENDENCIES = (PositionProvider, ParentNodeProvider)

    def __init__(self, context: dict) -> None:
        super().__init__()
        self.spans: set[Span] = set(context.get("spans", ()))
        self.bind_complex_receivers: bool = bool(context.get("bind_complex_receivers", True))
        self.replaced: set[Span] = set()
        self._unit: Optional[SourceUnit] = None

    def visit_Module(self, node: cst.Module) -> Optional[bool]:
        self._unit = SourceUnit(module=node)
        return True

    def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
        span = self._call_span(original_node)
        if span not in self.spans:
            return updated_node

        receiver = self._extract_receiver(updated_node, span)
        if self._is_simple_reference(receiver) or not self.bind_complex_receivers:
            replacement = self._build_duplicating(receiver)
        else:
            self._check_binding_allowed(original_node, span)
            replacement = self._build_binding(receiver)

        self.replaced.add(span)
        return self._attach_parentheses(original_node, updated_node, replacement)

    def leave_Module(self, original_node: cst.Module, updated_node: cst.Module) -> cst.Module:
        missing = self.spans - self.replaced
        if missing:
            raise TargetNotFoundError(min(missing, key=lambda s: (s.start_offset, s.end_offset)))
        return updated_node

    def _call_span(self, node: cst.Call) -> Span:
        """Span from the callee to the closing parenthesis, excluding wrapping parentheses."""
        assert self._unit is not None
        position = self.get_metadata(PositionProvider, node)
        start = self._unit.offset_of(position.start.line, position.start.column)
        end = self._unit.offset_of(position.end.line, position.end.column)
        return Span(start, end)

    def _extract_receiver(self, node: cst.Call, span: Span) -> cst.BaseExpression:
        if not node.args:
            raise MalformedReceiverError(span, "Call has no receiver argument")
        if len(node.args) > 1:
            raise MalformedReceiverError(span, "Expected a single receiver argument")
        arg = node.args[0]
        if arg.star:
            raise MalformedReceiverError(span, "Cannot use an unpacked argument as the receiver")
        value = arg.value
        # A sole generator argument borrows the call's parentheses.
        if isinstance(value, cst.GeneratorExp) and not value.lpar:
            value = value.with_changes(lpar=[cst.LeftParen()], rpar=[cst.RightParen()])
        return value

    def _is_simple_reference(self, expr: cst.BaseExpression) -> bool:
        """A name or a dotted attribute read on a name."""
        if isinstance(expr, cst.Name):
            return True
        if isinstance(expr, cst.Attribute):
            return self._is_simple_reference(expr.value)
        return False

    def _check_binding_allowed(self, node: cst.Call, span: Span) -> None:
        """Refuse places where an assignment expression is a syntax error."""
        in_comprehension = False
        child: cst.CSTNode = node
        parent = self.get_metadata(ParentNodeProvider, child, None)
        while parent is not None:
            if isinstance(parent, cst.Annotation):
                raise MalformedReceiverError(span, "Cannot bind the receiver inside an annotation")
            if isinstance(parent, cst.CompFor) and parent.iter is child:
                raise MalformedReceiverError(
                    span, "Cannot bind the receiver inside a comprehension iterable"
                )
            if isinstance(parent, _COMPREHENSIONS):
                in_comprehension = True
            if isinstance(parent, (cst.FunctionDef, cst.Lambda)):
                return
            if isinstance(parent, cst.ClassDef):
                if in_comprehension:
                    raise MalformedReceiverError(
                        span, "Cannot bind the receiver inside a class-level comprehension"
                    )
                return
            child = parent
            parent = self.get_metadata(ParentNodeProvider, child, None)

    def _build_duplicating(self, receiver: cst.BaseExpression) -> cst.BooleanOperation:
        """``r is None or not list(islice(r, 1))`` evaluating ``r`` twice."""
        left = receiver
        loose = isinstance(left, _LOOSE_RECEIVERS) or (
            isinstance(left, cst.UnaryOperation) and isinstance(left.operator, cst.Not)
        )
        if loose and not left.lpar:
            left = left.with_changes(lpar=[cst.LeftParen()], rpar=[cst.RightParen()])
        return self._build_check(left, receiver.deep_clone())

    def _build_binding(self, receiver: cst.BaseExpression) -> cst.BooleanOperation:
        """``(tmp := r) is None or not list(islice(tmp, 1))`` evaluating ``r`` once."""
        bound = cst.NamedExpr(
            target=cst.Name(BOUND_RECEIVER_NAME),
            value=receiver,
            lpar=[cst.LeftParen()],
            rpar=[cst.RightParen()],
        )
        return self._build_check(bound, cst.Name(BOUND_RECEIVER_NAME))

    def _build_check(
        self, null_operand: cst.BaseExpression, sequence_operand: cst.BaseExpression
    ) -> cst.BooleanOperation:
        null_test = cst.Comparison(
            left=null_operand,
            comparisons=[cst.ComparisonTarget(operator=cst.Is(), comparator=cst.Name("None"))],
        )
        first_element = cst.Call(
            func=cst.Name(EMPTINESS_FUNCTION),
            args=[cst.Arg(value=sequence_operand), cst.Arg(value=cst.Integer("1"))],
        )
        emptiness_test = cst.UnaryOperation(
            operator=cst.Not(),
            expression=cst.Call(func=cst.Name("list"), args=[cst.Arg(value=first_element)]),
        )
        return cst.BooleanOperation(left=null_test, operator=cst.Or(), right=emptiness_test)

    def _attach_parentheses(
        self,
        original_node: cst.Call,
        updated_node: cst.Call,
        replacement: cst.BooleanOperation,
    ) -> cst.BooleanOperation:
        """Carry the call's own parentheses over, adding a pair where ``or`` would rebind."""
        if updated_node.lpar:
            return replacement.with_changes(lpar=updated_node.lpar, rpar=updated_node.rpar)
        parent = self.get_metadata(ParentNodeProvider, original_node, None)
        if isinstance(parent, _OR_SAFE_PARENTS):
            return replacement
        if isinstance(parent, cst.BooleanOperation) and isinstance(parent.operator, cst.Or):
            return replacement
        return replacement.with_changes(lpar=[cst.LeftParen()], rpar=[cst.RightParen()])
