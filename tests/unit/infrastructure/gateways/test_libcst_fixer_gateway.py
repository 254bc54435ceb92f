"""Unit tests for LibCSTFixerGateway."""

from unittest.mock import MagicMock

import libcst as cst
import pytest

from null_or_empty_linter.domain.entities import SourceUnit, Span, TransformationPlan
from null_or_empty_linter.domain.errors import MalformedReceiverError, TargetNotFoundError
from null_or_empty_linter.infrastructure.gateways.libcst_fixer_gateway import LibCSTFixerGateway

CODE = "ok = CollectionUtilities.is_null_or_empty(items)\n"
TARGET = "CollectionUtilities.is_null_or_empty(items)"


def _unit(code: str = CODE) -> SourceUnit:
    return SourceUnit(module=cst.parse_module(code), path="mod.py")


def _span(code: str = CODE, text: str = TARGET) -> Span:
    start = code.index(text)
    return Span(start, start + len(text))


class TestLibCSTFixerGateway:
    """Test plan interpretation."""

    def test_applies_plans_in_order(self) -> None:
        gateway = LibCSTFixerGateway()
        unit = _unit()

        result = gateway.apply_plans(
            unit,
            [
                TransformationPlan.replace_null_or_empty([_span()]),
                TransformationPlan.add_import("itertools", ["islice"]),
            ],
        )

        assert result.code == (
            "from itertools import islice\n"
            "ok = items is None or not list(islice(items, 1))\n"
        )
        assert result.path == "mod.py"

    def test_original_unit_is_unchanged(self) -> None:
        gateway = LibCSTFixerGateway()
        unit = _unit()

        gateway.apply_plans(unit, [TransformationPlan.replace_null_or_empty([_span()])])

        assert unit.code == CODE

    def test_empty_plan_list_returns_equivalent_unit(self) -> None:
        result = LibCSTFixerGateway().apply_plans(_unit(), [])
        assert result.code == CODE

    def test_unknown_plan_type_raises(self) -> None:
        plan = MagicMock()
        plan.transformation_type = "rename"
        with pytest.raises(ValueError, match="Unknown transformation type"):
            LibCSTFixerGateway().apply_plans(_unit(), [plan])

    def test_stale_span_raises_target_not_found(self) -> None:
        gateway = LibCSTFixerGateway()
        with pytest.raises(TargetNotFoundError):
            gateway.apply_plans(_unit(), [TransformationPlan.replace_null_or_empty([Span(0, 2)])])

    def test_failure_leaves_no_partial_result(self) -> None:
        code = CODE + "other = CollectionUtilities.is_null_or_empty()\n"
        unit = _unit(code)
        plans = [
            TransformationPlan.replace_null_or_empty(
                [_span(code), _span(code, "CollectionUtilities.is_null_or_empty()")]
            )
        ]
        with pytest.raises(MalformedReceiverError):
            LibCSTFixerGateway().apply_plans(unit, plans)
        assert unit.code == code
