"""LibCST based Fixer Gateway."""

import logging

import libcst as cst

from null_or_empty_linter.domain.entities import SourceUnit, TransformationPlan, TransformationType
from null_or_empty_linter.domain.protocols import FixerGatewayProtocol
from null_or_empty_linter.infrastructure.gateways.transformers import (
    AddImportTransformer,
    NullOrEmptyCallTransformer,
)

logger = logging.getLogger(__name__)


class LibCSTFixerGateway(FixerGatewayProtocol):
    """Gateway for applying safe code modifications using LibCST."""

    def _plan_to_transformer(self, plan: TransformationPlan) -> cst.CSTTransformer:
        """Convert a TransformationPlan to a LibCST transformer."""
        params = plan.params
        t = plan.transformation_type
        if t == TransformationType.REPLACE_NULL_OR_EMPTY:
            return NullOrEmptyCallTransformer(params)
        elif t == TransformationType.ADD_IMPORT:
            return AddImportTransformer(params)
        else:
            raise ValueError(f"Unknown transformation type: {plan.transformation_type}")

    def apply_plans(self, unit: SourceUnit, plans: list[TransformationPlan]) -> SourceUnit:
        """
        Apply a list of plans to a unit.

        Args:
            unit: The unit to transform. It is never modified.
            plans: Plans applied in order, each on the previous result.

        Returns:
            A new SourceUnit. Any FixError raised by a transformer propagates
            and no partial result is returned.
        """
        module = unit.module
        for plan in plans:
            transformer = self._plan_to_transformer(plan)
            if transformer.METADATA_DEPENDENCIES:
                module = cst.MetadataWrapper(module).visit(transformer)
            else:
                module = module.visit(transformer)
            logger.debug("Applied %s to %s", plan.transformation_type.value, unit.path or "<string>")
        return SourceUnit(module=module, path=unit.path)
