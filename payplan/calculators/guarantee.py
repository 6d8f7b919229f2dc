"""
Minimum Guarantee Calculator

Looks up the unit-based payout floor for advanced salesperson plans.
"""

from decimal import Decimal

from ..models import ZERO, EvaluationContext
from .tiers import select_tier


class GuaranteeCalculator:
    """Resolves the guarantee amount for the units sold."""

    def calculate(self, ctx: EvaluationContext) -> Decimal:
        guarantee = ctx.plan.minimum_guarantee
        if not guarantee.enabled:
            return ZERO

        tier = select_tier(guarantee.tiers, ctx.inputs.units_sold)
        if tier is None:
            return ZERO
        return tier.guarantee_amount
