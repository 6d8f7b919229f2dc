"""
Back-End Commission Calculator

Handles volume-tiered back-end percentage and the CSI benchmark bonus.
"""

from decimal import Decimal

from ..models import ZERO, BackEndCalculation, EvaluationContext
from .money import percent_of
from .tiers import select_tier


class BackEndCalculator:
    """Calculates back-end commission and CSI bonus."""

    def calculate(self, ctx: EvaluationContext) -> BackEndCalculation:
        """
        Calculate back-end commission.

        The CSI bonus is paid on the same back-end gross but reported
        separately; it is not folded into commission here.
        """
        percentage = self._resolve_percentage(ctx)
        gross = ctx.inputs.back_end_gross_profit

        return BackEndCalculation(
            percentage=percentage,
            commission=percent_of(gross, percentage),
            csi_bonus=self._calculate_csi_bonus(ctx),
        )

    def _resolve_percentage(self, ctx: EvaluationContext) -> Decimal:
        """Matching volume tier percentage, else the plan's base percentage."""
        back_end = ctx.plan.back_end_commission
        if back_end.enabled:
            tier = select_tier(back_end.tiers, ctx.inputs.units_sold)
            if tier is not None:
                return tier.percentage
        return back_end.base_percentage

    def _calculate_csi_bonus(self, ctx: EvaluationContext) -> Decimal:
        csi = ctx.plan.csi_bonus
        if not (ctx.inputs.csi_above_benchmark and csi.enabled and csi.benchmark_bonus.enabled):
            return ZERO
        return percent_of(ctx.inputs.back_end_gross_profit, csi.benchmark_bonus.bonus_percentage)
