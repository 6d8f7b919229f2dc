"""
Front-End Commission Calculator

Computes the percentage and unit-flat alternatives and picks the payable one.
"""

from decimal import Decimal

from ..models import ZERO, EvaluationContext, FrontEndCalculation
from .money import percent_of, quantize_money
from .tiers import select_tier


class FrontEndCalculator:
    """Calculates front-end commission for advanced salesperson plans."""

    def calculate(self, ctx: EvaluationContext) -> FrontEndCalculation:
        """
        Calculate front-end commission.

        - Percentage side: (front gross - pack) × gross_percentage
        - Unit-flat side: flat amount from the matching volume tier
        - take_higher pays the larger side; otherwise the percentage side
        - used_higher_amount flags a larger flat side whether or not it is paid
        """
        front_end = ctx.plan.front_end_commission

        adjusted = ctx.inputs.front_end_gross_profit - ctx.pack_deduction
        percentage_amount = percent_of(adjusted, front_end.gross_percentage)
        unit_flat_amount = self._calculate_unit_flat(ctx)

        used_higher_amount = unit_flat_amount > percentage_amount
        commission = max(percentage_amount, unit_flat_amount) if front_end.take_higher else percentage_amount

        return FrontEndCalculation(
            adjusted_front_end_profit=adjusted,
            percentage_amount=percentage_amount,
            unit_flat_amount=unit_flat_amount,
            commission=commission,
            used_higher_amount=used_higher_amount,
        )

    def _calculate_unit_flat(self, ctx: EvaluationContext) -> Decimal:
        """Retroactive tiers pay per unit sold; others pay the flat once."""
        structure = ctx.plan.front_end_commission.unit_flat_structure
        if not structure.enabled:
            return ZERO

        units = ctx.inputs.units_sold
        tier = select_tier(structure.tiers, units)
        if tier is None:
            return ZERO

        if tier.retroactive:
            return quantize_money(tier.flat_amount * units)
        return quantize_money(tier.flat_amount)
