"""
Simple Plan Calculator

Flat front-end/back-end percentages with a minimum monthly pay floor.
"""

from ..models import ZERO, EvaluationContext, PayoutResult
from .money import percent_of


class SimplePlanCalculator:
    """Calculates payout for simple salesperson plans."""

    def calculate(self, ctx: EvaluationContext) -> PayoutResult:
        """
        Front-End = front gross × front_end_gross_percentage
        Back-End  = back gross × back_end_gross_percentage
        Payout    = max(Front-End + Back-End, minimum_monthly_pay)

        Simple plans have no packs, unit flats or CSI bonus, so those
        figures are reported as zero.
        """
        plan = ctx.plan
        inputs = ctx.inputs

        front = percent_of(inputs.front_end_gross_profit, plan.front_end_gross_percentage)
        back = percent_of(inputs.back_end_gross_profit, plan.back_end_gross_percentage)
        total = front + back
        minimum = plan.minimum_monthly_pay

        return PayoutResult(
            front_end_commission=front,
            back_end_commission=back,
            csi_bonus=ZERO,
            pack_deduction=ZERO,
            unit_flat_amount=ZERO,
            percentage_amount=front,
            used_higher_amount=False,
            total_commission=total,
            minimum_guarantee=minimum,
            final_payout=max(total, minimum),
            adjusted_front_end_profit=inputs.front_end_gross_profit,
            back_end_percentage=plan.back_end_gross_percentage,
        )
