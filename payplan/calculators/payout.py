"""
Payout Calculator

Combines the step results into the final payout.
"""

from ..models import EvaluationContext, PayoutResult


class PayoutCalculator:
    """Calculates total commission and final payout for advanced plans."""

    def calculate(self, ctx: EvaluationContext) -> PayoutResult:
        """
        Final Payout = max(Total Commission, Minimum Guarantee)

        Total Commission = Front-End Commission
                         + Back-End Commission
                         + CSI Bonus
        """
        front_end = ctx.front_end
        back_end = ctx.back_end

        total = front_end.commission + back_end.commission + back_end.csi_bonus

        return PayoutResult(
            front_end_commission=front_end.commission,
            back_end_commission=back_end.commission,
            csi_bonus=back_end.csi_bonus,
            pack_deduction=ctx.pack_deduction,
            unit_flat_amount=front_end.unit_flat_amount,
            percentage_amount=front_end.percentage_amount,
            used_higher_amount=front_end.used_higher_amount,
            total_commission=total,
            minimum_guarantee=ctx.minimum_guarantee,
            final_payout=max(total, ctx.minimum_guarantee),
            adjusted_front_end_profit=front_end.adjusted_front_end_profit,
            back_end_percentage=back_end.percentage,
        )
