"""
Pack Deduction Calculator

Deducts the used-vehicle pack from front-end gross before commission.
"""

from decimal import Decimal

from ..models import ZERO, EvaluationContext


class PackDeductionCalculator:
    """Selects the high- or low-value pack for a used vehicle."""

    USED_VEHICLE = "used"

    def calculate(self, ctx: EvaluationContext) -> Decimal:
        """
        Calculate the pack deduction for this deal.

        Bands (checked in order, first match wins):
        - High value: vehicle_value >= high_value_pack.threshold
        - Low value:  min_threshold <= vehicle_value < max_threshold
        - Otherwise no pack

        New vehicles and plans with packs disabled never deduct.
        """
        pack = ctx.plan.used_vehicle_pack
        inputs = ctx.inputs

        if inputs.vehicle_type != self.USED_VEHICLE or not pack.enabled:
            return ZERO

        value = inputs.vehicle_value
        if value >= pack.high_value_pack.threshold:
            return pack.high_value_pack.pack_amount

        low = pack.low_value_pack
        if low.min_threshold <= value < low.max_threshold:
            return low.pack_amount

        return ZERO
