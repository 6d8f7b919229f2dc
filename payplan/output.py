"""
Output Builder

Constructs the API response from a plan, its inputs and the payout result.
"""

from decimal import Decimal

from .deal_log import DealLogTotals
from .models import DealInputs, PayoutResult, PayPlan


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


def _fmt(value) -> str:
    """Format a number as currency string for descriptions."""
    return f"${value:,.2f}"


def _pct(value: Decimal) -> str:
    return f"{float(value):g}%"


class OutputBuilder:
    """Builds the final output response."""

    def build(self, plan: PayPlan, inputs: DealInputs, result: PayoutResult) -> dict:
        """Construct the complete response document."""
        return {
            "plan_summary": self.build_plan_summary(plan),
            "deal_inputs": self._build_deal_inputs(inputs),
            "calculations": self._build_calculations(plan, inputs, result),
            "payout": self._build_payout(result),
        }

    def build_plan_summary(self, plan: PayPlan) -> dict:
        return {
            "id": plan.id,
            "name": plan.name,
            "role": plan.role,
            "plan_type": plan.plan_type,
            "is_active": plan.is_active,
        }

    def build_deal_log_totals(self, totals: DealLogTotals) -> dict:
        """Month totals behind a deal-log evaluation, with per-vehicle back-end gross."""
        return {
            "units_sold": totals.units_sold,
            "front_end_gross": to_money(totals.front_end_gross),
            "back_end_gross": to_money(totals.back_end_gross),
            "pvr": to_money(totals.pvr),
        }

    def _build_deal_inputs(self, inputs: DealInputs) -> dict:
        return {
            "units_sold": inputs.units_sold,
            "front_end_gross_profit": to_money(inputs.front_end_gross_profit),
            "back_end_gross_profit": to_money(inputs.back_end_gross_profit),
            "vehicle_type": inputs.vehicle_type,
            "vehicle_value": to_money(inputs.vehicle_value),
            "csi_above_benchmark": inputs.csi_above_benchmark,
        }

    def _build_payout(self, result: PayoutResult) -> dict:
        """Flat view of the result for callers that only need the numbers."""
        return {
            "front_end_commission": to_money(result.front_end_commission),
            "back_end_commission": to_money(result.back_end_commission),
            "csi_bonus": to_money(result.csi_bonus),
            "pack_deduction": to_money(result.pack_deduction),
            "unit_flat_amount": to_money(result.unit_flat_amount),
            "percentage_amount": to_money(result.percentage_amount),
            "used_higher_amount": result.used_higher_amount,
            "total_commission": to_money(result.total_commission),
            "minimum_guarantee": to_money(result.minimum_guarantee),
            "final_payout": to_money(result.final_payout),
        }

    def _build_calculations(self, plan: PayPlan, inputs: DealInputs, result: PayoutResult) -> dict:
        """Build calculations section with value and dynamic description for each field."""
        front_gross = to_money(inputs.front_end_gross_profit)
        back_gross = to_money(inputs.back_end_gross_profit)
        adjusted = to_money(result.adjusted_front_end_profit)
        pack = to_money(result.pack_deduction)
        percentage_amount = to_money(result.percentage_amount)
        unit_flat = to_money(result.unit_flat_amount)
        front = to_money(result.front_end_commission)
        back = to_money(result.back_end_commission)
        csi = to_money(result.csi_bonus)
        total = to_money(result.total_commission)
        guarantee = to_money(result.minimum_guarantee)
        final = to_money(result.final_payout)

        if result.used_higher_amount and front == unit_flat:
            front_desc = f"Unit flat ({_fmt(unit_flat)}) beat percentage ({_fmt(percentage_amount)}) and was paid"
        elif result.used_higher_amount:
            front_desc = f"Unit flat ({_fmt(unit_flat)}) higher but not paid; percentage amount ({_fmt(percentage_amount)}) paid"
        elif unit_flat > 0:
            front_desc = f"Percentage amount ({_fmt(percentage_amount)}) paid; unit flat was {_fmt(unit_flat)}"
        else:
            front_desc = f"Percentage amount paid: {_fmt(front)}"

        guarantee_label = "minimum monthly pay" if plan.plan_type == "simple" else "unit guarantee"

        return {
            "pack_deduction": {
                "value": pack,
                "description": f"Used vehicle pack deducted from front-end gross of {_fmt(front_gross)}" if pack else "No pack deduction for this deal"
            },
            "adjusted_front_end_profit": {
                "value": adjusted,
                "description": f"front_end_gross ({_fmt(front_gross)}) - pack ({_fmt(pack)}) = {_fmt(adjusted)}"
            },
            "percentage_amount": {
                "value": percentage_amount,
                "description": f"{_fmt(adjusted)} × front-end percentage = {_fmt(percentage_amount)}"
            },
            "unit_flat_amount": {
                "value": unit_flat,
                "description": f"Flat amount for {inputs.units_sold} units sold" if unit_flat else "No unit flat tier reached"
            },
            "front_end_commission": {
                "value": front,
                "description": front_desc
            },
            "back_end_commission": {
                "value": back,
                "description": f"{_pct(result.back_end_percentage)} × {_fmt(back_gross)} = {_fmt(back)}"
            },
            "csi_bonus": {
                "value": csi,
                "description": f"CSI benchmark bonus on back-end gross of {_fmt(back_gross)}" if csi else "CSI bonus not earned"
            },
            "total_commission": {
                "value": total,
                "description": f"front ({_fmt(front)}) + back ({_fmt(back)}) + csi ({_fmt(csi)}) = {_fmt(total)}"
            },
            "minimum_guarantee": {
                "value": guarantee,
                "description": f"Plan {guarantee_label} for {inputs.units_sold} units: {_fmt(guarantee)}"
            },
            "final_payout": {
                "value": final,
                "description": f"Guarantee of {_fmt(guarantee)} paid because commission ({_fmt(total)}) fell below it" if result.guarantee_applied else f"Commission of {_fmt(total)} paid; no guarantee top-up needed"
            }
        }
