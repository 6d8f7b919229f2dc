"""
Deal Log Auto-Totals

Rolls a salesperson's logged deals up into month-level DealInputs.
"""

from dataclasses import dataclass
from decimal import Decimal

from .calculators.money import quantize_money
from .models import ZERO, DealInputs, to_decimal

UNWOUND = "unwound"

PRODUCT_PROFIT_FIELDS = (
    "vsc_profit",
    "ppm_profit",
    "tire_wheel_profit",
    "paint_fabric_profit",
    "other_profit",
)


@dataclass
class DealLogEntry:
    """One logged deal."""

    status: str = "pending"  # 'pending', 'funded' or 'unwound'
    front_end_gross: Decimal = ZERO
    vsc_profit: Decimal = ZERO
    ppm_profit: Decimal = ZERO
    tire_wheel_profit: Decimal = ZERO
    paint_fabric_profit: Decimal = ZERO
    other_profit: Decimal = ZERO

    @property
    def fi_profit(self) -> Decimal:
        """Total F&I product profit. Negative product entries are ignored."""
        total = ZERO
        for name in PRODUCT_PROFIT_FIELDS:
            value = getattr(self, name)
            if value > 0:
                total += value
        return total

    @property
    def is_unwound(self) -> bool:
        return self.status.lower() == UNWOUND

    @classmethod
    def from_dict(cls, data: dict) -> "DealLogEntry":
        return cls(
            status=str(data.get("status") or "pending"),
            front_end_gross=to_decimal(data.get("front_end_gross")),
            **{name: to_decimal(data.get(name)) for name in PRODUCT_PROFIT_FIELDS},
        )


@dataclass
class DealLogTotals:
    """Month-to-date totals over the deals that still count."""

    units_sold: int = 0
    front_end_gross: Decimal = ZERO
    back_end_gross: Decimal = ZERO

    @property
    def pvr(self) -> Decimal:
        """Per-vehicle-retail back-end gross."""
        if self.units_sold <= 0:
            return ZERO
        return quantize_money(self.back_end_gross / self.units_sold)

    @classmethod
    def from_entries(cls, entries: list[DealLogEntry]) -> "DealLogTotals":
        """Sum the log, skipping unwound deals."""
        counted = [entry for entry in entries if not entry.is_unwound]
        return cls(
            units_sold=len(counted),
            front_end_gross=sum((entry.front_end_gross for entry in counted), ZERO),
            back_end_gross=sum((entry.fi_profit for entry in counted), ZERO),
        )

    def to_deal_inputs(self, csi_above_benchmark: bool = False) -> DealInputs:
        """
        Month-level inputs for the evaluator.

        Packs are charged per vehicle, so aggregated inputs are reported as
        new-vehicle figures and never trigger a pack deduction.
        """
        return DealInputs(
            units_sold=self.units_sold,
            front_end_gross_profit=self.front_end_gross,
            back_end_gross_profit=self.back_end_gross,
            vehicle_type="new",
            vehicle_value=ZERO,
            csi_above_benchmark=csi_above_benchmark,
        )
