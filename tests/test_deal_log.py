"""
Unit Tests for Deal Log Auto-Totals
"""

from decimal import Decimal
from payplan.deal_log import DealLogEntry, DealLogTotals


def _entries():
    return [
        DealLogEntry.from_dict({
            "status": "funded", "front_end_gross": 1500,
            "vsc_profit": 800, "ppm_profit": 300,
        }),
        DealLogEntry.from_dict({
            "status": "pending", "front_end_gross": "2,000",
            "tire_wheel_profit": 250, "other_profit": None,
        }),
        DealLogEntry.from_dict({
            "status": "Unwound", "front_end_gross": 5000, "vsc_profit": 1200,
        }),
    ]


class TestDealLogEntry:
    """Test per-deal F&I totals."""

    def test_fi_profit_sums_products(self):
        entry = DealLogEntry.from_dict({
            "vsc_profit": 800, "ppm_profit": 300, "tire_wheel_profit": 100,
            "paint_fabric_profit": 50, "other_profit": 25,
        })

        assert entry.fi_profit == Decimal("1275")

    def test_negative_product_profit_ignored(self):
        entry = DealLogEntry.from_dict({"vsc_profit": 800, "ppm_profit": -300})

        assert entry.fi_profit == Decimal("800")

    def test_missing_products_read_as_zero(self):
        assert DealLogEntry.from_dict({}).fi_profit == Decimal("0")

    def test_unwound_status_case_insensitive(self):
        assert DealLogEntry(status="UNWOUND").is_unwound is True
        assert DealLogEntry(status="funded").is_unwound is False


class TestDealLogTotals:
    """Test month-to-date roll-up."""

    def test_unwound_deals_excluded(self):
        totals = DealLogTotals.from_entries(_entries())

        assert totals.units_sold == 2
        assert totals.front_end_gross == Decimal("3500")
        assert totals.back_end_gross == Decimal("1350")

    def test_pvr(self):
        totals = DealLogTotals.from_entries(_entries())

        # 1350 / 2
        assert totals.pvr == Decimal("675.00")

    def test_empty_log(self):
        totals = DealLogTotals.from_entries([])

        assert totals.units_sold == 0
        assert totals.front_end_gross == Decimal("0")
        assert totals.pvr == Decimal("0")

    def test_to_deal_inputs(self):
        inputs = DealLogTotals.from_entries(_entries()).to_deal_inputs(csi_above_benchmark=True)

        assert inputs.units_sold == 2
        assert inputs.front_end_gross_profit == Decimal("3500")
        assert inputs.back_end_gross_profit == Decimal("1350")
        assert inputs.vehicle_type == "new"
        assert inputs.csi_above_benchmark is True
