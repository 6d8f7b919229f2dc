"""
Unit Tests for Pack Deduction Calculator

Tests verify high/low value banding for used vehicles.
"""

import pytest
from decimal import Decimal
from payplan.calculators.pack import PackDeductionCalculator
from payplan.models import AdvancedSalespersonPlan, DealInputs, EvaluationContext


def _make_context(vehicle_value, vehicle_type="used", enabled=True) -> EvaluationContext:
    plan = AdvancedSalespersonPlan.from_dict({
        "name": "Pack Plan",
        "role": "salesperson",
        "plan_type": "advanced",
        "used_vehicle_pack": {
            "enabled": enabled,
            "high_value_pack": {"threshold": 10000, "pack_amount": 500},
            "low_value_pack": {"min_threshold": 2000, "max_threshold": 10000, "pack_amount": 300},
        },
    })
    inputs = DealInputs(
        units_sold=1,
        front_end_gross_profit=Decimal("2000"),
        vehicle_type=vehicle_type,
        vehicle_value=Decimal(str(vehicle_value)),
    )
    return EvaluationContext(plan=plan, inputs=inputs)


class TestPackBands:
    """Test which pack applies to a used vehicle."""

    @pytest.fixture
    def calculator(self):
        return PackDeductionCalculator()

    def test_high_value_vehicle(self, calculator):
        assert calculator.calculate(_make_context(12000)) == Decimal("500")

    def test_exactly_at_high_threshold_uses_high_pack(self, calculator):
        """The high band is inclusive; the low band is exclusive at the top."""
        assert calculator.calculate(_make_context(10000)) == Decimal("500")

    def test_low_value_vehicle(self, calculator):
        assert calculator.calculate(_make_context(5000)) == Decimal("300")

    def test_at_low_min_threshold(self, calculator):
        assert calculator.calculate(_make_context(2000)) == Decimal("300")

    def test_below_low_band_no_pack(self, calculator):
        assert calculator.calculate(_make_context(1999.99)) == Decimal("0")


class TestPackNotApplicable:
    """Test cases where no pack is deducted."""

    @pytest.fixture
    def calculator(self):
        return PackDeductionCalculator()

    def test_new_vehicle_never_packed(self, calculator):
        assert calculator.calculate(_make_context(12000, vehicle_type="new")) == Decimal("0")

    def test_disabled_pack(self, calculator):
        assert calculator.calculate(_make_context(12000, enabled=False)) == Decimal("0")

    def test_missing_pack_configuration(self, calculator):
        """A plan without pack rules defaults to disabled."""
        plan = AdvancedSalespersonPlan.from_dict({"name": "Bare", "role": "salesperson", "plan_type": "advanced"})
        ctx = EvaluationContext(plan=plan, inputs=DealInputs(vehicle_type="used", vehicle_value=Decimal("50000")))

        assert calculator.calculate(ctx) == Decimal("0")
