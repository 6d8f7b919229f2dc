"""
Tests for the Commission Evaluator

Run with: python -m pytest tests/ -v
"""

import json

import pytest
from decimal import Decimal
from payplan import CommissionEvaluator, DealInputs, UnsupportedPlanKind, evaluate, plan_from_dict
from payplan.evaluator import evaluate_from_json


@pytest.fixture
def simple_plan():
    return plan_from_dict({
        "name": "Standard Sales",
        "role": "salesperson",
        "plan_type": "simple",
        "front_end_gross_percentage": 25,
        "back_end_gross_percentage": 10,
        "minimum_monthly_pay": 2000,
    })


@pytest.fixture
def advanced_plan():
    return plan_from_dict({
        "name": "Advanced Sales",
        "role": "salesperson",
        "plan_type": "advanced",
        "front_end_commission": {
            "gross_percentage": 15,
            "take_higher": True,
            "unit_flat_structure": {
                "enabled": True,
                "tiers": [
                    {"min_units": 20, "flat_amount": 200, "retroactive": True},
                    {"min_units": 12, "flat_amount": 150, "retroactive": True},
                ],
            },
        },
        "back_end_commission": {
            "enabled": True,
            "base_percentage": 5,
            "tiers": [{"min_units": 12, "percentage": 8}],
        },
        "used_vehicle_pack": {
            "enabled": True,
            "high_value_pack": {"threshold": 10000, "pack_amount": 500},
            "low_value_pack": {"min_threshold": 2000, "max_threshold": 10000, "pack_amount": 300},
        },
        "csi_bonus": {"enabled": True, "benchmark_bonus": {"enabled": True, "bonus_percentage": 2}},
        "minimum_guarantee": {
            "enabled": True,
            "tiers": [
                {"min_units": 8, "guarantee_amount": 2500},
                {"min_units": 12, "guarantee_amount": 3500},
            ],
        },
    })


class TestSimplePlan:
    """Test the simple salesperson path."""

    def test_minimum_monthly_pay_applies(self, simple_plan):
        inputs = DealInputs(front_end_gross_profit=Decimal("1000"), back_end_gross_profit=Decimal("500"))
        result = evaluate(simple_plan, inputs)

        assert result.front_end_commission == Decimal("250")
        assert result.back_end_commission == Decimal("50")
        assert result.total_commission == Decimal("300")
        assert result.minimum_guarantee == Decimal("2000")
        assert result.final_payout == Decimal("2000")

    def test_commission_above_minimum(self, simple_plan):
        inputs = DealInputs(front_end_gross_profit=Decimal("20000"), back_end_gross_profit=Decimal("8000"))
        result = evaluate(simple_plan, inputs)

        assert result.total_commission == Decimal("5800")
        assert result.final_payout == Decimal("5800")

    def test_simple_reports_zero_advanced_figures(self, simple_plan):
        inputs = DealInputs(
            front_end_gross_profit=Decimal("1000"),
            vehicle_type="used",
            vehicle_value=Decimal("15000"),
            csi_above_benchmark=True,
        )
        result = evaluate(simple_plan, inputs)

        assert result.pack_deduction == Decimal("0")
        assert result.csi_bonus == Decimal("0")
        assert result.unit_flat_amount == Decimal("0")
        assert result.percentage_amount == result.front_end_commission
        assert result.used_higher_amount is False

    def test_missing_minimum_pay_floors_at_zero(self):
        plan = plan_from_dict({
            "name": "No Minimum", "role": "salesperson", "plan_type": "simple",
            "front_end_gross_percentage": 25,
        })
        result = evaluate(plan, DealInputs(front_end_gross_profit=Decimal("-400")))

        assert result.total_commission == Decimal("-100")
        assert result.final_payout == Decimal("0")


class TestAdvancedPlan:
    """Test the advanced salesperson pipeline end to end."""

    def test_used_vehicle_pack_reduces_front_end(self, advanced_plan):
        inputs = DealInputs(
            units_sold=1,
            front_end_gross_profit=Decimal("2000"),
            vehicle_type="used",
            vehicle_value=Decimal("12000"),
        )
        result = evaluate(advanced_plan, inputs)

        assert result.pack_deduction == Decimal("500")
        assert result.adjusted_front_end_profit == Decimal("1500")
        assert result.percentage_amount == Decimal("225")

    def test_full_breakdown(self, advanced_plan):
        inputs = DealInputs(
            units_sold=12,
            front_end_gross_profit=Decimal("10000"),
            back_end_gross_profit=Decimal("15000"),
            vehicle_type="new",
            csi_above_benchmark=True,
        )
        result = evaluate(advanced_plan, inputs)

        # Front: 15% × 10000 = 1500 vs 12 × 150 = 1800 → flat
        assert result.percentage_amount == Decimal("1500")
        assert result.unit_flat_amount == Decimal("1800")
        assert result.front_end_commission == Decimal("1800")
        assert result.used_higher_amount is True
        # Back: 8% × 15000 = 1200; CSI 2% × 15000 = 300
        assert result.back_end_percentage == Decimal("8")
        assert result.back_end_commission == Decimal("1200")
        assert result.csi_bonus == Decimal("300")
        assert result.total_commission == Decimal("3300")
        assert result.minimum_guarantee == Decimal("3500")
        assert result.final_payout == Decimal("3500")

    def test_out_of_order_guarantee_tiers(self, advanced_plan):
        """Guarantee tiers are stored ascending here; 15 units must get the 12-unit tier."""
        result = evaluate(advanced_plan, DealInputs(units_sold=15))

        assert result.minimum_guarantee == Decimal("3500")

    def test_negative_units_fall_back_to_defaults(self, advanced_plan):
        inputs = DealInputs(units_sold=-1, back_end_gross_profit=Decimal("1000"))
        result = evaluate(advanced_plan, inputs)

        assert result.unit_flat_amount == Decimal("0")
        assert result.back_end_percentage == Decimal("5")
        assert result.minimum_guarantee == Decimal("0")

    def test_evaluation_does_not_mutate_plan(self, advanced_plan):
        before = [t.min_units for t in advanced_plan.minimum_guarantee.tiers]

        evaluate(advanced_plan, DealInputs(units_sold=10))
        evaluate(advanced_plan, DealInputs(units_sold=10))

        assert [t.min_units for t in advanced_plan.minimum_guarantee.tiers] == before


class TestUnsupportedPlans:
    """Non-salesperson plans have no per-deal calculation."""

    @pytest.mark.parametrize("role,plan_type", [
        ("finance_manager", "simple"),
        ("finance_director", "advanced"),
        ("sales_manager", "simple"),
        ("general_manager", "simple"),
    ])
    def test_raises_unsupported_plan_kind(self, role, plan_type):
        plan = plan_from_dict({"name": "Salaried", "role": role, "plan_type": plan_type})

        with pytest.raises(UnsupportedPlanKind) as exc_info:
            evaluate(plan, DealInputs(units_sold=10))

        assert exc_info.value.role == role
        assert exc_info.value.plan_type == plan_type

    def test_unsupported_is_a_value_error(self):
        assert issubclass(UnsupportedPlanKind, ValueError)


class TestProperties:
    """Behavioural guarantees of the evaluator."""

    def test_determinism(self, advanced_plan):
        inputs = DealInputs(
            units_sold=13, front_end_gross_profit=Decimal("7321.55"),
            back_end_gross_profit=Decimal("4410.10"), vehicle_type="used",
            vehicle_value=Decimal("8000"), csi_above_benchmark=True,
        )

        assert evaluate(advanced_plan, inputs) == evaluate(advanced_plan, inputs)

    def test_simple_front_end_is_monotonic(self, simple_plan):
        previous = None
        for gross in range(-1000, 20001, 1500):
            result = evaluate(simple_plan, DealInputs(front_end_gross_profit=Decimal(gross)))
            if previous is not None:
                assert result.front_end_commission >= previous
            previous = result.front_end_commission

    def test_advanced_percentage_amount_is_monotonic(self, advanced_plan):
        previous = None
        for gross in range(-1000, 20001, 1500):
            inputs = DealInputs(units_sold=5, front_end_gross_profit=Decimal(gross))
            result = evaluate(advanced_plan, inputs)
            if previous is not None:
                assert result.percentage_amount >= previous
            previous = result.percentage_amount

    @pytest.mark.parametrize("units", [0, 7, 8, 11, 12, 25])
    def test_guarantee_floor(self, advanced_plan, units):
        result = evaluate(advanced_plan, DealInputs(units_sold=units))

        assert result.final_payout >= result.minimum_guarantee
        assert result.final_payout == max(result.total_commission, result.minimum_guarantee)


class TestEvaluateFromDict:
    """Test the raw-document entry point."""

    @pytest.fixture
    def evaluator(self):
        return CommissionEvaluator()

    def test_single_deal(self, evaluator):
        output = evaluator.evaluate_from_dict({
            "pay_plan": {
                "name": "Standard Sales", "role": "salesperson", "plan_type": "simple",
                "front_end_gross_percentage": 25, "back_end_gross_percentage": 10,
                "minimum_monthly_pay": 2000,
            },
            "deal": {"front_end_gross_profit": "1000", "back_end_gross_profit": 500},
        })

        assert output["plan_summary"]["name"] == "Standard Sales"
        assert output["payout"]["total_commission"] == 300.0
        assert output["payout"]["final_payout"] == 2000.0
        assert output["calculations"]["final_payout"]["value"] == 2000.0
        assert "Guarantee" in output["calculations"]["final_payout"]["description"]

    def test_deal_log(self, evaluator):
        output = evaluator.evaluate_from_dict({
            "pay_plan": {
                "name": "Standard Sales", "role": "salesperson", "plan_type": "simple",
                "front_end_gross_percentage": 25, "back_end_gross_percentage": 10,
            },
            "deal_log": [
                {"status": "funded", "front_end_gross": 4000, "vsc_profit": 1000},
                {"status": "unwound", "front_end_gross": 9000, "vsc_profit": 5000},
            ],
            "csi_above_benchmark": True,
        })

        assert output["deal_inputs"]["units_sold"] == 1
        assert output["deal_inputs"]["csi_above_benchmark"] is True
        assert output["payout"]["front_end_commission"] == 1000.0
        assert output["payout"]["back_end_commission"] == 100.0
        assert output["deal_log_totals"] == {
            "units_sold": 1, "front_end_gross": 4000.0, "back_end_gross": 1000.0, "pvr": 1000.0,
        }

    def test_single_deal_has_no_log_totals(self, evaluator):
        output = evaluator.evaluate_from_dict({
            "pay_plan": {"name": "Standard Sales", "role": "salesperson", "plan_type": "simple"},
            "deal": {"units_sold": 1},
        })

        assert "deal_log_totals" not in output

    def test_deal_log_csi_flag_from_form_string(self, evaluator):
        output = evaluator.evaluate_from_dict({
            "pay_plan": {"name": "Standard Sales", "role": "salesperson", "plan_type": "simple"},
            "deal_log": [],
            "csi_above_benchmark": "false",
        })

        assert output["deal_inputs"]["csi_above_benchmark"] is False
        assert output["deal_log_totals"]["pvr"] == 0.0

    def test_invalid_plan_document(self, evaluator):
        with pytest.raises(ValueError, match="Role selection is required"):
            evaluator.evaluate_from_dict({"pay_plan": {"name": "No Role"}, "deal": {}})

    def test_non_object_request(self, evaluator):
        with pytest.raises(ValueError, match="JSON object"):
            evaluator.evaluate_from_dict([1, 2, 3])


class TestEvaluateFromJson:
    """Test the JSON string entry point."""

    def test_success(self):
        output = json.loads(evaluate_from_json(json.dumps({
            "pay_plan": {"name": "Standard", "role": "salesperson", "plan_type": "simple",
                         "front_end_gross_percentage": 20},
            "deal": {"front_end_gross_profit": 5000},
        })))

        assert output["payout"]["front_end_commission"] == 1000.0

    def test_unsupported_plan(self):
        output = json.loads(evaluate_from_json(json.dumps({
            "pay_plan": {"name": "GM", "role": "general_manager", "plan_type": "simple"},
            "deal": {},
        })))

        assert output["status"] == "unsupported_plan_kind"

    def test_validation_error(self):
        output = json.loads(evaluate_from_json(json.dumps({"pay_plan": {"role": "salesperson"}})))

        assert output["status"] == "validation_failed"
