"""
Commission Evaluator - Main Orchestrator

Coordinates pay-plan evaluation through discrete, testable steps.
"""

from typing import Any, Dict

from .calculators import (
    BackEndCalculator,
    FrontEndCalculator,
    GuaranteeCalculator,
    PackDeductionCalculator,
    PayoutCalculator,
    SimplePlanCalculator,
)
from .deal_log import DealLogEntry, DealLogTotals
from .models import (
    AdvancedSalespersonPlan,
    DealInputs,
    EvaluationContext,
    PayoutResult,
    PayPlan,
    SimpleSalespersonPlan,
    plan_from_dict,
    to_flag,
)
from .output import OutputBuilder
from .validators import PayPlanValidator


class UnsupportedPlanKind(ValueError):
    """The plan's role/plan_type has no per-deal calculation."""

    def __init__(self, role: str, plan_type: str):
        self.role = role
        self.plan_type = plan_type
        super().__init__(
            f"No per-deal calculation for role={role!r}, plan_type={plan_type!r}; "
            f"only salesperson plans can be evaluated"
        )


class CommissionEvaluator:
    """
    Main orchestrator for pay-plan evaluation.

    Simple salesperson plans are a single step. Advanced salesperson plans
    run the pipeline:
    1. Pack Deduction
    2. Front-End Commission (percentage vs. unit flat)
    3. Back-End Commission and CSI Bonus
    4. Minimum Guarantee
    5. Final Payout

    Calculators hold no state, so one instance can serve concurrent callers.
    """

    def __init__(self):
        self.validator = PayPlanValidator()
        self.simple_calculator = SimplePlanCalculator()
        self.pack_calculator = PackDeductionCalculator()
        self.front_end_calculator = FrontEndCalculator()
        self.back_end_calculator = BackEndCalculator()
        self.guarantee_calculator = GuaranteeCalculator()
        self.payout_calculator = PayoutCalculator()
        self.output_builder = OutputBuilder()

    def evaluate(self, plan: PayPlan, inputs: DealInputs) -> PayoutResult:
        """
        Evaluate a plan against one set of deal inputs.

        Args:
            plan: A parsed plan variant
            inputs: Deal figures for the period

        Returns:
            PayoutResult with the full breakdown

        Raises:
            UnsupportedPlanKind: the plan is not a salesperson plan
        """
        ctx = EvaluationContext(plan=plan, inputs=inputs)

        if isinstance(plan, SimpleSalespersonPlan):
            return self.simple_calculator.calculate(ctx)

        if isinstance(plan, AdvancedSalespersonPlan):
            return self._evaluate_advanced(ctx)

        raise UnsupportedPlanKind(plan.role, plan.plan_type)

    def evaluate_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Evaluate from a raw request document.

        Accepts either a single "deal" or a "deal_log" of entries that are
        rolled up into month totals. Convenience method for API usage.
        """
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")

        plan = self.parse_plan(data.get("pay_plan"))
        totals = self._build_totals(data) if "deal_log" in data else None
        if totals is not None:
            inputs = totals.to_deal_inputs(to_flag(data.get("csi_above_benchmark", False)))
        else:
            inputs = DealInputs.from_dict(data.get("deal") or {})

        result = self.evaluate(plan, inputs)
        output = self.output_builder.build(plan, inputs, result)
        if totals is not None:
            output["deal_log_totals"] = self.output_builder.build_deal_log_totals(totals)
        return output

    def parse_plan(self, data: Any) -> PayPlan:
        """Validate a plan document and build its variant."""
        self.validator.validate_document(data)
        return plan_from_dict(data)

    def _evaluate_advanced(self, ctx: EvaluationContext) -> PayoutResult:
        # Step 1: Pack deduction (used vehicles only)
        ctx.pack_deduction = self.pack_calculator.calculate(ctx)

        # Step 2: Front-end commission
        ctx.front_end = self.front_end_calculator.calculate(ctx)

        # Step 3: Back-end commission and CSI bonus
        ctx.back_end = self.back_end_calculator.calculate(ctx)

        # Step 4: Minimum guarantee
        ctx.minimum_guarantee = self.guarantee_calculator.calculate(ctx)

        # Step 5: Final payout
        return self.payout_calculator.calculate(ctx)

    def _build_totals(self, data: Dict[str, Any]) -> DealLogTotals:
        entries = [DealLogEntry.from_dict(entry) for entry in data.get("deal_log") or []]
        return DealLogTotals.from_entries(entries)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_default_evaluator = CommissionEvaluator()


def evaluate(plan: PayPlan, inputs: DealInputs) -> PayoutResult:
    """Evaluate a plan with the shared evaluator."""
    return _default_evaluator.evaluate(plan, inputs)


def evaluate_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Evaluate from a Python dict and return a Python dict.
    """
    return _default_evaluator.evaluate_from_dict(input_data)


def evaluate_from_json(json_input: str) -> str:
    """
    Evaluate from a JSON string input and return a JSON string output.
    """
    import json

    try:
        input_data = json.loads(json_input)
        result = _default_evaluator.evaluate_from_dict(input_data)
        return json.dumps(result, indent=2)

    except UnsupportedPlanKind as e:
        error_response = {"error": str(e), "status": "unsupported_plan_kind"}
        return json.dumps(error_response, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
