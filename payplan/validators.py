"""
Input Validation for the Pay-Plan Commission Engine

Validates plan documents before they are parsed and checks role assignment.
Raises ValueError with clear messages for any constraint violations.

Numeric fields are deliberately not validated here: missing or malformed
figures read as zero during parsing.
"""

from .models import (
    FINANCE_DIRECTOR,
    FINANCE_MANAGER,
    GENERAL_MANAGER,
    PLAN_TYPES,
    ROLES,
    SALES_MANAGER,
    SALESPERSON,
    PayPlan,
)

BASE_FIELDS = ["name", "description", "role", "plan_type"]

ROLE_FIELDS = {
    (SALESPERSON, "simple"): [
        "front_end_gross_percentage", "back_end_gross_percentage", "minimum_monthly_pay",
    ],
    (SALESPERSON, "advanced"): [
        "front_end_commission", "back_end_commission", "used_vehicle_pack", "csi_bonus",
        "minimum_guarantee", "draw_structure", "vehicle_allowance", "pto_structure",
        "minimum_monthly_pay",
    ],
    ("finance", "simple"): [
        "commission_structure", "monthly_draw", "provider_bonuses", "vehicle_allowance",
        "pto_structure",
    ],
    ("finance", "advanced"): [
        "base_commission", "draw_structure", "cit_bonuses", "penetration_bonuses",
        "provider_bonuses", "vehicle_allowance", "pto_structure", "chargeback_protection",
        "minimum_monthly_pay",
    ],
    (SALES_MANAGER, None): [
        "base_salary", "team_bonuses", "personal_sales", "vehicle_allowance", "pto_structure",
    ],
    (GENERAL_MANAGER, None): [
        "base_salary", "dealership_bonuses", "vehicle_allowance", "pto_structure",
    ],
}


def role_fields(role: str, plan_type: str) -> list[str]:
    """Fields a plan editor should offer for this role and plan type."""
    if role in (FINANCE_MANAGER, FINANCE_DIRECTOR):
        key = ("finance", plan_type)
    elif role in (SALES_MANAGER, GENERAL_MANAGER):
        key = (role, None)
    else:
        key = (role, plan_type)
    return BASE_FIELDS + ROLE_FIELDS.get(key, [])


class PayPlanValidator:
    """Validates pay plan documents according to business rules."""

    def validate_document(self, data: dict) -> None:
        """
        Run all document checks. Raises ValueError if any check fails.
        """
        if not isinstance(data, dict):
            raise ValueError(f"pay_plan must be an object, got: {type(data).__name__}")

        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Pay plan name is required")

        role = data.get("role")
        if not role:
            raise ValueError("Role selection is required")
        if role not in ROLES:
            raise ValueError(f"Invalid role: {role}. Must be one of {', '.join(ROLES)}")

        plan_type = data.get("plan_type")
        if not plan_type:
            raise ValueError("Plan type selection is required")
        if plan_type not in PLAN_TYPES:
            raise ValueError(f"Invalid plan_type: {plan_type}. Must be 'simple' or 'advanced'")

    def validate_assignment(self, plan: PayPlan, employee_role: str) -> None:
        """A plan may only be assigned to an employee holding the plan's role."""
        if plan.role != employee_role:
            raise ValueError(
                f"Pay plan '{plan.name}' is for role '{plan.role}' "
                f"and cannot be assigned to a '{employee_role}'"
            )
