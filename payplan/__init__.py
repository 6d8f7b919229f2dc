"""
DEALERSHIP PAY-PLAN COMMISSION ENGINE
Version 1.0
"""

from .evaluator import CommissionEvaluator, UnsupportedPlanKind, evaluate
from .models import DealInputs, PayoutResult, PayPlan, plan_from_dict

__all__ = [
    'CommissionEvaluator',
    'UnsupportedPlanKind',
    'evaluate',
    'DealInputs',
    'PayoutResult',
    'PayPlan',
    'plan_from_dict',
]
