"""
Calculators Package

Provides all calculation components for pay-plan evaluation.
"""

from .back_end import BackEndCalculator
from .front_end import FrontEndCalculator
from .guarantee import GuaranteeCalculator
from .pack import PackDeductionCalculator
from .payout import PayoutCalculator
from .simple import SimplePlanCalculator
from .tiers import select_tier

__all__ = [
    "PackDeductionCalculator",
    "FrontEndCalculator",
    "BackEndCalculator",
    "GuaranteeCalculator",
    "PayoutCalculator",
    "SimplePlanCalculator",
    "select_tier",
]
