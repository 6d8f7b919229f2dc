"""
Volume Tier Lookup

Unit-flat, back-end and guarantee tiers are all keyed by min_units and share
one selection rule: the qualifying tier with the highest min_units wins.
"""

from operator import attrgetter
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def select_tier(tiers: Sequence[T], units_sold: int) -> Optional[T]:
    """
    Return the tier with the largest min_units <= units_sold, or None.

    Stored tiers may be in any order; a sorted copy is scanned so the
    plan's own list is never reordered. Tiers sharing a min_units keep
    their stored order.
    """
    for tier in sorted(tiers, key=attrgetter("min_units"), reverse=True):
        if units_sold >= tier.min_units:
            return tier
    return None
