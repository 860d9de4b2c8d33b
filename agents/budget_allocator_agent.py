from __future__ import annotations

import logging
from typing import List, Union

from models.budget import BudgetStyle, Category, CategoryAllocation
from utils.allocation_table import (
    CATEGORY_BOUNDS,
    CATEGORY_INFO,
    category_description,
    category_tips,
    percentages_for,
)
from utils.errors import InvalidInput
from utils.money import is_positive_number, scale_half_up

logger = logging.getLogger(__name__)


class BudgetAllocatorAgent:
    """
    Splits a total trip budget across the six spending categories.
    Every call rebuilds the whole table from (total, style, duration, travelers);
    nothing is cached between calls.
    """

    def run(
        self,
        total_budget: float,
        style: Union[BudgetStyle, str],
        trip_duration: int = 1,
        travelers: int = 1,
    ) -> List[CategoryAllocation]:
        if not is_positive_number(total_budget):
            raise InvalidInput(f"Total budget must be a positive number, got {total_budget!r}")
        budget_style = BudgetStyle.parse(style)
        percentages = percentages_for(budget_style)

        allocations: List[CategoryAllocation] = []
        for category in Category:
            pct = percentages[category]
            amount = scale_half_up(total_budget, pct, 100)
            low, high = self._bounds(category, amount)
            info = CATEGORY_INFO[category]
            allocations.append(
                CategoryAllocation(
                    category=category,
                    percentage=float(pct),
                    amount=amount,
                    min=low,
                    max=high,
                    name=str(info["name"]),
                    icon=str(info["icon"]),
                    description=category_description(category, trip_duration, travelers),
                    tips=category_tips(category),
                )
            )

        logger.debug(
            "Allocated %s (%s): %s",
            total_budget,
            budget_style.value,
            ", ".join(f"{a.category.value}={a.amount}" for a in allocations),
        )
        return allocations

    def _bounds(self, category: Category, amount: int):
        min_mult, max_mult = CATEGORY_BOUNDS[category]
        # Shopping has a fixed floor of zero.
        low = 0 if category is Category.SHOPPING else scale_half_up(amount, min_mult)
        high = scale_half_up(amount, max_mult)
        return low, high


def allocate(total_budget: float, style: Union[BudgetStyle, str]) -> List[CategoryAllocation]:
    return BudgetAllocatorAgent().run(total_budget, style)
