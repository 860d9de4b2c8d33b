from __future__ import annotations

from dataclasses import replace
from typing import List, Tuple, Union

from models.budget import BudgetStyle, Category, CategoryAllocation
from models.preferences import BudgetRequest
from utils.errors import InvalidInput
from utils.money import is_positive_number, round_half_up


class CategoryAdjusterAgent:
    """
    Applies a manual (slider) change to one category.
    Returns a new list; the amount must stay inside the row's [min, max]
    and the row's percentage is recomputed against the total budget.
    """

    def run(
        self,
        allocations: List[CategoryAllocation],
        category: Union[Category, str],
        new_amount: float,
        total_budget: float,
    ) -> List[CategoryAllocation]:
        if not is_positive_number(total_budget):
            raise InvalidInput(f"Total budget must be a positive number, got {total_budget!r}")
        try:
            target = Category(category)
        except ValueError:
            raise InvalidInput(f"Unknown category {category!r}") from None
        if isinstance(new_amount, bool) or not isinstance(new_amount, (int, float)) or new_amount < 0:
            raise InvalidInput(f"Category amount must be a non-negative number, got {new_amount!r}")

        updated: List[CategoryAllocation] = []
        found = False
        for a in allocations:
            if a.category is not target:
                updated.append(replace(a, tips=list(a.tips)))
                continue
            found = True
            if not (a.min <= new_amount <= a.max):
                raise InvalidInput(
                    f"{a.name or a.category.value} must be between {a.min} and {a.max}, got {new_amount}"
                )
            updated.append(
                replace(
                    a,
                    amount=round_half_up(new_amount),
                    percentage=new_amount / total_budget * 100,
                    tips=list(a.tips),
                )
            )

        if not found:
            raise InvalidInput(f"No allocation for category {target.value!r}")
        return updated


def allocation_key(request: BudgetRequest, currency: str) -> Tuple[str, float, int, int, str]:
    """
    The inputs an allocation is rebuilt from. Manual changes only apply to
    the allocation they were made on, so they are dropped when this changes.
    """
    return (
        BudgetStyle.parse(request.style).value,
        float(request.total_budget),
        int(request.trip_duration),
        int(request.travelers),
        str(currency).upper(),
    )
