# models/budget.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from utils.errors import InvalidInput
from utils.money import round_half_up, safe_div

if TYPE_CHECKING:
    from models.preferences import BudgetRequest


class BudgetStyle(str, Enum):
    BUDGET = "budget"
    COMFORTABLE = "comfortable"
    LUXURY = "luxury"

    @classmethod
    def parse(cls, value) -> "BudgetStyle":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidInput(f"Unknown budget style {value!r}; expected one of: {allowed}") from None


class Category(str, Enum):
    # Declaration order is the display order.
    FLIGHTS = "flights"
    ACCOMMODATION = "accommodation"
    FOOD = "food"
    ACTIVITIES = "activities"
    TRANSPORT = "transport"
    SHOPPING = "shopping"


@dataclass
class CategoryAllocation:
    category: Category
    percentage: float
    amount: int
    min: int
    max: int
    name: str = ""
    icon: str = ""
    description: str = ""
    tips: List[str] = field(default_factory=list)

    @property
    def adjustable(self) -> bool:
        return self.min < self.max

    def to_dict(self) -> Dict[str, object]:
        return {
            "category": self.category.value,
            "percentage": self.percentage,
            "amount": self.amount,
            "min": self.min,
            "max": self.max,
        }


@dataclass
class DriftReport:
    allocated_total: int
    drift: float
    within_tolerance: bool
    currency: str = "USD"

    @property
    def message(self) -> Optional[str]:
        if self.within_tolerance:
            return None
        direction = "over" if self.drift > 0 else "under"
        return f"Adjust categories to match total budget ({direction} by {abs(self.drift):,.0f} {self.currency})"

    def to_dict(self) -> Dict[str, object]:
        return {
            "allocatedTotal": self.allocated_total,
            "drift": self.drift,
            "withinTolerance": self.within_tolerance,
        }


@dataclass
class BudgetBreakdown:
    request: "BudgetRequest"
    allocations: List[CategoryAllocation]
    drift: DriftReport
    total_budget: float
    currency: str = "USD"

    @property
    def total(self) -> int:
        return int(sum(a.amount for a in self.allocations))

    @property
    def per_day(self) -> int:
        return round_half_up(safe_div(self.total_budget, self.request.trip_duration))

    @property
    def per_person(self) -> int:
        return round_half_up(safe_div(self.total_budget, self.request.travelers))

    def remaining(self, budget: Optional[float] = None) -> float:
        if budget is None:
            budget = self.total_budget
        return float(budget - self.total)

    def by_category(self) -> Dict[Category, CategoryAllocation]:
        return {a.category: a for a in self.allocations}
