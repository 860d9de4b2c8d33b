from __future__ import annotations

import logging
from typing import Iterable

from models.budget import CategoryAllocation, DriftReport
from utils.errors import InvalidInput
from utils.money import is_positive_number

logger = logging.getLogger(__name__)

# Fixed advisory threshold in currency units; not user-configurable.
DRIFT_TOLERANCE = 50


class DriftCheckerAgent:
    """
    Sums the category amounts and compares them with the total budget.
    Advisory only: the allocations are never touched and nothing is raised
    for a large drift.
    """

    def run(
        self,
        allocations: Iterable[CategoryAllocation],
        total_budget: float,
        currency: str = "USD",
    ) -> DriftReport:
        if not is_positive_number(total_budget):
            raise InvalidInput(f"Total budget must be a positive number, got {total_budget!r}")

        allocated_total = int(sum(a.amount for a in allocations))
        drift = allocated_total - total_budget
        report = DriftReport(
            allocated_total=allocated_total,
            drift=drift,
            within_tolerance=abs(drift) <= DRIFT_TOLERANCE,
            currency=currency,
        )
        if not report.within_tolerance:
            logger.warning(
                "Allocated total %s differs from budget %s by %s", allocated_total, total_budget, drift
            )
        return report


def check_drift(
    allocations: Iterable[CategoryAllocation], total_budget: float, currency: str = "USD"
) -> DriftReport:
    return DriftCheckerAgent().run(allocations, total_budget, currency)
