from __future__ import annotations

import logging
from typing import Any, Optional

from agents.budget_allocator_agent import BudgetAllocatorAgent
from agents.budget_preferences_agent import BudgetPreferencesAgent
from agents.drift_checker_agent import DriftCheckerAgent
from agents.final_output_agent import FinalOutputAgent
from clients.exchange_rate_client import ExchangeRateClient
from models.budget import BudgetBreakdown
from models.savings import SavingsCapacity

logger = logging.getLogger(__name__)


class BudgetAgent:
    """
    Orchestrator: normalize -> allocate -> drift check -> (convert) -> render.
    """

    def __init__(self, exchange: Optional[ExchangeRateClient] = None):
        self.pref_agent = BudgetPreferencesAgent()
        self.allocator = BudgetAllocatorAgent()
        self.drift_checker = DriftCheckerAgent()
        self.output_agent = FinalOutputAgent()
        self.exchange = exchange

    def plan(self, raw: Any, display_currency: Optional[str] = None) -> BudgetBreakdown:
        request = self.pref_agent.normalize(raw)

        allocations = self.allocator.run(
            request.total_budget,
            request.style,
            trip_duration=request.trip_duration,
            travelers=request.travelers,
        )
        # Drift is always measured in the request currency, before conversion.
        drift = self.drift_checker.run(allocations, request.total_budget, request.currency)

        currency = request.currency
        total_budget = float(request.total_budget)
        target = (display_currency or "").strip().upper()
        if target and target != currency:
            if self.exchange is None:
                self.exchange = ExchangeRateClient()
            rate = self.exchange.rate(currency, target)
            allocations = self.exchange.convert_allocations(allocations, currency, target, rate=rate)
            total_budget = total_budget * rate
            logger.info("Converted budget from %s to %s at %s", currency, target, rate)
            currency = target

        return BudgetBreakdown(
            request=request,
            allocations=allocations,
            drift=drift,
            total_budget=total_budget,
            currency=currency,
        )

    def run(
        self,
        raw: Any,
        display_currency: Optional[str] = None,
        savings: Optional[SavingsCapacity] = None,
    ) -> str:
        breakdown = self.plan(raw, display_currency=display_currency)
        return self.output_agent.render(breakdown, savings=savings)
