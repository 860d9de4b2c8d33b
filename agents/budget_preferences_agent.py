from __future__ import annotations
from dataclasses import replace
from datetime import timedelta
from typing import Any, Dict

from models.budget import BudgetStyle
from models.preferences import BudgetRequest
from utils.date_parser import nights_between, parse_date
from utils.errors import InvalidInput
from utils.money import is_positive_number

DEFAULT_DURATION = 7
DEFAULT_TRAVELERS = 2

class BudgetPreferencesAgent:
    """
    Validates/normalizes calculator input into a BudgetRequest.
    Works with either a raw dict (form fields, query params, parsed chat) OR
    an already built BudgetRequest.

    Duration and travelers are forgiving, like the form fields they come from.
    Total budget and style are not: a bad value raises InvalidInput instead
    of being replaced with a default.
    """

    def normalize(self, raw: Any) -> BudgetRequest:
        if isinstance(raw, BudgetRequest):
            request = replace(raw)
        elif isinstance(raw, dict):
            request = self._from_dict(raw)
        else:
            raise TypeError("BudgetPreferencesAgent.normalize expects BudgetRequest or dict")

        if not is_positive_number(request.total_budget):
            raise InvalidInput(f"Total budget must be a positive number, got {request.total_budget!r}")
        request.style = BudgetStyle.parse(request.style)

        request.trip_duration = self._at_least_one(request.trip_duration, 1)
        request.travelers = self._at_least_one(request.travelers, 1)
        request.destination = str(request.destination or "").strip()

        currency = str(request.currency or "USD").strip().upper()
        if len(currency) != 3 or not currency.isalpha():
            raise InvalidInput(f"Currency must be a 3-letter code, got {request.currency!r}")
        request.currency = currency

        if request.start_date and (request.end_date is None or request.end_date <= request.start_date):
            request.end_date = request.start_date + timedelta(days=request.trip_duration)

        return request

    def _from_dict(self, d: Dict[str, Any]) -> BudgetRequest:
        start_date = parse_date(d.get("start_date") or d.get("startDate"))
        end_date = parse_date(d.get("end_date") or d.get("endDate"))

        duration: Any = None
        for key in ("trip_duration", "tripDuration", "duration", "num_days"):
            if d.get(key) not in (None, ""):
                duration = d.get(key)
                break
        if duration is None:
            duration = nights_between(start_date, end_date) or DEFAULT_DURATION

        travelers = d.get("travelers")
        if travelers in (None, ""):
            travelers = DEFAULT_TRAVELERS

        style = d.get("style", d.get("budget_style", d.get("budgetStyle")))
        if style is None:
            style = BudgetStyle.COMFORTABLE

        return BudgetRequest(
            total_budget=self._to_number(d.get("total_budget", d.get("budget"))),
            style=BudgetStyle.parse(style),
            trip_duration=duration,
            travelers=travelers,
            destination=str(d.get("destination") or ""),
            currency=str(d.get("currency") or "USD"),
            start_date=start_date,
            end_date=end_date,
        )

    def _to_number(self, value: Any) -> float:
        if value is None or isinstance(value, bool):
            raise InvalidInput("Total budget is required")
        try:
            return float(str(value).replace(",", "").replace("$", "").strip())
        except ValueError:
            raise InvalidInput(f"Total budget must be a number, got {value!r}") from None

    def _at_least_one(self, value: Any, fallback: int) -> int:
        try:
            n = int(value)
        except (TypeError, ValueError):
            return fallback
        return n if n >= 1 else fallback
