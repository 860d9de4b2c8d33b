from datetime import date

import pytest

from agents.budget_preferences_agent import BudgetPreferencesAgent
from models.budget import BudgetStyle
from models.preferences import BudgetRequest
from utils.errors import InvalidInput


def test_all_fields_provided():
    agent = BudgetPreferencesAgent()
    request = agent.normalize({
        "destination": "Lisbon",
        "total_budget": 2500,
        "style": "luxury",
        "duration": 5,
        "travelers": 3,
        "currency": "eur",
        "start_date": "2026-05-04",
    })
    assert request.destination == "Lisbon"
    assert request.total_budget == 2500
    assert request.style is BudgetStyle.LUXURY
    assert request.trip_duration == 5
    assert request.travelers == 3
    assert request.currency == "EUR"
    assert request.start_date == date(2026, 5, 4)
    assert request.end_date == date(2026, 5, 9)


def test_only_budget_uses_calculator_defaults():
    request = BudgetPreferencesAgent().normalize({"budget": "3,000"})
    assert request.total_budget == 3000
    assert request.style is BudgetStyle.COMFORTABLE
    assert request.trip_duration == 7
    assert request.travelers == 2
    assert request.currency == "USD"


def test_duration_from_dates():
    request = BudgetPreferencesAgent().normalize({
        "total_budget": 1400,
        "start_date": "2026-01-05",
        "end_date": "12/01/2026",
    })
    assert request.trip_duration == 7


def test_end_before_start_is_recomputed():
    request = BudgetPreferencesAgent().normalize({
        "total_budget": 1400,
        "duration": 4,
        "start_date": "2026-01-05",
        "end_date": "2026-01-01",
    })
    assert request.end_date == date(2026, 1, 9)


@pytest.mark.parametrize("value", ["not_a_number", 0, -2])
def test_bad_counts_fall_back_to_one(value):
    request = BudgetPreferencesAgent().normalize({"total_budget": 800, "duration": value, "travelers": value})
    assert request.trip_duration == 1
    assert request.travelers == 1


@pytest.mark.parametrize("budget", [None, 0, -100, "lots", "nan"])
def test_bad_total_is_rejected(budget):
    data = {"style": "budget"}
    if budget is not None:
        data["total_budget"] = budget
    with pytest.raises(InvalidInput):
        BudgetPreferencesAgent().normalize(data)


def test_unknown_style_is_rejected():
    with pytest.raises(InvalidInput):
        BudgetPreferencesAgent().normalize({"total_budget": 3000, "style": "premium"})


def test_bad_currency_is_rejected():
    with pytest.raises(InvalidInput):
        BudgetPreferencesAgent().normalize({"total_budget": 3000, "currency": "dollars"})


def test_request_object_is_copied():
    original = BudgetRequest(total_budget=1000, style="budget", travelers=0)
    request = BudgetPreferencesAgent().normalize(original)
    assert request.style is BudgetStyle.BUDGET
    assert request.travelers == 1
    assert original.travelers == 0


def test_rejects_other_types():
    with pytest.raises(TypeError):
        BudgetPreferencesAgent().normalize(["3000"])
