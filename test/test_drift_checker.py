import logging

import pytest

from agents.budget_allocator_agent import allocate
from agents.category_adjuster_agent import CategoryAdjusterAgent
from agents.drift_checker_agent import DRIFT_TOLERANCE, check_drift
from models.budget import Category
from utils.errors import InvalidInput


def test_exact_match_has_no_warning():
    report = check_drift(allocate(3000, "comfortable"), 3000)
    assert report.allocated_total == 3000
    assert report.drift == 0
    assert report.within_tolerance
    assert report.message is None


def test_rounding_drift_stays_within_tolerance():
    report = check_drift(allocate(1250, "budget"), 1250)
    assert report.allocated_total == 1252
    assert report.drift == 2
    assert report.within_tolerance


def test_manual_override_triggers_warning(caplog):
    allocations = allocate(3000, "comfortable")
    adjusted = CategoryAdjusterAgent().run(allocations, Category.FLIGHTS, 1350, 3000)
    with caplog.at_level(logging.WARNING):
        report = check_drift(adjusted, 3000)
    assert report.drift == 450
    assert not report.within_tolerance
    assert "Adjust categories to match total budget" in report.message
    assert "over" in report.message
    assert "differs from budget" in caplog.text


def test_threshold_is_inclusive():
    allocations = allocate(3000, "comfortable")
    adjusted = CategoryAdjusterAgent().run(allocations, Category.FOOD, 600 - DRIFT_TOLERANCE, 3000)
    assert check_drift(adjusted, 3000).within_tolerance
    adjusted = CategoryAdjusterAgent().run(allocations, Category.FOOD, 600 - DRIFT_TOLERANCE - 1, 3000)
    report = check_drift(adjusted, 3000)
    assert not report.within_tolerance
    assert "under" in report.message


def test_check_does_not_mutate_allocations():
    allocations = allocate(3000, "luxury")
    before = [a.amount for a in allocations]
    check_drift(allocations, 2000)
    assert [a.amount for a in allocations] == before


def test_to_dict_shape():
    report = check_drift(allocate(5000, "luxury"), 5000)
    assert report.to_dict() == {"allocatedTotal": 5000, "drift": 0, "withinTolerance": True}


def test_rejects_non_positive_total():
    with pytest.raises(InvalidInput):
        check_drift(allocate(3000, "comfortable"), 0)


def test_message_names_the_measured_currency():
    allocations = allocate(3000, "comfortable")
    adjusted = CategoryAdjusterAgent().run(allocations, Category.FLIGHTS, 1350, 3000)
    report = check_drift(adjusted, 3000, currency="EUR")
    assert report.currency == "EUR"
    assert report.message.endswith("(over by 450 EUR)")
    assert "$" not in report.message
