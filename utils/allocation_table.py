# utils/allocation_table.py
from __future__ import annotations
import math
from typing import Dict, List, Tuple

from models.budget import BudgetStyle, Category
from utils.errors import AllocationTableError

# Share of the total budget (in percent) per style. Each row must sum to 100.
ALLOCATION_TABLE: Dict[BudgetStyle, Dict[Category, int]] = {
    BudgetStyle.BUDGET: {
        Category.FLIGHTS: 35,
        Category.ACCOMMODATION: 20,
        Category.FOOD: 15,
        Category.ACTIVITIES: 10,
        Category.TRANSPORT: 15,
        Category.SHOPPING: 5,
    },
    BudgetStyle.COMFORTABLE: {
        Category.FLIGHTS: 30,
        Category.ACCOMMODATION: 25,
        Category.FOOD: 20,
        Category.ACTIVITIES: 15,
        Category.TRANSPORT: 8,
        Category.SHOPPING: 2,
    },
    BudgetStyle.LUXURY: {
        Category.FLIGHTS: 25,
        Category.ACCOMMODATION: 35,
        Category.FOOD: 25,
        Category.ACTIVITIES: 10,
        Category.TRANSPORT: 3,
        Category.SHOPPING: 2,
    },
}

# (min multiplier, max multiplier) applied to the category amount.
# Shopping has no floor.
CATEGORY_BOUNDS: Dict[Category, Tuple[float, float]] = {
    Category.FLIGHTS: (0.7, 1.5),
    Category.ACCOMMODATION: (0.6, 2.0),
    Category.FOOD: (0.5, 2.0),
    Category.ACTIVITIES: (0.3, 3.0),
    Category.TRANSPORT: (0.4, 2.0),
    Category.SHOPPING: (0.0, 5.0),
}

CATEGORY_INFO: Dict[Category, Dict[str, object]] = {
    Category.FLIGHTS: {
        "name": "Flights",
        "icon": "✈️",
        "description": "Round-trip flights for all travelers",
        "tips": [
            "Book 6-8 weeks in advance for best prices",
            "Use flexible dates to save up to 30%",
            "Consider budget airlines for short-haul flights",
            "Clear cookies before booking",
        ],
    },
    Category.ACCOMMODATION: {
        "name": "Accommodation",
        "icon": "🏨",
        "description": "{nights} nights for {travelers} travelers",
        "tips": [
            "Book early for better rates and selection",
            "Consider alternative accommodations like Airbnb",
            "Look for hotels with included breakfast",
            "Check for free cancellation policies",
        ],
    },
    Category.FOOD: {
        "name": "Food & Dining",
        "icon": "🍽️",
        "description": "Meals, drinks, and local cuisine",
        "tips": [
            "Mix restaurant meals with local markets",
            "Try lunch specials instead of dinner",
            "Research local food costs beforehand",
            "Consider cooking some meals if possible",
        ],
    },
    Category.ACTIVITIES: {
        "name": "Activities & Tours",
        "icon": "🎯",
        "description": "Attractions, tours, and experiences",
        "tips": [
            "Book tours online for better prices",
            "Look for city passes for multiple attractions",
            "Mix paid attractions with free activities",
            "Check for group discounts",
        ],
    },
    Category.TRANSPORT: {
        "name": "Local Transport",
        "icon": "🚗",
        "description": "Local transportation and transfers",
        "tips": [
            "Use public transport when possible",
            "Consider multi-day transport passes",
            "Walk short distances to save money",
            "Book airport transfers in advance",
        ],
    },
    Category.SHOPPING: {
        "name": "Shopping & Souvenirs",
        "icon": "🛍️",
        "description": "Souvenirs, gifts, and personal shopping",
        "tips": [
            "Set a strict shopping budget",
            "Buy souvenirs at local markets",
            "Avoid airport shopping for better prices",
            "Focus on unique, local items",
        ],
    },
}

STYLE_SUMMARIES: Dict[BudgetStyle, str] = {
    BudgetStyle.BUDGET: "Focus on saving money with hostels, local food, and free activities.",
    BudgetStyle.COMFORTABLE: "Balance between comfort and cost with mid-range hotels and experiences.",
    BudgetStyle.LUXURY: "Premium experiences with high-end accommodations and fine dining.",
}

PERCENT_TOLERANCE = 1e-9


def validate_table(table: Dict[BudgetStyle, Dict[Category, float]]) -> None:
    """
    Reject a table that is missing a style or category, or whose rows
    don't add up to 100.
    """
    missing_styles = [s.value for s in BudgetStyle if s not in table]
    if missing_styles:
        raise AllocationTableError(f"Allocation table is missing styles: {', '.join(missing_styles)}")

    for style in BudgetStyle:
        row = table[style]
        missing = [c.value for c in Category if c not in row]
        if missing:
            raise AllocationTableError(
                f"Allocation table row '{style.value}' is missing categories: {', '.join(missing)}"
            )
        total = sum(float(row[c]) for c in Category)
        if not math.isclose(total, 100.0, rel_tol=0.0, abs_tol=PERCENT_TOLERANCE):
            raise AllocationTableError(
                f"Allocation table row '{style.value}' sums to {total:g}, expected 100"
            )


def percentages_for(style: BudgetStyle) -> Dict[Category, int]:
    return ALLOCATION_TABLE[BudgetStyle.parse(style)]


def category_description(category: Category, trip_duration: int, travelers: int) -> str:
    template = str(CATEGORY_INFO[category]["description"])
    return template.format(nights=trip_duration, travelers=travelers)


def category_tips(category: Category) -> List[str]:
    return list(CATEGORY_INFO[category]["tips"])


validate_table(ALLOCATION_TABLE)
