# models/preferences.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Optional

from models.budget import BudgetStyle

@dataclass
class BudgetRequest:
    total_budget: float
    style: BudgetStyle = BudgetStyle.COMFORTABLE
    trip_duration: int = 7
    travelers: int = 2
    destination: str = ""
    currency: str = "USD"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
