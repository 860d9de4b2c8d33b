# models/savings.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict

PRIORITIES = ("high", "medium", "low")
GOAL_KINDS = ("trip", "general")

@dataclass
class SavingsGoal:
    id: str
    name: str
    target_amount: float
    current_amount: float
    target_date: date
    priority: str = "medium"
    kind: str = "general"

    @property
    def remaining(self) -> float:
        return float(self.target_amount - self.current_amount)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "target_amount": self.target_amount,
            "current_amount": self.current_amount,
            "target_date": self.target_date.isoformat(),
            "priority": self.priority,
            "kind": self.kind,
        }

@dataclass
class SavingsCapacity:
    available: float
    needed: int
    surplus: float
