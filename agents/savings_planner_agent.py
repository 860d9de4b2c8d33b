from __future__ import annotations

import json
import logging
import os
import tempfile
import uuid
from dataclasses import replace
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from models.preferences import BudgetRequest
from models.savings import GOAL_KINDS, PRIORITIES, SavingsCapacity, SavingsGoal
from utils.date_parser import parse_date
from utils.errors import InvalidInput
from utils.money import round_half_up

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30


class SavingsPlannerAgent:
    """
    Monthly savings math for trip and general goals.
    All list operations return new lists.
    """

    def monthly_savings_needed(self, goal: SavingsGoal, today: Optional[date] = None) -> int:
        today = today or date.today()
        months_left = max(1.0, (goal.target_date - today).days / DAYS_PER_MONTH)
        return round_half_up(goal.remaining / months_left)

    def savings_capacity(
        self,
        goals: Iterable[SavingsGoal],
        monthly_income: float,
        monthly_expenses: float,
        today: Optional[date] = None,
    ) -> SavingsCapacity:
        available = float(monthly_income) - float(monthly_expenses)
        needed = sum(self.monthly_savings_needed(g, today) for g in goals)
        return SavingsCapacity(available=available, needed=needed, surplus=available - needed)

    def trip_goal(self, request: BudgetRequest, saved: float = 0.0, target_date: Optional[date] = None) -> SavingsGoal:
        when = target_date or request.start_date or (date.today() + timedelta(days=365))
        return SavingsGoal(
            id=uuid.uuid4().hex,
            name=request.destination or "Dream Trip",
            target_amount=float(request.total_budget),
            current_amount=float(saved),
            target_date=when,
            priority="high",
            kind="trip",
        )

    def add_goal(self, goals: List[SavingsGoal], goal: Optional[SavingsGoal] = None) -> List[SavingsGoal]:
        if goal is None:
            goal = SavingsGoal(
                id=uuid.uuid4().hex,
                name="New Goal",
                target_amount=1000.0,
                current_amount=0.0,
                target_date=date.today() + timedelta(days=365),
            )
        self._validate(goal)
        return [*goals, goal]

    def update_goal(self, goals: List[SavingsGoal], goal_id: str, **changes: Any) -> List[SavingsGoal]:
        if goal_id not in {g.id for g in goals}:
            raise KeyError(goal_id)
        updated = []
        for g in goals:
            if g.id == goal_id:
                g = replace(g, **changes)
                self._validate(g)
            updated.append(g)
        return updated

    def delete_goal(self, goals: List[SavingsGoal], goal_id: str) -> List[SavingsGoal]:
        if goal_id not in {g.id for g in goals}:
            raise KeyError(goal_id)
        return [g for g in goals if g.id != goal_id]

    def _validate(self, goal: SavingsGoal) -> None:
        if goal.priority not in PRIORITIES:
            raise InvalidInput(f"Unknown priority {goal.priority!r}")
        if goal.kind not in GOAL_KINDS:
            raise InvalidInput(f"Unknown goal type {goal.kind!r}")
        if goal.target_amount <= 0:
            raise InvalidInput("Savings target must be positive")
        if goal.current_amount < 0:
            raise InvalidInput("Saved amount can't be negative")


class SavingsGoalStore:
    """JSON file holding the user's savings goals."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or os.getenv("SAVINGS_GOALS_PATH") or "savings_goals.json"

    def load(self) -> List[SavingsGoal]:
        if not os.path.exists(self.path):
            return []
        with open(self.path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
        return [self._from_dict(item) for item in raw]

    def save(self, goals: Iterable[SavingsGoal]) -> None:
        payload = [g.to_dict() for g in goals]
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
        logger.info("Saved %d savings goals to %s", len(payload), self.path)

    def _from_dict(self, d: Dict[str, Any]) -> SavingsGoal:
        target_date = parse_date(d.get("target_date"))
        if target_date is None:
            raise InvalidInput(f"Savings goal {d.get('id')!r} has no valid target_date")
        return SavingsGoal(
            id=str(d["id"]),
            name=str(d.get("name") or ""),
            target_amount=float(d.get("target_amount") or 0.0),
            current_amount=float(d.get("current_amount") or 0.0),
            target_date=target_date,
            priority=str(d.get("priority") or "medium"),
            kind=str(d.get("kind") or "general"),
        )
