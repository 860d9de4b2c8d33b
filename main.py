from __future__ import annotations
from datetime import date

from dotenv import load_dotenv

from agents.budget_agent import BudgetAgent
from models.budget import BudgetStyle
from models.preferences import BudgetRequest
from utils.log_setup import configure_logging

if __name__ == "__main__":
    load_dotenv()
    configure_logging()

    request = BudgetRequest(
        total_budget=3000,
        style=BudgetStyle.COMFORTABLE,
        trip_duration=7,
        travelers=2,
        destination="Lisbon",
        start_date=date(2026, 5, 4),
    )

    agent = BudgetAgent()
    print(agent.run(request))
