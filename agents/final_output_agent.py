from __future__ import annotations
from typing import List, Optional

from models.budget import BudgetBreakdown
from models.savings import SavingsCapacity
from utils.allocation_table import STYLE_SUMMARIES

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}

class FinalOutputAgent:
    def render(
        self,
        breakdown: BudgetBreakdown,
        savings: Optional[SavingsCapacity] = None,
        max_tips: int = 5,
    ) -> str:
        lines: List[str] = []
        req = breakdown.request
        sym = CURRENCY_SYMBOLS.get(breakdown.currency, f"{breakdown.currency} ")

        lines.append("✅ Trip Budget")
        lines.append("")
        lines.append("### Trip")
        if req.destination:
            lines.append(f"- **Destination:** {req.destination}")
        if req.start_date and req.end_date:
            lines.append(f"- **Dates:** {req.start_date} → {req.end_date}")
        lines.append(f"- **Style:** {req.style.value.title()} ({req.trip_duration} days, {req.travelers} travelers)")
        lines.append(f"- **Budget:** {sym}{breakdown.total_budget:,.0f}")
        lines.append(f"- **Per day:** {sym}{breakdown.per_day:,}")
        lines.append(f"- **Per person:** {sym}{breakdown.per_person:,}")
        lines.append("")
        lines.append(f"_{STYLE_SUMMARIES[req.style]}_")
        lines.append("")

        lines.append("### Breakdown")
        for a in breakdown.allocations:
            label = f"{a.icon} {a.name}".strip() or a.category.value
            lines.append(
                f"- {label}: {sym}{a.amount:,} ({a.percentage:.1f}%) | range {sym}{a.min:,}–{sym}{a.max:,}"
            )
            if a.description:
                lines.append(f"    {a.description}")
        lines.append(f"- **Allocated:** {sym}{breakdown.total:,}")

        if breakdown.drift.message:
            lines.append("")
            lines.append(f"⚠️ {breakdown.drift.message}")

        tips = [t for a in breakdown.allocations for t in a.tips[:1]]
        if tips:
            lines.append("")
            lines.append("Budget tips")
            for tip in tips[:max_tips]:
                lines.append(f"- {tip}")

        if savings is not None:
            lines.append("")
            lines.append("### Savings")
            lines.append(f"- Available monthly: {sym}{savings.available:,.0f}")
            lines.append(f"- Needed monthly: {sym}{savings.needed:,}")
            lines.append(f"- **Surplus:** {sym}{savings.surplus:,.0f}")
            if savings.surplus < 0:
                lines.append("")
                lines.append("⚠️ Savings goals exceed what you can put aside. Push back a target date or lower a target.")

        return "\n".join(lines)
