from __future__ import annotations

import json
import os
import re
from datetime import date
from typing import Any, Dict

import ollama
import streamlit as st
from dotenv import load_dotenv

from agents.budget_agent import BudgetAgent
from agents.category_adjuster_agent import CategoryAdjusterAgent, allocation_key
from agents.drift_checker_agent import DriftCheckerAgent
from agents.savings_planner_agent import SavingsGoalStore, SavingsPlannerAgent
from models.budget import BudgetStyle
from models.savings import PRIORITIES
from utils.allocation_table import STYLE_SUMMARIES
from utils.errors import BudgetError
from utils.log_setup import configure_logging

load_dotenv()
configure_logging()

SYSTEM_PROMPT = """
You are a travel budget request parser. Given a user's message about a trip (in ANY language), respond with ONLY a JSON object using this exact shape:
{
  "destination": "<city or country in English; empty if unknown>",
  "total_budget": <number or null>,
  "currency": "<ISO 4217 code; USD if unsure>",
  "style": "budget" | "comfortable" | "luxury" | null,
  "duration": <integer days or null>,
  "travelers": <integer or null>,
  "start_date": "<YYYY-MM-DD>" or null,
  "end_date": "<YYYY-MM-DD>" or null
}
Rules:
- Map words like cheap/backpacking/thrifty to "budget", mid-range to "comfortable", premium/splurge to "luxury".
- You will be given today's date; if the user omits the year, pick the next valid occurrence on or after today.
- Respond with valid JSON only; no markdown or extra text.
- If any value is unknown, use null (or "" for destination).
"""

APP_STYLE = """
<style>
:root {
  --bg: #f6f8fb;
  --text: #0f172a;
  --muted: #475569;
}
.main .block-container {
  padding: 1.5rem 2rem 3rem;
  background: var(--bg);
}
.hero {
  background: linear-gradient(135deg, rgba(139,92,246,0.16), rgba(236,72,153,0.12));
  border: 1px solid rgba(139,92,246,0.12);
  padding: 1.25rem 1.5rem;
  border-radius: 14px;
  margin-bottom: 1rem;
}
.hero h1 { margin: 0; color: var(--text); }
.hero p { margin: 0.25rem 0 0; color: var(--muted); }
</style>
"""


@st.cache_resource
def get_agent() -> BudgetAgent:
    return BudgetAgent()


def parse_request(user_input: str) -> Dict[str, Any]:
    response = ollama.chat(
        model=os.getenv("OLLAMA_MODEL", "llama3"),
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT.strip()},
            {
                "role": "user",
                "content": f"Today is {date.today().isoformat()}. Parse this trip budget request: {user_input}",
            },
        ],
    )
    content = response.get("message", {}).get("content", "").strip()
    if not content:
        raise ValueError("Empty model response.")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        # Try to salvage a JSON object from the response
        match = re.search(r"\{.*\}", content, re.DOTALL)
        if not match:
            raise ValueError("Model did not return valid JSON.") from exc
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            raise ValueError("Model did not return valid JSON.") from exc

    # Drop unknowns so the form values are kept for them.
    return {k: v for k, v in data.items() if v not in (None, "", "null")}


def init_state() -> None:
    defaults = {
        "total_budget": 3000,
        "destination": "",
        "duration": 7,
        "travelers": 2,
        "style": BudgetStyle.COMFORTABLE.value,
        "currency": "USD",
        "overrides": {},
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)


st.set_page_config(page_title="Trip Budget Calculator", page_icon="💰")
st.markdown(APP_STYLE, unsafe_allow_html=True)
st.markdown(
    """
    <div class="hero">
      <h1>Trip Budget Calculator</h1>
      <p>Split your trip budget across flights, stays, food, activities, transport, and shopping.</p>
    </div>
    """,
    unsafe_allow_html=True,
)
init_state()

# Seed the form from query params (?budget=2500&duration=5&travelers=1&destination=Rome)
params = st.query_params
if params and not st.session_state.get("_params_loaded"):
    for src, dst in (("budget", "total_budget"), ("duration", "duration"), ("travelers", "travelers")):
        if params.get(src, "").isdigit():
            st.session_state[dst] = int(params[src])
    if params.get("destination"):
        st.session_state["destination"] = params["destination"]
    st.session_state["_params_loaded"] = True

with st.sidebar:
    st.header("Trip details")
    chat_text = st.text_input("Describe your trip (optional)", placeholder="5 days in Rome for two, around $2500, mid-range")
    if st.button("Fill from description") and chat_text:
        try:
            parsed = parse_request(chat_text)
            for src, dst in (
                ("total_budget", "total_budget"),
                ("destination", "destination"),
                ("duration", "duration"),
                ("travelers", "travelers"),
                ("style", "style"),
                ("currency", "currency"),
            ):
                if src in parsed:
                    st.session_state[dst] = parsed[src]
            if st.session_state["style"] not in [s.value for s in BudgetStyle]:
                st.session_state["style"] = BudgetStyle.parse(st.session_state["style"]).value
            st.session_state["overrides"] = {}
        except Exception as exc:
            st.error(f"Sorry, I couldn't read that request. ({exc})")

    st.text_input("Destination", key="destination")
    st.number_input("Total budget", min_value=1, step=100, key="total_budget")
    st.number_input("Duration (days)", min_value=1, step=1, key="duration")
    st.number_input("Travelers", min_value=1, step=1, key="travelers")
    st.selectbox("Budget style", [s.value for s in BudgetStyle], key="style")
    st.text_input("Display currency", key="currency", max_chars=3)

raw_request = {
    "total_budget": st.session_state["total_budget"],
    "destination": st.session_state["destination"],
    "duration": st.session_state["duration"],
    "travelers": st.session_state["travelers"],
    "style": st.session_state["style"],
}

calc_tab, savings_tab = st.tabs(["Calculator", "Savings"])

with calc_tab:
    try:
        agent = get_agent()
        display_currency = str(st.session_state["currency"] or "USD").upper()
        breakdown = agent.plan(raw_request, display_currency=display_currency)
    except BudgetError as exc:
        st.error(str(exc))
        st.stop()

    style = breakdown.request.style
    st.info(f"**{style.value.title()} travel style.** {STYLE_SUMMARIES[style]}")

    c1, c2, c3 = st.columns(3)
    c1.metric("Total budget", f"{breakdown.total_budget:,.0f} {breakdown.currency}")
    c2.metric("Per day", f"{breakdown.per_day:,} {breakdown.currency}")
    c3.metric("Per person", f"{breakdown.per_person:,} {breakdown.currency}")

    # Slider edits belong to one allocation; any change of style, total,
    # duration, travelers or currency starts again from the fresh table.
    key = allocation_key(breakdown.request, breakdown.currency)
    if st.session_state.get("overrides_key") != key:
        st.session_state["overrides"] = {}
        st.session_state["overrides_key"] = key
    slider_suffix = "_".join(str(part) for part in key)

    adjuster = CategoryAdjusterAgent()
    allocations = breakdown.allocations
    overrides: Dict[str, int] = st.session_state["overrides"]
    for a in list(allocations):
        if not a.adjustable:
            st.markdown(f"{a.icon} {a.name}: **{a.amount:,} {breakdown.currency}**")
            st.caption(a.description)
            continue
        value = st.slider(
            f"{a.icon} {a.name}",
            min_value=a.min,
            max_value=a.max,
            value=min(max(overrides.get(a.category.value, a.amount), a.min), a.max),
            help=a.description,
            key=f"slider_{a.category.value}_{slider_suffix}",
        )
        if value != a.amount:
            try:
                allocations = adjuster.run(allocations, a.category, value, breakdown.total_budget)
                overrides[a.category.value] = value
            except BudgetError as exc:
                st.warning(str(exc))
        elif a.category.value in overrides:
            del overrides[a.category.value]
        with st.expander("Tips"):
            for tip in a.tips:
                st.markdown(f"- {tip}")

    report = DriftCheckerAgent().run(allocations, breakdown.total_budget, breakdown.currency)
    st.markdown(f"**Allocated:** {report.allocated_total:,} {breakdown.currency}")
    if report.message:
        st.warning(report.message)
    else:
        st.success("Categories match the total budget.")

with savings_tab:
    planner = SavingsPlannerAgent()
    store = SavingsGoalStore()
    try:
        goals = store.load()
    except (OSError, ValueError) as exc:
        st.error(f"Couldn't read saved goals: {exc}")
        goals = []

    income = st.number_input("Monthly income", min_value=0, value=5000, step=100)
    expenses = st.number_input("Monthly expenses", min_value=0, value=3500, step=100)

    if st.button("Add trip goal for this budget"):
        try:
            request = get_agent().pref_agent.normalize(raw_request)
            goals = planner.add_goal(goals, planner.trip_goal(request))
            store.save(goals)
        except BudgetError as exc:
            st.error(str(exc))
    if st.button("Add goal"):
        goals = planner.add_goal(goals)
        store.save(goals)

    for goal in goals:
        with st.expander(f"{goal.name} ({goal.kind})", expanded=False):
            name = st.text_input("Name", value=goal.name, key=f"name_{goal.id}")
            target = st.number_input("Target", min_value=1.0, value=float(goal.target_amount), key=f"target_{goal.id}")
            saved = st.number_input("Saved", min_value=0.0, value=float(goal.current_amount), key=f"saved_{goal.id}")
            when = st.date_input("Target date", value=goal.target_date, key=f"date_{goal.id}")
            priority = st.selectbox(
                "Priority", PRIORITIES, index=PRIORITIES.index(goal.priority), key=f"prio_{goal.id}"
            )
            st.caption(f"Save {planner.monthly_savings_needed(goal):,} per month")
            col_save, col_delete = st.columns(2)
            if col_save.button("Save", key=f"save_{goal.id}"):
                goals = planner.update_goal(
                    goals,
                    goal.id,
                    name=name,
                    target_amount=target,
                    current_amount=saved,
                    target_date=when,
                    priority=priority,
                )
                store.save(goals)
                st.rerun()
            if col_delete.button("Delete", key=f"delete_{goal.id}"):
                goals = planner.delete_goal(goals, goal.id)
                store.save(goals)
                st.rerun()

    capacity = planner.savings_capacity(goals, income, expenses)
    s1, s2, s3 = st.columns(3)
    s1.metric("Available", f"{capacity.available:,.0f}")
    s2.metric("Needed", f"{capacity.needed:,}")
    s3.metric("Surplus", f"{capacity.surplus:,.0f}")
    if capacity.surplus < 0:
        st.warning("Savings goals exceed what you can put aside each month.")
