"""Prompt builder — renders the generation and chat-modification prompts."""

import json

from wanderplan.data.currency import format_inr
from wanderplan.schemas.plan import ChatTurn, TripDetails
from wanderplan.services.planner.budget_parser import BudgetRange
from wanderplan.services.planner.config import PlannerConfig, planner_config
from wanderplan.services.planner.prompts import load_prompt

_GENERATE_TEMPLATE = load_prompt("generate_plan.md")
_MODIFY_TEMPLATE = load_prompt("modify_plan.md")

_CATEGORY_NOTES = {
    "accommodation": "Specific stays for {nights} nights with pricing",
    "transportation": "Getting there and local transport costs",
    "food": "Food costs for {days} days and {people} people",
    "activities": "Entry fees and paid activities",
    "miscellaneous": "Emergency fund and small purchases",
}


def _breakdown_shape(categories: list[str], days: int, nights: int, people: int) -> str:
    lines = []
    for i, category in enumerate(categories):
        note = _CATEGORY_NOTES.get(category, f"{category.title()} costs")
        note = note.format(days=days, nights=nights, people=people)
        comma = "," if i < len(categories) - 1 else ""
        lines.append(f'    "{category}": {{ "estimated": 0, "notes": "{note}" }}{comma}')
    return "\n".join(lines)


def build_generation_prompt(
    trip: TripDetails,
    budget: BudgetRange,
    config: PlannerConfig = planner_config,
) -> str:
    """Render the itinerary request with the budget window as a hard ceiling."""
    days = trip.days
    nights = max(days - 1, 0)
    people = trip.number_of_people
    prices = config.price_guide
    shares = config.allocation.as_dict()

    allocation = "\n".join(
        f"- {category}: about {pct}% (~{format_inr(budget.max * pct // 100)} at most)"
        for category, pct in shares.items()
    )

    return _GENERATE_TEMPLATE.format(
        days=days,
        nights=nights,
        people=people,
        destination=trip.destination,
        origin=trip.current_location or "not specified",
        start_date=trip.start_date.isoformat(),
        end_date=trip.end_date.isoformat(),
        interests=trip.interests or "General sightseeing",
        min_budget=format_inr(budget.min),
        max_budget=format_inr(budget.max),
        hotel_min=format_inr(prices.hotel_per_night.min),
        hotel_max=format_inr(prices.hotel_per_night.max),
        intercity_min=format_inr(prices.intercity_per_person.min),
        intercity_max=format_inr(prices.intercity_per_person.max),
        local_min=format_inr(prices.local_transport_daily.min),
        local_max=format_inr(prices.local_transport_daily.max),
        meal_min=format_inr(prices.meal.min),
        meal_max=format_inr(prices.meal.max),
        activity_min=format_inr(prices.activity.min),
        activity_max=format_inr(prices.activity.max),
        allocation=allocation,
        breakdown_shape=_breakdown_shape(list(shares), days, nights, people),
    )


def build_modification_prompt(
    current_plan: dict,
    user_message: str,
    history: list[ChatTurn],
    config: PlannerConfig = planner_config,
) -> str:
    """Render the chat prompt: current plan as JSON plus the last few turns."""
    recent = history[-config.history_turns:] if config.history_turns > 0 else []
    conversation = "\n".join(f"{turn.role}: {turn.content}" for turn in recent)

    return _MODIFY_TEMPLATE.format(
        current_plan=json.dumps(current_plan, indent=2, ensure_ascii=False),
        conversation=conversation or "(none)",
        user_message=user_message,
    )
