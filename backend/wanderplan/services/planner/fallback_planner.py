"""Fallback planner — deterministic, budget-compliant itinerary when the model output is unusable."""

import logging
from datetime import timedelta

from wanderplan.data.currency import format_inr
from wanderplan.schemas.plan import Activity, BudgetItem, DayPlan, TripDetails, TripPlan
from wanderplan.services.planner.budget_parser import BudgetRange
from wanderplan.services.planner.budget_reconciler import target_cost
from wanderplan.services.planner.config import PlannerConfig, planner_config

logger = logging.getLogger(__name__)

_CATEGORY_NOTES = {
    "accommodation": "Budget accommodation for {nights} nights in {destination}",
    "transportation": "Travel from {origin} plus local transport",
    "food": "Local restaurants and street food for {days} days",
    "activities": "Entry fees and guided experiences",
    "miscellaneous": "Emergency fund and small purchases",
}


class FallbackPlanner:
    """Builds a generic plan from fixed allocation shares of the target budget."""

    def __init__(self, config: PlannerConfig = planner_config):
        self.config = config

    def allocate(self, target: int) -> dict[str, int]:
        """Split ``target`` by the allocation table, flooring each share."""
        return {
            category: target * pct // 100
            for category, pct in self.config.allocation.as_dict().items()
        }

    def build(self, trip: TripDetails, budget: BudgetRange) -> TripPlan:
        days = trip.days
        nights = max(days - 1, 0)
        origin = trip.current_location or "your city"
        destination = trip.destination

        allocation = self.allocate(target_cost(budget, self.config))
        total = sum(allocation.values())

        daily_food = allocation.get("food", 0) // days
        daily_activities = allocation.get("activities", 0) // days
        daily_local_transport = allocation.get("transportation", 0) // 2 // days

        itinerary = [
            DayPlan(
                day=i + 1,
                date=(trip.start_date + timedelta(days=i)).isoformat(),
                title=f"Day {i + 1} - Budget Exploration of {destination}",
                activities=[
                    Activity(
                        time="Morning",
                        activity=f"Visit the main attractions in {destination}",
                        location=f"Central {destination}",
                        estimated_cost=daily_activities * 3 // 10,
                        category="Sightseeing",
                    ),
                    Activity(
                        time="Afternoon",
                        activity="Local lunch at a budget eatery",
                        location=f"Local restaurant in {destination}",
                        estimated_cost=daily_food,
                        category="Food",
                    ),
                    Activity(
                        time="Evening",
                        activity="Explore local markets and neighbourhoods",
                        location=f"Old town, {destination}",
                        estimated_cost=daily_activities * 2 // 10,
                        category="Culture",
                    ),
                ],
            )
            for i in range(days)
        ]

        breakdown = {
            category: BudgetItem(
                estimated=amount,
                notes=_CATEGORY_NOTES.get(category, category.title()).format(
                    nights=nights, days=days, origin=origin, destination=destination,
                ),
            )
            for category, amount in allocation.items()
        }

        logger.warning(f"Using fallback itinerary for {destination}: {days} days, total {format_inr(total)}")

        return TripPlan(
            summary=(
                f"Budget-optimized {days}-day trip to {destination} within your "
                f"{format_inr(budget.min)}-{format_inr(budget.max)} budget (Total: {format_inr(total)})"
            ),
            daily_itinerary=itinerary,
            budget_breakdown=breakdown,
            transportation={
                "gettingThere": f"Train or bus from {origin} to {destination}",
                "localTransport": {
                    "modes": ["Public transport", "Shared autos", "Walking"],
                    "dailyCost": daily_local_transport,
                },
            },
            accommodation=f"Budget guesthouses or 3-star hotels in central {destination}",
            food_recommendations=[
                {
                    "name": f"Local {destination} eateries",
                    "type": "Budget dining",
                    "description": f"Affordable regional {destination} cuisine",
                    "estimatedCost": daily_food,
                }
            ],
            travel_tips=[
                f"Book {destination} accommodation in advance for better rates",
                "Use public transport instead of taxis to save money",
                "Carry some cash for small vendors and markets",
            ],
            hidden_gems=[
                {
                    "name": "Free and low-cost local attractions",
                    "description": "Parks, temples and markets with little or no entry fee",
                    "location": f"Around {destination}",
                }
            ],
            total_estimated_cost=total,
        )
