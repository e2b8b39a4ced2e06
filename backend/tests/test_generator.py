import pytest

from wanderplan.services.planner.config import planner_config
from wanderplan.services.planner.errors import GeminiOverloadedError, PlannerConfigError
from wanderplan.services.planner.generator import TripPlanGenerator

ADJUSTED = " (Adjusted to fit budget range)"

LUXURY_OVERSPEND = {
    "accommodation": 400_000,
    "transportation": 250_000,
    "food": 200_000,
    "activities": 100_000,
    "miscellaneous": 50_000,
}


async def test_overspending_luxury_plan_is_rescaled(stub_gemini, trip_factory, plan_factory, fenced):
    gemini = stub_gemini(fenced(plan_factory(LUXURY_OVERSPEND)))
    trip = trip_factory(destination="Goa", days=5, people=2, budget_range="luxury")

    outcome = await TripPlanGenerator(gemini).generate(trip)

    assert outcome.source == "adjusted"
    plan = outcome.plan
    assert 200_000 <= plan.total_estimated_cost <= 500_000
    assert plan.total_estimated_cost == plan.breakdown_total()
    assert all(item.notes.endswith(ADJUSTED) for item in plan.budget_breakdown.values())
    assert len(plan.daily_itinerary) == 5


async def test_in_budget_plan_passes_through(stub_gemini, trip_factory, plan_factory, fenced):
    data = plan_factory({"accommodation": 150_000, "food": 100_000})
    data["totalEstimatedCost"] = 999
    gemini = stub_gemini(fenced(data))

    outcome = await TripPlanGenerator(gemini).generate(trip_factory(budget_range="luxury"))

    assert outcome.source == "llm"
    assert outcome.plan.total_estimated_cost == 250_000
    assert outcome.plan.summary == "A relaxed beach holiday"


async def test_output_without_json_uses_fallback(stub_gemini, trip_factory):
    gemini = stub_gemini("I'm sorry, the itinerary service is unavailable right now.")
    trip = trip_factory(days=5, budget_range="luxury")

    outcome = await TripPlanGenerator(gemini).generate(trip)

    assert outcome.source == "fallback"
    assert outcome.reason == "no JSON object found"
    assert len(outcome.plan.daily_itinerary) == 5
    assert 0 < outcome.plan.total_estimated_cost <= 500_000


async def test_zero_cost_breakdown_uses_fallback(stub_gemini, trip_factory, plan_factory, fenced):
    gemini = stub_gemini(fenced(plan_factory({"accommodation": 0, "food": 0})))

    outcome = await TripPlanGenerator(gemini).generate(trip_factory(days=3, budget_range="budget"))

    assert outcome.source == "fallback"
    assert len(outcome.plan.daily_itinerary) == 3
    assert outcome.plan.total_estimated_cost <= 75_000


async def test_missing_itinerary_uses_fallback(stub_gemini, trip_factory, plan_factory, fenced):
    data = plan_factory(LUXURY_OVERSPEND)
    data["dailyItinerary"] = []
    outcome = await TripPlanGenerator(stub_gemini(fenced(data))).generate(trip_factory())
    assert outcome.source == "fallback"


async def test_prompt_carries_trip_and_budget(stub_gemini, trip_factory):
    gemini = stub_gemini("no json")
    trip = trip_factory(destination="Goa", days=5, people=2, budget_range="luxury")

    await TripPlanGenerator(gemini).generate(trip)

    prompt = gemini.prompts[0]
    assert "5-day trip plan for Goa" in prompt
    assert "Starting from: Mumbai" in prompt
    assert "Number of people: 2" in prompt
    assert "ABSOLUTE MAXIMUM BUDGET: ₹5,00,000" in prompt
    assert "MINIMUM BUDGET: ₹2,00,000" in prompt
    assert "Interests: beaches, seafood" in prompt
    assert '"budgetBreakdown"' in prompt
    assert '"miscellaneous": { "estimated": 0' in prompt
    assert "integer" in prompt
    assert "Return ONLY the JSON object" in prompt
    assert gemini.params[0] == planner_config.generation


async def test_prompt_defaults_interests(stub_gemini, trip_factory):
    gemini = stub_gemini("no json")
    await TripPlanGenerator(gemini).generate(trip_factory(interests=None))
    assert "Interests: General sightseeing" in gemini.prompts[0]


@pytest.mark.parametrize(
    "error",
    [PlannerConfigError("Gemini API key not configured"), GeminiOverloadedError()],
)
async def test_upstream_failures_propagate(stub_gemini, trip_factory, error):
    with pytest.raises(type(error)):
        await TripPlanGenerator(stub_gemini(error=error)).generate(trip_factory())


@pytest.mark.parametrize(
    "loosen",
    [
        lambda d: d["dailyItinerary"][0].update(day="Day 1"),
        lambda d: d["dailyItinerary"][2].pop("day"),
        lambda d: d["dailyItinerary"][1]["activities"][0].update(location=None),
        lambda d: d.update(foodRecommendations={"name": "Bebinca"}),
        lambda d: d.update(hiddenGems=None, travelTips="Carry cash"),
    ],
)
async def test_loosely_shaped_output_is_still_used(stub_gemini, trip_factory, plan_factory, fenced, loosen):
    data = plan_factory(LUXURY_OVERSPEND)
    loosen(data)

    outcome = await TripPlanGenerator(stub_gemini(fenced(data))).generate(trip_factory())

    assert outcome.source == "adjusted"
    assert [d.day for d in outcome.plan.daily_itinerary] == [1, 2, 3, 4, 5]
