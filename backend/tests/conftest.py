import json
from datetime import date, timedelta

import pytest

from wanderplan.schemas.plan import TripDetails


class StubGemini:
    """Stands in for GeminiClient: returns canned text, records prompts."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.prompts: list[str] = []
        self.params = []

    async def generate(self, prompt, params):
        self.prompts.append(prompt)
        self.params.append(params)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def stub_gemini():
    return StubGemini


@pytest.fixture
def trip_factory():
    def make(
        destination="Goa",
        days=5,
        people=2,
        budget_range="luxury",
        start=date(2025, 3, 1),
        current_location="Mumbai",
        interests="beaches, seafood",
    ) -> TripDetails:
        return TripDetails(
            destination=destination,
            current_location=current_location,
            start_date=start,
            end_date=start + timedelta(days=days - 1),
            number_of_people=people,
            budget_range=budget_range,
            interests=interests,
        )
    return make


@pytest.fixture
def plan_factory():
    """Build a raw model-style plan dict with the given breakdown amounts."""

    def make(breakdown: dict, days: int = 5, start: date = date(2025, 3, 1)) -> dict:
        return {
            "summary": "A relaxed beach holiday",
            "dailyItinerary": [
                {
                    "day": i + 1,
                    "date": (start + timedelta(days=i)).isoformat(),
                    "title": f"Day {i + 1}",
                    "activities": [
                        {
                            "time": "Morning",
                            "activity": "Beach walk",
                            "location": "Baga Beach",
                            "estimatedCost": 0,
                            "category": "Leisure",
                        }
                    ],
                }
                for i in range(days)
            ],
            "budgetBreakdown": {
                name: {"estimated": amount, "notes": f"{name} costs"}
                for name, amount in breakdown.items()
            },
            "transportation": {"gettingThere": "Train", "localTransport": {"modes": ["Scooter"], "dailyCost": 400}},
            "accommodation": "Beach shack",
            "foodRecommendations": [],
            "travelTips": ["Rent a scooter"],
            "hiddenGems": [],
            "totalEstimatedCost": sum(v for v in breakdown.values() if isinstance(v, int)),
        }
    return make


@pytest.fixture
def fenced():
    def wrap(data: dict) -> str:
        return "Here is your plan:\n```json\n" + json.dumps(data) + "\n```\nEnjoy!"
    return wrap
