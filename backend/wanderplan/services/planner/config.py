"""Planner configuration — budget tiers, allocation shares, and LLM parameters."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BudgetTier:
    """Fixed spend window (INR) for a preset budget label."""
    min: int
    max: int


BUDGET_TIERS: dict[str, BudgetTier] = {
    "budget": BudgetTier(25_000, 75_000),
    "mid-range": BudgetTier(75_000, 200_000),
    "luxury": BudgetTier(200_000, 500_000),
}

DEFAULT_TIER = "budget"


@dataclass(frozen=True)
class AllocationShares:
    """Share of the target budget per breakdown category (percent, sums to 100)."""
    accommodation: int = 40
    transportation: int = 25
    food: int = 20
    activities: int = 10
    miscellaneous: int = 5

    def as_dict(self) -> dict[str, int]:
        return {
            "accommodation": self.accommodation,
            "transportation": self.transportation,
            "food": self.food,
            "activities": self.activities,
            "miscellaneous": self.miscellaneous,
        }


@dataclass(frozen=True)
class PriceRange:
    min: int
    max: int


@dataclass(frozen=True)
class PriceGuide:
    """Indicative price ranges (INR) quoted to the model."""
    hotel_per_night: PriceRange = PriceRange(800, 3000)
    intercity_per_person: PriceRange = PriceRange(200, 1500)
    local_transport_daily: PriceRange = PriceRange(100, 400)
    meal: PriceRange = PriceRange(150, 800)
    activity: PriceRange = PriceRange(0, 1000)


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters for a Gemini generateContent call."""
    temperature: float = 0.1
    top_k: int = 10
    top_p: float = 0.8
    max_output_tokens: int = 8192

    def to_payload(self) -> dict:
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }


# Chat edits run hotter and shorter than full-plan generation
CHAT_PARAMS = GenerationParams(temperature=0.7, top_k=40, top_p=0.95, max_output_tokens=4096)


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff for overloaded (503) and network failures: 1s, 2s, 4s..."""
    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    retry_statuses: tuple[int, ...] = (503,)

    def delay(self, attempt: int) -> float:
        return self.base_delay_seconds * (2 ** attempt)


@dataclass(frozen=True)
class PlannerConfig:
    """Top-level config aggregating all planner sub-configs."""
    allocation: AllocationShares = field(default_factory=AllocationShares)
    price_guide: PriceGuide = field(default_factory=PriceGuide)
    generation: GenerationParams = field(default_factory=GenerationParams)
    chat: GenerationParams = CHAT_PARAMS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    # None → midpoint of the budget window; otherwise a fraction of the ceiling
    target_fraction: float | None = None
    history_turns: int = 5
    adjustment_note: str = " (Adjusted to fit budget range)"


planner_config = PlannerConfig()
