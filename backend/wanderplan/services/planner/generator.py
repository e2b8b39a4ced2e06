"""Trip plan generator — budget parse → prompt → Gemini → extract → reconcile, with fallback."""

import logging
from dataclasses import dataclass

from wanderplan.schemas.plan import PlanSource, TripDetails, TripPlan
from wanderplan.services.planner.budget_parser import parse_budget_range
from wanderplan.services.planner.budget_reconciler import BudgetReconciler
from wanderplan.services.planner.config import PlannerConfig, planner_config
from wanderplan.services.planner.fallback_planner import FallbackPlanner
from wanderplan.services.planner.gemini_client import GeminiClient
from wanderplan.services.planner.plan_extractor import parse_plan
from wanderplan.services.planner.prompt_builder import build_generation_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOutcome:
    plan: TripPlan
    source: PlanSource
    reason: str | None = None


class TripPlanGenerator:
    """Single pipeline for budget-constrained itinerary generation.

    Upstream failures (missing key, non-retryable status, exhausted retries)
    propagate as PlannerError. Unusable model output never does: it ends in
    the fallback planner.
    """

    def __init__(self, client: GeminiClient, config: PlannerConfig = planner_config):
        self.client = client
        self.config = config
        self.reconciler = BudgetReconciler(config)
        self.fallback = FallbackPlanner(config)

    async def generate(self, trip: TripDetails) -> GenerationOutcome:
        budget = parse_budget_range(trip.budget_range)
        logger.info(
            f"Generating {trip.days}-day trip plan for {trip.destination} "
            f"(budget {budget.min}-{budget.max}, {trip.number_of_people} people)"
        )

        prompt = build_generation_prompt(trip, budget, self.config)
        raw = await self.client.generate(prompt, self.config.generation)
        logger.debug(f"Raw model response length: {len(raw)}")

        return self.from_model_output(raw, trip)

    def from_model_output(self, raw: str, trip: TripDetails) -> GenerationOutcome:
        """Turn raw model text into a budget-compliant plan, falling back when needed."""
        budget = parse_budget_range(trip.budget_range)

        parsed = parse_plan(raw)
        if not parsed.ok:
            return self._fallback(trip, parsed.reason, raw)

        reconciled = self.reconciler.reconcile(parsed.value, budget, trip)
        if not reconciled.ok:
            return self._fallback(trip, reconciled.reason, raw)

        plan = reconciled.plan
        logger.info(
            f"Trip plan generated with {len(plan.daily_itinerary)} days, "
            f"total {plan.total_estimated_cost}"
        )
        return GenerationOutcome(plan=plan, source="adjusted" if reconciled.adjusted else "llm")

    def _fallback(self, trip: TripDetails, reason: str, raw: str) -> GenerationOutcome:
        logger.warning(f"Model output unusable ({reason}); raw start: {raw[:300]!r}")
        budget = parse_budget_range(trip.budget_range)
        return GenerationOutcome(
            plan=self.fallback.build(trip, budget),
            source="fallback",
            reason=reason,
        )
