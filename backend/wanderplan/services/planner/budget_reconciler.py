"""Budget reconciler — forces a parsed plan's cost breakdown into the budget window."""

import logging
from dataclasses import dataclass

from wanderplan.data.currency import format_inr
from wanderplan.schemas.plan import TripDetails, TripPlan
from wanderplan.services.planner.budget_parser import BudgetRange
from wanderplan.services.planner.config import PlannerConfig, planner_config
from wanderplan.services.planner.plan_extractor import Rejected

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconciled:
    plan: TripPlan
    adjusted: bool = False

    ok = True


def target_cost(budget: BudgetRange, config: PlannerConfig = planner_config) -> int:
    """Amount a rescaled or synthetic plan should add up to."""
    if config.target_fraction is None:
        return budget.midpoint
    target = int(budget.max * config.target_fraction)
    return min(max(target, budget.min), budget.max)


class BudgetReconciler:
    """Rescales every breakdown category when the model misses the budget window."""

    def __init__(self, config: PlannerConfig = planner_config):
        self.config = config

    def reconcile(
        self,
        plan: TripPlan,
        budget: BudgetRange,
        trip: TripDetails,
    ) -> Reconciled | Rejected:
        total = plan.breakdown_total()
        logger.info(
            f"Generated cost {format_inr(total)}, budget range "
            f"{format_inr(budget.min)}-{format_inr(budget.max)}"
        )

        if total <= 0:
            return Rejected("budget breakdown sums to zero")

        if budget.contains(total):
            return Reconciled(plan.model_copy(update={"total_estimated_cost": total}))

        target = target_cost(budget, self.config)
        logger.warning(f"Plan cost {format_inr(total)} is outside budget range, rescaling to {format_inr(target)}")

        breakdown = {
            name: item.model_copy(update={
                "estimated": item.estimated * target // total,
                "notes": item.notes + self.config.adjustment_note,
            })
            for name, item in plan.budget_breakdown.items()
        }

        # Flooring leaves the sum a few units short of target; give the rest to the largest line
        shortfall = target - sum(item.estimated for item in breakdown.values())
        if shortfall > 0:
            largest = max(breakdown, key=lambda name: breakdown[name].estimated)
            item = breakdown[largest]
            breakdown[largest] = item.model_copy(update={"estimated": item.estimated + shortfall})

        adjusted_total = sum(item.estimated for item in breakdown.values())
        summary = (
            f"Budget-optimized {trip.days}-day trip to {trip.destination}, staying within your "
            f"{format_inr(budget.min)}-{format_inr(budget.max)} budget "
            f"(Total: {format_inr(adjusted_total)})"
        )
        logger.info(f"Adjusted total cost: {format_inr(adjusted_total)}")

        return Reconciled(
            plan.model_copy(update={
                "budget_breakdown": breakdown,
                "total_estimated_cost": adjusted_total,
                "summary": summary,
            }),
            adjusted=True,
        )
