"""Budget parser — maps a budget label or custom range string to a spend window."""

import logging
import re
from dataclasses import dataclass

from wanderplan.services.planner.config import BUDGET_TIERS, DEFAULT_TIER

logger = logging.getLogger(__name__)

# "₹10,000-₹50,000", "$500 - $2,000", "INR 10000-INR 50000"
_CUSTOM_RANGE = re.compile(
    r"^\s*[^\d\s-]+\.?\s*(\d[\d,]*)\s*-\s*[^\d\s-]+\.?\s*(\d[\d,]*)\s*$"
)


@dataclass(frozen=True)
class BudgetRange:
    min: int
    max: int

    def contains(self, amount: int) -> bool:
        return self.min <= amount <= self.max

    @property
    def midpoint(self) -> int:
        return (self.min + self.max) // 2


def _preset(label: str) -> BudgetRange:
    tier = BUDGET_TIERS[label]
    return BudgetRange(tier.min, tier.max)


def parse_budget_range(budget_range: str | None) -> BudgetRange:
    """Resolve a preset label (case-insensitive) or a custom range.

    Anything unrecognised, including a custom range whose bounds are not
    ascending, falls back to the "budget" preset.
    """
    if not budget_range:
        return _preset(DEFAULT_TIER)

    label = budget_range.strip().lower()
    if label in BUDGET_TIERS:
        return _preset(label)

    match = _CUSTOM_RANGE.match(budget_range)
    if match:
        low = int(match.group(1).replace(",", ""))
        high = int(match.group(2).replace(",", ""))
        if low < high:
            return BudgetRange(low, high)
        logger.warning(f"Budget range {budget_range!r} is not ascending, using {DEFAULT_TIER} preset")
        return _preset(DEFAULT_TIER)

    logger.info(f"Unrecognised budget range {budget_range!r}, using {DEFAULT_TIER} preset")
    return _preset(DEFAULT_TIER)
