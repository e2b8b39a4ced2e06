"""Plan extractor — pulls one JSON object out of model text and validates it.

Expected failures come back as ``Rejected`` values rather than exceptions so
callers can route them straight to the fallback planner.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from wanderplan.schemas.plan import TripPlan

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
_ANY_FENCE = re.compile(r"```\s*([\s\S]*?)\s*```")
_BRACE_SPAN = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class Extracted:
    value: Any

    ok = True


@dataclass(frozen=True)
class Rejected:
    reason: str

    ok = False


ExtractResult = Extracted | Rejected


def _candidate_json(text: str) -> str | None:
    for pattern in (_JSON_FENCE, _ANY_FENCE):
        match = pattern.search(text)
        if match:
            return match.group(1)
    match = _BRACE_SPAN.search(text)
    return match.group(0) if match else None


def extract_json_object(text: str) -> ExtractResult:
    """Find the JSON object in ``text``: ```json fence, any fence, then first {...} span."""
    if not text or not text.strip():
        return Rejected("empty response")

    candidate = _candidate_json(text)
    if candidate is None:
        return Rejected("no JSON object found")

    # Fences may still carry prose around the object
    start, end = candidate.find("{"), candidate.rfind("}")
    if start == -1 or end == -1 or end < start:
        return Rejected("no JSON object found")
    candidate = candidate[start:end + 1]

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        return Rejected(f"invalid JSON: {e}")

    if not isinstance(parsed, dict):
        return Rejected(f"expected a JSON object, got {type(parsed).__name__}")
    return Extracted(parsed)


def validate_plan(data: dict) -> ExtractResult:
    """Check the itinerary is present and non-empty, then build a TripPlan."""
    itinerary = data.get("dailyItinerary", data.get("daily_itinerary"))
    if not isinstance(itinerary, list) or not itinerary:
        return Rejected("daily itinerary missing from response")

    try:
        plan = TripPlan.model_validate(data)
    except ValidationError as e:
        return Rejected(f"plan failed validation: {e.error_count()} error(s)")
    if not plan.daily_itinerary:
        return Rejected("daily itinerary missing from response")
    return Extracted(plan)


def parse_plan(text: str) -> ExtractResult:
    """Extract and validate in one step; ``Extracted.value`` is a TripPlan."""
    result = extract_json_object(text)
    if not result.ok:
        return result
    return validate_plan(result.value)
