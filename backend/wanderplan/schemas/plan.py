import math
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# Longest trip the planner will lay out day by day
MAX_TRIP_DAYS = 60


def coerce_cost(value: Any) -> int:
    """Floor a model-supplied cost to a non-negative int; anything non-numeric is 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        try:
            value = float(value.replace(",", "").strip())
        except ValueError:
            return 0
    if not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return 0
    return max(0, math.floor(value))


def coerce_text(value: Any) -> str:
    """Model-supplied text field; null becomes an empty string."""
    return "" if value is None else str(value)


def coerce_list(value: Any) -> list:
    """Wrap a stray object or string in a list; null becomes empty."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _day_number(value: Any, position: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return position


class PlanModel(BaseModel):
    """Base for plan documents: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


# ---------- Plan documents ----------


class Activity(PlanModel):
    time: str = ""
    activity: str = ""
    location: str = ""
    estimated_cost: int = 0
    category: str = ""

    @field_validator("time", "activity", "location", "category", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("estimated_cost", mode="before")
    @classmethod
    def _coerce_cost(cls, v):
        return coerce_cost(v)


class DayPlan(PlanModel):
    day: int
    date: str = ""
    title: str = ""
    activities: list[Activity] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_str(cls, v):
        if isinstance(v, date):
            return v.isoformat()
        return coerce_text(v)

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v):
        return coerce_text(v)

    @field_validator("activities", mode="before")
    @classmethod
    def _activity_objects(cls, v):
        return [item for item in coerce_list(v) if isinstance(item, dict | Activity)]


class BudgetItem(PlanModel):
    estimated: int = 0
    notes: str = ""

    @field_validator("estimated", mode="before")
    @classmethod
    def _coerce_estimated(cls, v):
        return coerce_cost(v)

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_to_str(cls, v):
        return coerce_text(v)


class TripPlan(PlanModel):
    summary: str = ""
    daily_itinerary: list[DayPlan]
    budget_breakdown: dict[str, BudgetItem] = Field(default_factory=dict)
    transportation: Any = None
    accommodation: Any = None
    food_recommendations: list[Any] = Field(default_factory=list)
    travel_tips: list[str] = Field(default_factory=list)
    hidden_gems: list[Any] = Field(default_factory=list)
    total_estimated_cost: int = 0

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, v):
        return coerce_text(v)

    @field_validator("daily_itinerary", mode="before")
    @classmethod
    def _number_days(cls, v):
        """Keep day objects; a missing or unreadable day number becomes its position."""
        if not isinstance(v, list):
            return v
        days = []
        for position, entry in enumerate(v, start=1):
            if isinstance(entry, dict):
                entry = {**entry, "day": _day_number(entry.get("day"), position)}
            elif not isinstance(entry, DayPlan):
                continue
            days.append(entry)
        return days

    @field_validator("budget_breakdown", mode="before")
    @classmethod
    def _drop_non_object_entries(cls, v):
        if not isinstance(v, dict):
            return {}
        return {key: item for key, item in v.items() if isinstance(item, dict | BudgetItem)}

    @field_validator("total_estimated_cost", mode="before")
    @classmethod
    def _coerce_total(cls, v):
        return coerce_cost(v)

    @field_validator("food_recommendations", "hidden_gems", mode="before")
    @classmethod
    def _as_list(cls, v):
        return coerce_list(v)

    @field_validator("travel_tips", mode="before")
    @classmethod
    def _tips_as_strings(cls, v):
        return [str(tip) for tip in coerce_list(v) if tip is not None]

    def breakdown_total(self) -> int:
        return sum(item.estimated for item in self.budget_breakdown.values())


# ---------- Requests ----------


class TripDetails(BaseModel):
    destination: str
    current_location: str = ""
    start_date: date
    end_date: date
    number_of_people: int = Field(default=1, ge=1)
    budget_range: str = "budget"
    interests: str | None = None

    @field_validator("interests", mode="before")
    @classmethod
    def _join_interests(cls, v):
        if isinstance(v, list):
            return ", ".join(str(i) for i in v)
        return v

    @model_validator(mode="after")
    def _check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if self.days > MAX_TRIP_DAYS:
            raise ValueError(f"trips are limited to {MAX_TRIP_DAYS} days")
        return self

    @property
    def days(self) -> int:
        """Inclusive trip length in days."""
        return (self.end_date - self.start_date).days + 1


class GeneratePlanRequest(BaseModel):
    trip: TripDetails


class ChatTurn(BaseModel):
    role: str
    content: str


class ModifyPlanRequest(PlanModel):
    trip_id: str | None = None
    current_plan: dict[str, Any]
    user_message: str
    conversation_history: list[ChatTurn] = Field(default_factory=list)


# ---------- Responses ----------


PlanSource = Literal["llm", "adjusted", "fallback"]


class GeneratePlanResponse(BaseModel):
    plan: TripPlan
    source: PlanSource


class ModifyPlanResponse(PlanModel):
    response: str
    updated_plan: TripPlan | None = None


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
