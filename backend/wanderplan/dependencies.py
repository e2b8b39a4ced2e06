from collections.abc import AsyncIterator
from dataclasses import replace

from fastapi import Depends

from wanderplan.config import Settings, settings
from wanderplan.services.planner.config import PlannerConfig, RetryPolicy, planner_config
from wanderplan.services.planner.gemini_client import GeminiClient
from wanderplan.services.planner.generator import TripPlanGenerator
from wanderplan.services.planner.modifier import PlanModifier


def get_settings() -> Settings:
    return settings


def get_planner_config(app_settings: Settings = Depends(get_settings)) -> PlannerConfig:
    return replace(
        planner_config,
        retry=RetryPolicy(max_attempts=app_settings.gemini_max_attempts),
        target_fraction=app_settings.budget_target_fraction,
    )


async def get_gemini_client(
    app_settings: Settings = Depends(get_settings),
    config: PlannerConfig = Depends(get_planner_config),
) -> AsyncIterator[GeminiClient]:
    """One client per request, closed when the response is done."""
    client = GeminiClient(
        app_settings.gemini_api_key,
        model=app_settings.gemini_model,
        base_url=app_settings.gemini_base_url,
        timeout=app_settings.gemini_timeout_seconds,
        retry=config.retry,
    )
    try:
        yield client
    finally:
        await client.aclose()


def get_trip_plan_generator(
    client: GeminiClient = Depends(get_gemini_client),
    config: PlannerConfig = Depends(get_planner_config),
) -> TripPlanGenerator:
    return TripPlanGenerator(client, config)


def get_plan_modifier(
    client: GeminiClient = Depends(get_gemini_client),
    config: PlannerConfig = Depends(get_planner_config),
) -> PlanModifier:
    return PlanModifier(client, config)
