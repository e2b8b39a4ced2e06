import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from wanderplan.dependencies import get_plan_modifier, get_trip_plan_generator
from wanderplan.schemas.plan import (
    ErrorResponse,
    GeneratePlanRequest,
    GeneratePlanResponse,
    ModifyPlanRequest,
    ModifyPlanResponse,
)
from wanderplan.services.planner.errors import PlannerError
from wanderplan.services.planner.generator import TripPlanGenerator
from wanderplan.services.planner.modifier import PlanModifier

logger = logging.getLogger(__name__)

router = APIRouter()

CHAT_ERROR_REPLY = "Sorry, I encountered an error while processing your request. Please try again."


def planner_error_response(exc: PlannerError) -> JSONResponse:
    """500 envelope for unrecoverable planner failures."""
    body = ErrorResponse(error=exc.message, details=exc.details)
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


@router.options("/generate", include_in_schema=False)
@router.options("/modify", include_in_schema=False)
async def preflight():
    return Response(status_code=200)


@router.post(
    "/generate",
    response_model=GeneratePlanResponse,
    responses={500: {"model": ErrorResponse}},
)
async def generate_trip_plan(
    req: GeneratePlanRequest,
    generator: TripPlanGenerator = Depends(get_trip_plan_generator),
):
    """Generate a budget-checked itinerary for a trip."""
    try:
        outcome = await generator.generate(req.trip)
    except PlannerError as e:
        logger.error(f"Trip plan generation failed [{e.kind}]: {e.message}")
        return planner_error_response(e)

    return GeneratePlanResponse(plan=outcome.plan, source=outcome.source)


@router.post(
    "/modify",
    response_model=ModifyPlanResponse,
    response_model_exclude_none=True,
)
async def modify_trip_plan(
    req: ModifyPlanRequest,
    modifier: PlanModifier = Depends(get_plan_modifier),
):
    """Apply a chat instruction to an existing plan."""
    try:
        return await modifier.modify(req)
    except PlannerError as e:
        logger.error(f"Trip plan modification failed [{e.kind}]: {e.message}")
        return JSONResponse(
            status_code=500,
            content={"error": e.message, "response": CHAT_ERROR_REPLY},
        )
