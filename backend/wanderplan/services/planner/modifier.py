"""Plan modifier — chat-driven edits to an existing plan.

Chat edits are user-directed, so the returned plan is not run through the
budget reconciler: costs come back as the model wrote them.
"""

import logging

from wanderplan.schemas.plan import ModifyPlanRequest, ModifyPlanResponse
from wanderplan.services.planner.config import PlannerConfig, planner_config
from wanderplan.services.planner.gemini_client import GeminiClient
from wanderplan.services.planner.plan_extractor import extract_json_object, validate_plan
from wanderplan.services.planner.prompt_builder import build_modification_prompt

logger = logging.getLogger(__name__)


class PlanModifier:
    """Conversational plan editing on top of the shared Gemini client."""

    def __init__(self, client: GeminiClient, config: PlannerConfig = planner_config):
        self.client = client
        self.config = config

    async def modify(self, req: ModifyPlanRequest) -> ModifyPlanResponse:
        logger.info(f"Modifying trip plan {req.trip_id or '(unsaved)'}: {req.user_message[:100]!r}")

        prompt = build_modification_prompt(
            req.current_plan, req.user_message, req.conversation_history, self.config,
        )
        raw = await self.client.generate(prompt, self.config.chat)
        return self.from_model_output(raw)

    def from_model_output(self, raw: str) -> ModifyPlanResponse:
        extracted = extract_json_object(raw)
        if not extracted.ok:
            logger.info(f"Chat response is not JSON ({extracted.reason}), returning plain text")
            return ModifyPlanResponse(response=raw.strip())

        data = extracted.value
        reply = data.get("response")
        if not isinstance(reply, str) or not reply.strip():
            reply = raw.strip()

        updated = data.get("updatedPlan", data.get("updated_plan"))
        if not isinstance(updated, dict) or not updated:
            return ModifyPlanResponse(response=reply)

        validated = validate_plan(updated)
        if not validated.ok:
            logger.warning(f"Dropping plan update from chat: {validated.reason}")
            return ModifyPlanResponse(response=reply)

        return ModifyPlanResponse(response=reply, updated_plan=validated.value)
