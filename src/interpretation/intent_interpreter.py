import logging
from typing import Optional

from interpretation.fallback_interpreter import FallbackInterpreter
from interpretation.prompts import GTD_SYSTEM_PROMPT
from llm.llm_client import LLMClient, is_quota_error
from llm.schemas import InterpretResult, parse_actions

logger = logging.getLogger(__name__)

DEFAULT_NARRATIVE = "I understand your request. Let me help you with that."


class IntentInterpreter:
    """Turn a free-text message into a narrative plus zero or more GTD actions.

    The model may return several actions for one message (a project and the
    tasks that belong to it). Any failure while talking to the model, quota
    refusals and unreadable replies included, hands the message to the
    FallbackInterpreter, so this never raises. An empty reply is not a failure:
    it yields no actions and a generic narrative.
    """

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        fallback: Optional[FallbackInterpreter] = None,
    ):
        self.llm_client = llm_client or LLMClient()
        self.fallback = fallback or FallbackInterpreter()

    def interpret(self, message: str) -> InterpretResult:
        try:
            payload = self.llm_client.generate_json(system=GTD_SYSTEM_PROMPT, user=message)
            if payload is None:
                logger.warning("LLM reply was not a JSON object, using fallback interpreter")
                return self.fallback.interpret(message)
            actions = parse_actions(payload.get("actions"))
            narrative = payload.get("response") or payload.get("narrative")
        except Exception as e:
            if is_quota_error(e):
                logger.warning("LLM quota exceeded, using fallback interpreter")
            else:
                logger.error(f"LLM processing error, using fallback interpreter: {e}")
            return self.fallback.interpret(message)

        if not isinstance(narrative, str) or not narrative.strip():
            narrative = DEFAULT_NARRATIVE

        logger.info(f"LLM returned {len(actions)} action(s)")
        return InterpretResult(narrative=narrative, actions=actions, mode="llm")
