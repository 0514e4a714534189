import asyncio
import logging
import os
from typing import List, Optional

from pydantic import BaseModel, Field

from api.metrics import INTERPRETER_MODE_TOTAL
from execution.action_executor import ActionExecutor, ActionResult
from interpretation.command_classifier import CommandClassifier
from interpretation.intent_interpreter import IntentInterpreter
from llm.schemas import InterpretResult
from storage.repository import GTDRepository

logger = logging.getLogger(__name__)

COMMAND_FAST_PATH = os.getenv("GTD_COMMAND_FAST_PATH", "false").lower() in {"1", "true", "yes"}


class ChatResponse(BaseModel):
    message: str
    actions: List[ActionResult] = Field(default_factory=list)


class BackendAPI:
    """Central orchestration of the chat pipeline: interpret, then execute."""

    def __init__(
        self,
        interpreter: Optional[IntentInterpreter] = None,
        classifier: Optional[CommandClassifier] = None,
        command_fast_path: bool = COMMAND_FAST_PATH,
    ):
        self.interpreter = interpreter or IntentInterpreter()
        self.classifier = classifier or CommandClassifier()
        self.command_fast_path = command_fast_path

    def interpret(self, message: str) -> InterpretResult:
        """Blocking: may call the model. Never raises."""

        # 1. Literal "add task:" commands skip the model when the fast path is on
        if self.command_fast_path:
            result = self.classifier.classify_result(message)
            if result is not None:
                return result

        # 2. Model (or its rule-based fallback)
        result = self.interpreter.interpret(message)

        # 3. Last resort: nothing came out, but the text is a literal command
        if not result.actions:
            command = self.classifier.classify_result(message)
            if command is not None:
                logger.info("Interpreter produced no actions, using literal command")
                return command

        return result

    async def submit_message(self, message: str, repository: GTDRepository) -> ChatResponse:
        # The model call is blocking; keep it off the event loop.
        result = await asyncio.to_thread(self.interpret, message)

        try:
            INTERPRETER_MODE_TOTAL.labels(mode=result.mode).inc()
        except Exception:
            pass

        # 4. Apply actions in order
        executor = ActionExecutor(repository)
        applied = await executor.execute(result.actions)

        return ChatResponse(message=result.narrative, actions=applied)
