from __future__ import annotations
import json
from llm.providers.base import LLMProvider

class MockProvider(LLMProvider):
    def generate(self, *, system: str, user: str) -> str:
        """
        Returns canned GTD JSON based on the user message, for offline demos.
        """
        lower_user = user.lower()

        if "vacation" in lower_user or "trip" in lower_user:
            return json.dumps({
                "response": (
                    "I've created a project 'Plan vacation' and added two tasks: "
                    "'Research destinations' (quick personal) and "
                    "'Check passport expiration' (quick personal)."
                ),
                "actions": [
                    {"type": "project", "data": {"title": "Plan vacation", "status": "active"}},
                    {"type": "task", "data": {"text": "Research destinations", "category": "quick_personal"}},
                    {"type": "task", "data": {"text": "Check passport expiration", "category": "quick_personal"}},
                ],
            })

        if "goal" in lower_user:
            return json.dumps({
                "response": f"I've added '{user.strip()}' as a 1-2 year goal.",
                "actions": [
                    {"type": "goal", "data": {"text": user.strip(), "timeframe": "1_2_year"}},
                ],
            })

        if "project" in lower_user:
            return json.dumps({
                "response": f"I've created a project '{user.strip()}'.",
                "actions": [
                    {"type": "project", "data": {"title": user.strip(), "status": "active"}},
                ],
            })

        # Default: treat the message as a single quick work task
        return json.dumps({
            "response": f"I've added '{user.strip()}' to your quick work list.",
            "actions": [
                {"type": "task", "data": {"text": user.strip(), "category": "quick_work"}},
            ],
        })
