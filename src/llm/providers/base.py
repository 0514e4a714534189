from __future__ import annotations
import os
from abc import ABC, abstractmethod

LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "30"))


class LLMProvider(ABC):
    @abstractmethod
    def generate(self, *, system: str, user: str) -> str:
        """
        Must return the model output as TEXT, asked for as a single JSON object
        (LLMClient parses it).
        """
        raise NotImplementedError
