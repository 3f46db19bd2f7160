"""
Core LLM abstractions and message data models.

Concrete backends ('OpenAILLM') implement the 'LLM' ABC. The message format
('LLMMessage') is backend-agnostic so the answering service never needs to
know which model is in use.
"""

from abc import ABC, abstractmethod
from enum import StrEnum

from pydantic import BaseModel


class Roles(StrEnum):
    """Conversation roles as used by the OpenAI chat completions API."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class LLMMessage(BaseModel):
    """A single message in a conversation sent to or received from an LLM."""

    content: str = ""
    role: Roles = Roles.ASSISTANT


class LLM(ABC):
    """
    Abstract base class for language model backends.

    Attributes:
        json_output: Ask the backend to constrain its reply to a JSON object
            when it supports doing so.
    """

    def __init__(self, json_output: bool = False) -> None:
        self.json_output = json_output

    @abstractmethod
    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        """Return a single complete response for the given conversation."""
        pass
