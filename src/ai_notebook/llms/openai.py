"""
OpenAI chat completions backend.

Wraps 'openai.AsyncOpenAI'. When 'json_output' is set the request carries
'response_format={"type": "json_object"}', which the answering service relies
on to get a parseable citation payload.
"""

from typing import Any

from loguru import logger
from openai import AsyncOpenAI

from ai_notebook.llms.base import LLM, LLMMessage, Roles


class OpenAILLM(LLM):
    def __init__(
        self,
        model_name: str = "gpt-4o-mini",
        temperature: float = 0.3,
        seed: int | None = 42,
        openai_api_key: str | None = None,
        json_output: bool = False,
    ) -> None:
        super().__init__(json_output=json_output)
        self.model_name = model_name
        self.temperature = temperature
        self.seed = seed
        self.client = AsyncOpenAI(api_key=openai_api_key)

    def _request_args(self, conversation: list[LLMMessage]) -> dict[str, Any]:
        args: dict[str, Any] = {
            "model": self.model_name,
            "messages": [{"role": str(message.role), "content": message.content} for message in conversation],
            "temperature": self.temperature,
        }
        if self.seed is not None:
            args["seed"] = self.seed
        if self.json_output:
            args["response_format"] = {"type": "json_object"}
        return args

    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        completion = await self.client.chat.completions.create(**self._request_args(conversation))
        if completion.usage is not None:
            logger.debug(
                f"{self.model_name}: {completion.usage.prompt_tokens} prompt / "
                f"{completion.usage.completion_tokens} completion tokens"
            )
        return LLMMessage(role=Roles.ASSISTANT, content=completion.choices[0].message.content or "")
