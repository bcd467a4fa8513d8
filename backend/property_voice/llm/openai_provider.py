from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from openai import AsyncOpenAI

from property_voice.config import settings
from property_voice.llm.base import LLMProvider
from property_voice.llm.prompts.extraction import (
    EXTRACTION_SYSTEM_PROMPT,
    build_extraction_user_prompt,
)
from property_voice.utils.exceptions import ExtractionError

if TYPE_CHECKING:
    from property_voice.schemas.extraction import ExtractionSchema


class OpenAIProvider(LLMProvider):
    def __init__(self) -> None:
        self.client = AsyncOpenAI(api_key=settings.openai_api_key)
        self._model = settings.openai_model

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model

    async def extract_category(
        self, transcript: str, schema: ExtractionSchema
    ) -> dict[str, Any]:
        response = await self.client.chat.completions.create(
            model=self._model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            messages=[
                {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                {"role": "user", "content": build_extraction_user_prompt(transcript)},
            ],
            tools=[{"type": "function", "function": schema.to_function_definition()}],
            tool_choice={"type": "function", "function": {"name": schema.name}},
        )
        message = response.choices[0].message if response.choices else None
        if not message or not message.tool_calls:
            raise ExtractionError(f"No function call returned for {schema.name}")

        call = message.tool_calls[0]
        if call.function.name != schema.name:
            raise ExtractionError(
                f"Unexpected function call {call.function.name} for {schema.name}"
            )
        return self._parse_arguments(call.function.arguments, schema.name)

    @staticmethod
    def _parse_arguments(arguments: str, schema_name: str) -> dict[str, Any]:
        try:
            parsed = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise ExtractionError(
                f"Malformed function arguments for {schema_name}: {e}"
            ) from e
        if not isinstance(parsed, dict):
            raise ExtractionError(f"Function arguments for {schema_name} are not an object")
        return parsed
