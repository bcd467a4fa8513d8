from __future__ import annotations

from typing import TYPE_CHECKING, Any

import anthropic

from property_voice.config import settings
from property_voice.llm.base import LLMProvider
from property_voice.llm.prompts.extraction import (
    EXTRACTION_SYSTEM_PROMPT,
    build_extraction_user_prompt,
)
from property_voice.utils.exceptions import ExtractionError

if TYPE_CHECKING:
    from property_voice.schemas.extraction import ExtractionSchema


class ClaudeProvider(LLMProvider):
    def __init__(self) -> None:
        self.client = anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)
        self._model = settings.anthropic_model

    @property
    def provider_name(self) -> str:
        return "claude"

    @property
    def model_name(self) -> str:
        return self._model

    async def extract_category(
        self, transcript: str, schema: ExtractionSchema
    ) -> dict[str, Any]:
        response = await self.client.messages.create(
            model=self._model,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
            system=EXTRACTION_SYSTEM_PROMPT,
            messages=[
                {"role": "user", "content": build_extraction_user_prompt(transcript)}
            ],
            tools=[
                {
                    "name": schema.name,
                    "description": schema.description,
                    "input_schema": schema.to_parameters(),
                }
            ],
            tool_choice={"type": "tool", "name": schema.name},
        )
        for block in response.content:
            if getattr(block, "type", None) == "tool_use" and block.name == schema.name:
                if not isinstance(block.input, dict):
                    raise ExtractionError(f"Tool input for {schema.name} is not an object")
                return dict(block.input)
        raise ExtractionError(f"No tool call returned for {schema.name}")
