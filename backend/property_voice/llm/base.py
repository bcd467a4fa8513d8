from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from property_voice.schemas.extraction import ExtractionSchema


class LLMProvider(ABC):
    @abstractmethod
    async def extract_category(
        self, transcript: str, schema: ExtractionSchema
    ) -> dict[str, Any]:
        """Run one forced structured-extraction call for ``schema``.

        Returns the call arguments as a dict. Fields the transcript does not
        mention are absent. Raises ``ExtractionError`` when the model returns
        no usable call.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str: ...

    @property
    @abstractmethod
    def model_name(self) -> str: ...
