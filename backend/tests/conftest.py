"""Pytest configuration and fixtures for tests."""

from __future__ import annotations

import asyncio
import os
import sys
from typing import Any

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from property_voice.llm.base import LLMProvider
from property_voice.schemas.transcription import TranscriptionResult

SCENARIO_TRANSCRIPT = (
    "Piso de 90 metros cuadrados con dos habitaciones y un baño, con ascensor, "
    "sin garaje, precio 150.000 euros"
)


class FakeLLMProvider(LLMProvider):
    """Returns canned category outputs keyed by schema name.

    A response that is an exception instance is raised instead; a missing
    category returns only the metadata fields.
    """

    def __init__(self, responses: dict[str, Any] | None = None, delay: float = 0.0) -> None:
        self.responses = responses or {}
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def extract_category(self, transcript, schema):
        self.calls.append((schema.name, transcript))
        if self.delay:
            await asyncio.sleep(self.delay)
        response = self.responses.get(
            schema.name, {"original_text": "", "confidence": 50}
        )
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def make_llm():
    """Build a FakeLLMProvider from a mapping of category -> response."""
    return FakeLLMProvider


@pytest.fixture
def scenario_responses() -> dict[str, Any]:
    return {
        "extract_basic_property_info": {
            "square_meter": 90,
            "bedrooms": 2,
            "bathrooms": 1,
            "original_text": "Piso de 90 m² con dos habitaciones y un baño",
            "confidence": 95,
        },
        "extract_listing_details": {
            "price": 150000,
            "original_text": "precio 150.000€",
            "confidence": 90,
        },
        "extract_property_features": {
            "has_elevator": True,
            "has_garage": False,
            "original_text": "con ascensor, sin garaje",
            "confidence": 85,
        },
        "extract_appliances_amenities": {
            "original_text": "",
            "confidence": 50,
        },
    }


@pytest.fixture
def scenario_transcription() -> TranscriptionResult:
    return TranscriptionResult(transcript=SCENARIO_TRANSCRIPT, confidence=90, language="es")
