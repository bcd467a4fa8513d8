"""End-to-end tests for the voice extraction pipeline with a fake LLM."""

from __future__ import annotations

import os
import sys
from unittest.mock import patch

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from property_voice.schemas.transcription import TranscriptionResult
from property_voice.services.extraction_schemas import CATEGORY_FIELD_MAP
from property_voice.services.voice_extraction_service import (
    average_confidence,
    build_extraction_stats,
    extract_property_data_from_voice,
)
from property_voice.utils.exceptions import (
    ExtractionError,
    LowTranscriptConfidenceError,
    TranscriptTooShortError,
)


# ── Scenario ───────────────────────────────────────────────────────────────


class TestScenario:
    @pytest.mark.asyncio
    async def test_property_and_listing_data(
        self, make_llm, scenario_responses, scenario_transcription
    ):
        llm = make_llm(scenario_responses)

        result = await extract_property_data_from_voice(scenario_transcription, llm)

        assert result.property_data == {
            "squareMeter": 90,
            "bedrooms": 2,
            "bathrooms": 1,
            "hasElevator": True,
            "hasGarage": False,
        }
        assert result.listing_data == {"price": 150000}
        assert result.complete_data.contact == {}
        assert result.complete_data.property == result.property_data

    @pytest.mark.asyncio
    async def test_llm_receives_normalized_transcript(
        self, make_llm, scenario_responses, scenario_transcription
    ):
        llm = make_llm(scenario_responses)
        await extract_property_data_from_voice(scenario_transcription, llm)

        transcripts = {transcript for _, transcript in llm.calls}
        assert len(transcripts) == 1
        [transcript] = transcripts
        assert "90 m²" in transcript
        assert "150.000€" in transcript

    @pytest.mark.asyncio
    async def test_confidence_scaled_by_transcript(
        self, make_llm, scenario_responses, scenario_transcription
    ):
        llm = make_llm(scenario_responses)
        result = await extract_property_data_from_voice(scenario_transcription, llm)

        by_column = {field.db_column: field for field in result.extracted_fields}
        # 95 self-reported * 90% transcript
        assert by_column["bedrooms"].confidence == pytest.approx(85.5)
        assert all(field.confidence <= 95 for field in result.extracted_fields)

    @pytest.mark.asyncio
    async def test_categories_reported(
        self, make_llm, scenario_responses, scenario_transcription
    ):
        llm = make_llm(scenario_responses)
        result = await extract_property_data_from_voice(
            scenario_transcription, llm, reference_number="REF-1"
        )
        assert len(result.categories_attempted) == 4
        assert result.categories_succeeded == result.categories_attempted


# ── Failure handling ──────────────────────────────────────────────────────


class TestPartialFailure:
    @pytest.mark.asyncio
    async def test_failed_category_only_loses_its_fields(
        self, make_llm, scenario_responses, scenario_transcription
    ):
        scenario_responses["extract_listing_details"] = ExtractionError("no tool call")
        llm = make_llm(scenario_responses)

        result = await extract_property_data_from_voice(scenario_transcription, llm)

        assert result.listing_data == {}
        assert result.property_data["bedrooms"] == 2
        assert result.property_data["hasElevator"] is True
        assert "extract_listing_details" not in result.categories_succeeded

    @pytest.mark.asyncio
    async def test_nothing_extracted(self, make_llm, scenario_transcription):
        llm = make_llm()
        result = await extract_property_data_from_voice(scenario_transcription, llm)
        assert result.extracted_fields == []
        assert result.property_data == {}
        assert result.listing_data == {}

    @pytest.mark.asyncio
    async def test_later_category_wins_on_overlap(
        self, make_llm, scenario_responses, scenario_transcription
    ):
        scenario_responses["extract_property_features"]["square_meter"] = 95
        llm = make_llm(scenario_responses)
        features = {
            **CATEGORY_FIELD_MAP["extract_property_features"],
            "square_meter": ("property", "squareMeter"),
        }

        with patch.dict(CATEGORY_FIELD_MAP, {"extract_property_features": features}):
            result = await extract_property_data_from_voice(scenario_transcription, llm)

        assert result.property_data["squareMeter"] == 95


class TestQualityGate:
    @pytest.mark.asyncio
    async def test_short_transcript_is_rejected_before_extraction(self, make_llm):
        llm = make_llm()
        transcription = TranscriptionResult(transcript="  piso  ", confidence=95)

        with pytest.raises(TranscriptTooShortError):
            await extract_property_data_from_voice(transcription, llm)
        assert llm.calls == []

    @pytest.mark.asyncio
    async def test_unreliable_transcript_is_rejected(self, make_llm):
        llm = make_llm()
        transcription = TranscriptionResult(
            transcript="Piso de 90 metros cuadrados", confidence=5
        )

        with pytest.raises(LowTranscriptConfidenceError):
            await extract_property_data_from_voice(transcription, llm)
        assert llm.calls == []

    @pytest.mark.asyncio
    async def test_low_confidence_only_warns(self, make_llm, scenario_responses):
        llm = make_llm(scenario_responses)
        transcription = TranscriptionResult(
            transcript="Piso de 90 metros cuadrados con dos habitaciones", confidence=40
        )

        result = await extract_property_data_from_voice(transcription, llm)

        assert result.property_data["bedrooms"] == 2
        assert all(field.confidence <= 40 for field in result.extracted_fields)


# ── Appliances and stats ──────────────────────────────────────────────────


class TestAppliances:
    @pytest.mark.asyncio
    async def test_appliances_land_in_listing(self, make_llm, scenario_transcription):
        llm = make_llm(
            {
                "extract_appliances_amenities": {
                    "oven": True,
                    "dishwasher": False,
                    "washing_machine": "sí",
                    "original_text": "con horno y lavadora, sin lavavajillas",
                    "confidence": 88,
                },
            }
        )

        result = await extract_property_data_from_voice(scenario_transcription, llm)

        assert result.listing_data == {
            "oven": True,
            "dishwasher": False,
            "washingMachine": True,
        }
        assert result.property_data == {}


class TestStats:
    @pytest.mark.asyncio
    async def test_build_extraction_stats(
        self, make_llm, scenario_responses, scenario_transcription
    ):
        llm = make_llm(scenario_responses)
        result = await extract_property_data_from_voice(scenario_transcription, llm)

        stats = build_extraction_stats(result, llm)

        assert stats.total_fields == 6
        assert stats.property_fields == 5
        assert stats.listing_fields == 1
        assert stats.categories_attempted == 4
        assert stats.categories_succeeded == 4
        assert stats.llm_provider == "fake"
        assert stats.llm_model == "fake-model"
        assert 0 < stats.average_confidence <= 95

    def test_average_confidence_of_nothing(self):
        assert average_confidence([]) == 0.0
