"""Voice transcript -> structured property and listing data."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from property_voice.schemas.extraction import (
    ExtractedFieldResult,
    ExtractionStats,
    VoiceExtractionResult,
)
from property_voice.services.aggregator import aggregate_fields
from property_voice.services.extraction_orchestrator import collect_raw_extractions
from property_voice.services.extraction_schemas import EXTRACTION_SCHEMAS
from property_voice.services.field_mapper import map_category_fields
from property_voice.services.normalizer import normalize_transcript
from property_voice.services.transcription_service import check_transcript_quality

if TYPE_CHECKING:
    from property_voice.llm.base import LLMProvider
    from property_voice.schemas.extraction import ExtractionSchema
    from property_voice.schemas.transcription import TranscriptionResult

logger = logging.getLogger(__name__)


async def extract_property_data_from_voice(
    transcription: TranscriptionResult,
    llm: LLMProvider,
    schemas: list[ExtractionSchema] | None = None,
    reference_number: str | None = None,
) -> VoiceExtractionResult:
    """Run the full extraction pipeline over one transcription.

    Raises:
        TranscriptQualityError: the transcript is too short or too unreliable
            to extract from. Nothing else aborts the run.
    """
    schemas = EXTRACTION_SCHEMAS if schemas is None else schemas
    check_transcript_quality(transcription)

    transcript = normalize_transcript(transcription.transcript)
    logger.info(
        "Starting voice extraction (ref=%s, %d chars, %.0f%% transcript confidence)",
        reference_number, len(transcript), transcription.confidence,
    )

    raw_extractions = await collect_raw_extractions(transcript, schemas, llm)

    fields: list[ExtractedFieldResult] = []
    for extraction in raw_extractions:
        fields.extend(
            map_category_fields(
                extraction.schema_name, extraction.raw, transcription.confidence
            )
        )

    complete = aggregate_fields(fields)
    result = VoiceExtractionResult(
        extracted_fields=fields,
        property_data=complete.property,
        listing_data=complete.listing,
        complete_data=complete,
        categories_attempted=[schema.name for schema in schemas],
        categories_succeeded=[extraction.schema_name for extraction in raw_extractions],
    )

    logger.info(
        "Voice extraction completed: %d fields (%d property, %d listing), "
        "average confidence %.1f%%",
        len(fields), len(complete.property), len(complete.listing),
        average_confidence(fields),
    )
    return result


def average_confidence(fields: list[ExtractedFieldResult]) -> float:
    if not fields:
        return 0.0
    return sum(field.confidence for field in fields) / len(fields)


def build_extraction_stats(
    result: VoiceExtractionResult, llm: LLMProvider
) -> ExtractionStats:
    fields = result.extracted_fields
    return ExtractionStats(
        total_fields=len(fields),
        property_fields=sum(1 for field in fields if field.db_table == "property"),
        listing_fields=sum(1 for field in fields if field.db_table == "listing"),
        average_confidence=round(average_confidence(fields), 1),
        categories_attempted=len(result.categories_attempted),
        categories_succeeded=len(result.categories_succeeded),
        llm_provider=llm.provider_name,
        llm_model=llm.model_name,
    )
