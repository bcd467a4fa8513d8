from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile

from property_voice.llm.base import LLMProvider
from property_voice.llm.factory import get_llm_provider
from property_voice.schemas.extraction import VoiceProcessingResponse
from property_voice.schemas.transcription import (
    AudioUrlRequest,
    TranscriptionResult,
    TranscriptionSummary,
)
from property_voice.services import transcription_service, voice_extraction_service
from property_voice.utils.exceptions import (
    AudioFetchError,
    AudioValidationError,
    TranscriptionError,
    TranscriptQualityError,
)
from property_voice.utils.file_handling import read_audio_upload

router = APIRouter(prefix="/voice")


async def _build_response(
    transcription: TranscriptionResult,
    llm: LLMProvider,
    reference_number: str | None,
) -> VoiceProcessingResponse:
    try:
        result = await voice_extraction_service.extract_property_data_from_voice(
            transcription, llm, reference_number=reference_number
        )
    except TranscriptQualityError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return VoiceProcessingResponse(
        reference_number=reference_number,
        property_data=result.property_data,
        listing_data=result.listing_data,
        complete_data=result.complete_data,
        extracted_fields=result.extracted_fields,
        transcription=transcription,
        stats=voice_extraction_service.build_extraction_stats(result, llm),
        transcription_summary=TranscriptionSummary(
            length=len(transcription.transcript),
            confidence=transcription.confidence,
            language=transcription.language,
            duration=transcription.duration,
        ),
    )


@router.post("/process", response_model=VoiceProcessingResponse)
async def process_voice_recording(
    audio: UploadFile,
    reference_number: str | None = Form(default=None),
    llm: LLMProvider = Depends(get_llm_provider),
) -> VoiceProcessingResponse:
    try:
        content = await read_audio_upload(audio)
    except AudioValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        transcription = await transcription_service.transcribe_audio(
            content, audio.filename or "recording.webm"
        )
    except TranscriptionError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    return await _build_response(transcription, llm, reference_number)


@router.post("/process-url", response_model=VoiceProcessingResponse)
async def process_voice_recording_url(
    body: AudioUrlRequest,
    llm: LLMProvider = Depends(get_llm_provider),
) -> VoiceProcessingResponse:
    try:
        transcription = await transcription_service.transcribe_audio_url(body.audio_url)
    except (AudioFetchError, TranscriptionError) as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    return await _build_response(transcription, llm, body.reference_number)


@router.post("/extract", response_model=VoiceProcessingResponse)
async def extract_from_transcript(
    body: TranscriptionResult,
    reference_number: str | None = None,
    llm: LLMProvider = Depends(get_llm_provider),
) -> VoiceProcessingResponse:
    return await _build_response(body, llm, reference_number)
