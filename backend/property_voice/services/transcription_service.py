"""Speech-to-text adapter (OpenAI Whisper) and the transcript quality gate."""

from __future__ import annotations

import logging
import math
from typing import Any

import httpx
from openai import AsyncOpenAI, OpenAIError

from property_voice.config import settings
from property_voice.schemas.transcription import TranscriptionResult, TranscriptSegment
from property_voice.utils.exceptions import (
    AudioFetchError,
    LowTranscriptConfidenceError,
    TranscriptionError,
    TranscriptTooShortError,
)

logger = logging.getLogger(__name__)

# Used when Whisper returns no per-segment log probabilities.
DEFAULT_WHISPER_CONFIDENCE = 85.0

REAL_ESTATE_PROMPT = (
    "Transcripción de una descripción detallada de una propiedad inmobiliaria en España. "
    "La descripción puede incluir: precio en euros, dirección completa, metros cuadrados "
    "(m² o m2), número de dormitorios y baños, plantas del edificio, características como "
    "ascensor, garaje o parking, trastero, balcón, terraza, jardín, piscina, orientación "
    "(norte, sur, este, oeste), estado de conservación, tipo de calefacción, aire "
    "acondicionado, cocina equipada, certificado energético, año de construcción, y "
    "detalles de la zona y transporte público."
)

_client: AsyncOpenAI | None = None


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        _client = AsyncOpenAI(api_key=settings.openai_api_key)
    return _client


def _segment_confidence(segment: Any) -> float | None:
    avg_logprob = getattr(segment, "avg_logprob", None)
    if avg_logprob is None:
        return None
    return min(100.0, math.exp(avg_logprob) * 100)


def _build_result(response: Any, language: str) -> TranscriptionResult:
    raw_segments = getattr(response, "segments", None) or []
    segments = [
        TranscriptSegment(
            text=(getattr(seg, "text", "") or "").strip(),
            start=getattr(seg, "start", 0) or 0,
            end=getattr(seg, "end", 0) or 0,
            confidence=_segment_confidence(seg),
        )
        for seg in raw_segments
    ]

    scores = [seg.confidence for seg in segments if seg.confidence]
    confidence = sum(scores) / len(scores) if scores else DEFAULT_WHISPER_CONFIDENCE

    # verbose_json reports the language by name ("spanish"), not by code.
    detected = getattr(response, "language", None) or ""
    return TranscriptionResult(
        transcript=(getattr(response, "text", "") or "").strip(),
        confidence=round(confidence),
        language=detected if len(detected) == 2 else language,
        duration=getattr(response, "duration", None),
        segments=segments or None,
    )


async def transcribe_audio(
    audio: bytes,
    filename: str = "recording.webm",
    *,
    language: str | None = None,
    prompt: str = REAL_ESTATE_PROMPT,
    temperature: float | None = None,
) -> TranscriptionResult:
    """Transcribe an audio clip with Whisper.

    Raises:
        TranscriptionError: the transcription service failed.
    """
    language = language or settings.transcription_language
    temperature = (
        settings.transcription_temperature if temperature is None else temperature
    )
    logger.info("Transcribing %s (%d bytes)", filename, len(audio))

    try:
        response = await _get_client().audio.transcriptions.create(
            model=settings.whisper_model,
            file=(filename, audio),
            language=language,
            response_format="verbose_json",
            temperature=temperature,
            prompt=prompt,
        )
    except OpenAIError as e:
        logger.exception("Transcription failed for %s", filename)
        raise TranscriptionError(f"Transcription failed: {e}") from e

    result = _build_result(response, language)
    logger.info(
        "Transcription completed: %d chars, %.0f%% confidence, %s segments",
        len(result.transcript), result.confidence, len(result.segments or []),
    )
    return result


async def fetch_audio(audio_url: str) -> bytes:
    """Download an audio clip.

    Raises:
        AudioFetchError: the download failed or returned an error status.
    """
    try:
        async with httpx.AsyncClient(timeout=60.0, follow_redirects=True) as http:
            response = await http.get(audio_url)
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("Failed to fetch audio from %s: %s", audio_url, e)
        raise AudioFetchError(f"Failed to fetch audio: {e}") from e
    return response.content


async def transcribe_audio_url(audio_url: str) -> TranscriptionResult:
    audio = await fetch_audio(audio_url)
    filename = audio_url.rsplit("/", 1)[-1].split("?", 1)[0] or "recording.webm"
    return await transcribe_audio(audio, filename)


def check_transcript_quality(result: TranscriptionResult) -> None:
    """Reject transcripts that are too short or too unreliable to extract from."""
    text = result.transcript.strip()
    if len(text) < settings.min_transcript_length:
        raise TranscriptTooShortError(
            "Transcripción muy corta o vacía. Por favor, graba de nuevo con más claridad."
        )
    if result.confidence < settings.min_transcript_confidence:
        raise LowTranscriptConfidenceError(
            f"Transcript confidence {result.confidence:.0f}% is below "
            f"{settings.min_transcript_confidence:.0f}%"
        )
    if result.confidence < settings.low_transcript_confidence_warning:
        logger.warning("Low transcript confidence: %.0f%%", result.confidence)
