from __future__ import annotations

from pydantic import BaseModel, Field


class TranscriptSegment(BaseModel):
    text: str
    start: float
    end: float
    confidence: float | None = None


class TranscriptionResult(BaseModel):
    transcript: str
    confidence: float = Field(ge=0, le=100)
    language: str = "es"
    duration: float | None = None
    segments: list[TranscriptSegment] | None = None


class TranscriptionSummary(BaseModel):
    length: int
    confidence: float
    language: str
    duration: float | None


class AudioUrlRequest(BaseModel):
    audio_url: str
    reference_number: str | None = None
