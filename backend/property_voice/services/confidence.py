from __future__ import annotations

from property_voice.config import settings
from property_voice.utils.exceptions import InvalidConfidenceError


def combine_confidence(
    field_confidence: float | None, transcript_confidence: float
) -> float:
    """Scale a field's self-reported confidence by transcript quality.

    The result never exceeds ``field_confidence``: a noisy transcript can
    only lower it. ``field_confidence`` defaults to
    ``settings.default_field_confidence`` when the category did not report one.

    Raises:
        InvalidConfidenceError: field confidence outside 1-100 or transcript
            confidence outside 0-100.
    """
    if field_confidence is None:
        field_confidence = settings.default_field_confidence
    if isinstance(field_confidence, bool) or not 1 <= field_confidence <= 100:
        raise InvalidConfidenceError(
            f"Field confidence must be within 1-100, got {field_confidence!r}"
        )
    if isinstance(transcript_confidence, bool) or not 0 <= transcript_confidence <= 100:
        raise InvalidConfidenceError(
            f"Transcript confidence must be within 0-100, got {transcript_confidence!r}"
        )
    return min(field_confidence, field_confidence * (transcript_confidence / 100))
