"""Exceptions raised by the voice extraction pipeline.

Fatal precondition errors (audio, transcription, transcript quality) abort a
request. ``ExtractionError`` is raised by the LLM adapters for a single
category and is recovered by the orchestrator.
"""


class VoiceProcessingError(Exception):
    """Base exception for the voice processing pipeline."""


class AudioValidationError(VoiceProcessingError):
    """The uploaded audio is empty, too large or otherwise unusable."""


class UnsupportedAudioFormatError(AudioValidationError):
    pass


class AudioFetchError(VoiceProcessingError):
    """The audio could not be downloaded from its locator."""


class TranscriptionError(VoiceProcessingError):
    """The speech-to-text service failed."""


class TranscriptQualityError(VoiceProcessingError):
    """The transcript did not pass the quality gate."""


class TranscriptTooShortError(TranscriptQualityError):
    pass


class LowTranscriptConfidenceError(TranscriptQualityError):
    pass


class ExtractionError(VoiceProcessingError):
    """The structured-extraction capability returned no usable result."""


class FieldMappingConfigError(VoiceProcessingError):
    """A category field does not resolve to a registry column."""


class InvalidConfidenceError(ValueError):
    pass
