from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Voice Property Extraction"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000"

    llm_provider: Literal["claude", "openai"] = "openai"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    llm_temperature: float = 0.1
    llm_max_tokens: int = 1500

    # Speech-to-text (OpenAI Whisper)
    whisper_model: str = "whisper-1"
    transcription_language: str = "es"
    transcription_temperature: float = 0.05

    # Each category call is bounded; a timeout counts as a failed category.
    extraction_timeout_seconds: float = 30.0
    default_field_confidence: float = 80.0

    min_transcript_length: int = 10
    min_transcript_confidence: float = 10.0
    low_transcript_confidence_warning: float = 50.0

    max_audio_size_mb: int = 25
    allowed_audio_extensions: str = ".webm,.mp3,.mp4,.m4a,.wav,.ogg,.mpeg,.mpga"

    model_config = {"env_file": ".env"}


settings = Settings()
