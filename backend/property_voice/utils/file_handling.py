import os

from fastapi import UploadFile

from property_voice.config import settings
from property_voice.utils.exceptions import AudioValidationError, UnsupportedAudioFormatError

ALLOWED_AUDIO_EXTENSIONS = {
    ext.strip() for ext in settings.allowed_audio_extensions.split(",")
}


def validate_audio_file(file: UploadFile) -> None:
    ext = os.path.splitext(file.filename or "")[1].lower()
    if ext not in ALLOWED_AUDIO_EXTENSIONS:
        raise UnsupportedAudioFormatError(
            f"Audio type '{ext}' not allowed. Allowed: {sorted(ALLOWED_AUDIO_EXTENSIONS)}"
        )


async def read_audio_upload(file: UploadFile) -> bytes:
    validate_audio_file(file)
    content = await file.read()
    if not content:
        raise AudioValidationError("Audio file is empty")
    if len(content) > settings.max_audio_size_mb * 1024 * 1024:
        raise AudioValidationError(
            f"Audio file exceeds {settings.max_audio_size_mb} MB"
        )
    return content
