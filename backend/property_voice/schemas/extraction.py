from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from property_voice.schemas.transcription import (
    TranscriptionResult,
    TranscriptionSummary,
)

DbTable = Literal["property", "listing"]
FieldType = Literal["string", "number", "decimal", "boolean"]

# Metadata every category call must return alongside its fields.
ORIGINAL_TEXT_KEY = "original_text"
CONFIDENCE_KEY = "confidence"
METADATA_KEYS = frozenset({ORIGINAL_TEXT_KEY, CONFIDENCE_KEY})


class FieldSpec(BaseModel):
    name: str
    type: Literal["boolean", "integer", "number", "string"]
    description: str
    minimum: float | None = None
    maximum: float | None = None
    enum: list[str | int] | None = None
    pattern: str | None = None

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type, "description": self.description}
        for constraint in ("minimum", "maximum", "enum", "pattern"):
            value = getattr(self, constraint)
            if value is not None:
                schema[constraint] = value
        return schema


class ExtractionSchema(BaseModel):
    """A named category of fields requested in one extraction call."""

    name: str
    description: str
    fields: list[FieldSpec]

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]

    def to_parameters(self) -> dict[str, Any]:
        """JSON Schema for the call arguments.

        Only the metadata is required: a domain field the speaker never
        mentioned must be left out, not filled with ``false`` or ``0``.
        """
        properties = {field.name: field.to_json_schema() for field in self.fields}
        properties[ORIGINAL_TEXT_KEY] = {
            "type": "string",
            "description": "Original text snippet where this information was found",
        }
        properties[CONFIDENCE_KEY] = {
            "type": "integer",
            "minimum": 1,
            "maximum": 100,
            "description": "Confidence level (1-100)",
        }
        return {
            "type": "object",
            "properties": properties,
            "required": [ORIGINAL_TEXT_KEY, CONFIDENCE_KEY],
        }

    def to_function_definition(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.to_parameters(),
        }


class ExtractedFieldResult(BaseModel):
    db_table: DbTable
    db_column: str
    value: str | int | float | bool
    original_text: str = ""
    confidence: float = Field(ge=0, le=100)
    extraction_source: str = "llm_function_calling"
    field_type: FieldType
    matched_alias: str


class CompleteExtractedData(BaseModel):
    property: dict[str, Any] = {}
    listing: dict[str, Any] = {}
    # Reserved: voice extraction never fills contact data.
    contact: dict[str, Any] = {}


class VoiceExtractionResult(BaseModel):
    extracted_fields: list[ExtractedFieldResult]
    property_data: dict[str, Any]
    listing_data: dict[str, Any]
    complete_data: CompleteExtractedData
    categories_attempted: list[str] = []
    categories_succeeded: list[str] = []


class ExtractionStats(BaseModel):
    total_fields: int
    property_fields: int
    listing_fields: int
    average_confidence: float
    categories_attempted: int
    categories_succeeded: int
    llm_provider: str
    llm_model: str


class VoiceProcessingResponse(BaseModel):
    success: bool = True
    reference_number: str | None = None
    property_data: dict[str, Any]
    listing_data: dict[str, Any]
    complete_data: CompleteExtractedData
    extracted_fields: list[ExtractedFieldResult]
    transcription: TranscriptionResult
    stats: ExtractionStats
    transcription_summary: TranscriptionSummary
