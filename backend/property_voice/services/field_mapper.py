"""Turn one category's raw extraction output into typed field results."""

from __future__ import annotations

import logging
from typing import Any

from property_voice.schemas.extraction import (
    CONFIDENCE_KEY,
    METADATA_KEYS,
    ORIGINAL_TEXT_KEY,
    ExtractedFieldResult,
)
from property_voice.services.confidence import combine_confidence
from property_voice.services.extraction_schemas import CATEGORY_FIELD_MAP
from property_voice.services.field_registry import get_field_mapping
from property_voice.utils.exceptions import InvalidConfidenceError

logger = logging.getLogger(__name__)

EXTRACTION_SOURCE = "llm_function_calling"

_SCALAR_TYPES = (str, int, float, bool)


def map_category_fields(
    schema_name: str,
    raw: dict[str, Any],
    transcript_confidence: float,
    category_map: dict[str, dict[str, tuple[str, str]]] | None = None,
) -> list[ExtractedFieldResult]:
    """Validate, convert and map every field of one category's output.

    Unknown keys, unknown registry columns and values failing validation are
    dropped with a warning. A converter error keeps the raw value.
    """
    category_map = CATEGORY_FIELD_MAP if category_map is None else category_map
    columns = category_map.get(schema_name)
    if columns is None:
        logger.warning("No field mapping found for category %s", schema_name)
        return []

    reported = raw.get(CONFIDENCE_KEY)
    try:
        confidence = combine_confidence(reported, transcript_confidence)
    except (InvalidConfidenceError, TypeError) as e:
        logger.warning("Rejecting all fields of %s: %s", schema_name, e)
        return []

    original_text = raw.get(ORIGINAL_TEXT_KEY) or ""
    results: list[ExtractedFieldResult] = []

    for key, value in raw.items():
        # None means the field was not mentioned.
        if key in METADATA_KEYS or value is None:
            continue

        target = columns.get(key)
        if target is None:
            logger.warning("No mapping found for field %s:%s", schema_name, key)
            continue

        db_table, db_column = target
        mapping = get_field_mapping(db_table, db_column)
        if mapping is None:
            logger.warning("Unknown field mapping: %s.%s", db_table, db_column)
            continue

        if not isinstance(value, _SCALAR_TYPES):
            logger.warning(
                "Invalid value type for %s: %s", db_column, type(value).__name__
            )
            continue

        if mapping.validation and not mapping.validation(value):
            logger.warning("Validation failed for %s: %r", db_column, value)
            continue

        converted = value
        if mapping.converter:
            try:
                converted = mapping.converter(value)
            except Exception:
                logger.warning(
                    "Conversion failed for %s: %r, keeping raw value", db_column, value
                )
                converted = value

        results.append(
            ExtractedFieldResult(
                db_table=db_table,
                db_column=db_column,
                value=converted,
                original_text=str(original_text),
                confidence=confidence,
                extraction_source=EXTRACTION_SOURCE,
                field_type=mapping.data_type,
                matched_alias=f"{schema_name}:{key}",
            )
        )
        logger.debug(
            "%s: %s = %r (%.1f%% confidence)", schema_name, db_column, converted, confidence
        )

    return results
