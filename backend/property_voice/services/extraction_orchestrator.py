"""Run every extraction category against one transcript.

Categories are processed one after another. Each call is bounded by
``settings.extraction_timeout_seconds``; an exception, timeout or
non-object response only costs that category its fields. Cancellation is
not caught, so an aborted request never yields a partial result.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, NamedTuple

from property_voice.config import settings

if TYPE_CHECKING:
    from property_voice.llm.base import LLMProvider
    from property_voice.schemas.extraction import ExtractionSchema

logger = logging.getLogger(__name__)


class CategoryExtraction(NamedTuple):
    schema_name: str
    raw: dict[str, Any]


async def extract_single_category(
    transcript: str,
    schema: ExtractionSchema,
    llm: LLMProvider,
    *,
    timeout: float,
) -> CategoryExtraction | None:
    """Return the category's raw output, or None if the call failed."""
    try:
        raw = await asyncio.wait_for(
            llm.extract_category(transcript, schema), timeout=timeout
        )
    except asyncio.TimeoutError:
        logger.error("Extraction for %s timed out after %.1fs", schema.name, timeout)
        return None
    except Exception:
        logger.exception("Error executing extraction for %s", schema.name)
        return None

    if not isinstance(raw, dict):
        logger.error(
            "Extraction for %s returned %s instead of an object",
            schema.name, type(raw).__name__,
        )
        return None

    logger.info("Extraction for %s returned %d keys", schema.name, len(raw))
    return CategoryExtraction(schema.name, raw)


async def collect_raw_extractions(
    transcript: str,
    schemas: list[ExtractionSchema],
    llm: LLMProvider,
    *,
    timeout: float | None = None,
) -> list[CategoryExtraction]:
    """Extract every category in order, skipping the ones that fail."""
    timeout = settings.extraction_timeout_seconds if timeout is None else timeout
    results: list[CategoryExtraction] = []
    for schema in schemas:
        extraction = await extract_single_category(
            transcript, schema, llm, timeout=timeout
        )
        if extraction is not None:
            results.append(extraction)

    logger.info(
        "Multi-category extraction completed: %d/%d categories succeeded",
        len(results), len(schemas),
    )
    return results
