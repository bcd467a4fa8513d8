from __future__ import annotations

import logging

from property_voice.schemas.extraction import CompleteExtractedData, ExtractedFieldResult

logger = logging.getLogger(__name__)


def aggregate_fields(fields: list[ExtractedFieldResult]) -> CompleteExtractedData:
    """Merge field results into property and listing maps keyed by column.

    Fields are applied in order, so when two categories emit the same column
    the later one wins. Only mentioned fields appear in the maps.
    """
    tables: dict[str, dict] = {"property": {}, "listing": {}}
    sources: dict[tuple[str, str], str] = {}

    for field in fields:
        key = (field.db_table, field.db_column)
        if key in sources:
            logger.info(
                "Column %s.%s from %s overrides value from %s",
                field.db_table, field.db_column, field.matched_alias, sources[key],
            )
        tables[field.db_table][field.db_column] = field.value
        sources[key] = field.matched_alias

    return CompleteExtractedData(
        property=tables["property"], listing=tables["listing"], contact={}
    )
