"""Unit tests for result aggregation."""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from property_voice.schemas.extraction import ExtractedFieldResult
from property_voice.services.aggregator import aggregate_fields


def _field(db_table, db_column, value, alias="extract_test:field", field_type="number"):
    return ExtractedFieldResult(
        db_table=db_table,
        db_column=db_column,
        value=value,
        confidence=80,
        field_type=field_type,
        matched_alias=alias,
    )


class TestAggregateFields:
    def test_splits_by_table(self):
        data = aggregate_fields([
            _field("property", "bedrooms", 2),
            _field("listing", "price", 150000, field_type="decimal"),
        ])
        assert data.property == {"bedrooms": 2}
        assert data.listing == {"price": 150000}

    def test_contact_is_always_empty(self):
        assert aggregate_fields([_field("property", "bedrooms", 2)]).contact == {}

    def test_empty_input(self):
        data = aggregate_fields([])
        assert data.property == {}
        assert data.listing == {}
        assert data.contact == {}

    def test_later_category_wins_on_overlap(self):
        data = aggregate_fields([
            _field("property", "squareMeter", 90, alias="extract_a:square_meter"),
            _field("property", "squareMeter", 95, alias="extract_b:square_meter"),
        ])
        assert data.property == {"squareMeter": 95}

    def test_explicit_false_is_kept(self):
        data = aggregate_fields([
            _field("property", "hasGarage", False, field_type="boolean"),
        ])
        assert data.property == {"hasGarage": False}
        assert "hasElevator" not in data.property
