"""Tests for the declarative extraction categories."""

from __future__ import annotations

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from property_voice.schemas.extraction import ExtractionSchema, FieldSpec
from property_voice.services.extraction_schemas import (
    CATEGORY_FIELD_MAP,
    EXTRACTION_SCHEMAS,
    LISTING_DETAILS,
    validate_category_mappings,
)
from property_voice.utils.exceptions import FieldMappingConfigError


class TestSchemaDefinitions:
    def test_only_metadata_is_required(self):
        for schema in EXTRACTION_SCHEMAS:
            params = schema.to_parameters()
            assert params["required"] == ["original_text", "confidence"]
            assert set(schema.field_names) <= set(params["properties"])

    def test_confidence_domain_is_declared(self):
        confidence = LISTING_DETAILS.to_parameters()["properties"]["confidence"]
        assert confidence["minimum"] == 1
        assert confidence["maximum"] == 100

    def test_field_constraints_are_rendered(self):
        schema = ExtractionSchema(
            name="extract_test",
            description="test",
            fields=[
                FieldSpec(name="bedrooms", type="integer", minimum=0, maximum=10,
                          description="rooms"),
                FieldSpec(name="city", type="string", description="city"),
            ],
        )
        properties = schema.to_function_definition()["parameters"]["properties"]
        assert properties["bedrooms"] == {
            "type": "integer", "description": "rooms", "minimum": 0, "maximum": 10,
        }
        assert properties["city"] == {"type": "string", "description": "city"}

    def test_schema_names_are_unique(self):
        names = [schema.name for schema in EXTRACTION_SCHEMAS]
        assert len(names) == len(set(names))


class TestValidateCategoryMappings:
    def test_shipped_configuration_is_valid(self):
        validate_category_mappings()

    def test_every_schema_field_has_a_column(self):
        for schema in EXTRACTION_SCHEMAS:
            assert set(schema.field_names) == set(CATEGORY_FIELD_MAP[schema.name])

    def test_missing_field_mapping_fails_fast(self):
        schema = ExtractionSchema(
            name="extract_test",
            description="test",
            fields=[FieldSpec(name="sauna", type="boolean", description="sauna")],
        )
        with pytest.raises(FieldMappingConfigError, match="extract_test:sauna"):
            validate_category_mappings([schema], {"extract_test": {}})

    def test_unknown_registry_column_fails_fast(self):
        schema = ExtractionSchema(
            name="extract_test",
            description="test",
            fields=[FieldSpec(name="sauna", type="boolean", description="sauna")],
        )
        with pytest.raises(FieldMappingConfigError, match="property.sauna"):
            validate_category_mappings(
                [schema], {"extract_test": {"sauna": ("property", "sauna")}}
            )

    def test_missing_category_fails_fast(self):
        with pytest.raises(FieldMappingConfigError, match="no column map"):
            validate_category_mappings([LISTING_DETAILS], {})
