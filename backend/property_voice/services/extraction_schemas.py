"""Extraction categories and the map from category fields to columns.

Categories are plain data consumed by a uniform loop in the orchestrator;
adding one means adding a schema here plus its column map entry.
"""

from __future__ import annotations

import logging

from property_voice.schemas.extraction import ExtractionSchema, FieldSpec
from property_voice.services.field_registry import (
    AIR_CONDITIONING_TYPES,
    HEATING_TYPES,
    LISTING_TYPES,
    ORIENTATIONS,
    get_field_mapping,
)
from property_voice.utils.exceptions import FieldMappingConfigError

logger = logging.getLogger(__name__)

_ONLY_IF_MENTIONED = " - ONLY include if explicitly mentioned"


def _flag(name: str, description: str) -> FieldSpec:
    return FieldSpec(name=name, type="boolean", description=description + _ONLY_IF_MENTIONED)


BASIC_PROPERTY_INFO = ExtractionSchema(
    name="extract_basic_property_info",
    description="Extract basic property information like type, size, rooms, and location",
    fields=[
        FieldSpec(
            name="property_type",
            type="string",
            description=(
                "Type of property (piso, casa, chalet, apartamento, local, "
                "garaje, estudio, loft, dúplex, ático)"
            ),
        ),
        FieldSpec(
            name="bedrooms", type="integer", minimum=0, maximum=10,
            description="Number of bedrooms/habitaciones",
        ),
        FieldSpec(
            name="bathrooms", type="number", minimum=0, maximum=10,
            description="Number of bathrooms/baños (can be decimal like 1.5)",
        ),
        FieldSpec(
            name="square_meter", type="number", minimum=1, maximum=10000,
            description="Total square meters/metros cuadrados/m²",
        ),
        FieldSpec(
            name="year_built", type="integer", minimum=1800, maximum=2030,
            description="Year the property was built",
        ),
        FieldSpec(
            name="street", type="string",
            description="Street address/calle where the property is located",
        ),
        FieldSpec(
            name="postal_code", type="string", pattern=r"^\d{5}$",
            description="5-digit postal code",
        ),
        FieldSpec(name="city", type="string", description="City/ciudad name"),
        FieldSpec(name="province", type="string", description="Province/provincia name"),
        FieldSpec(
            name="orientation", type="string", enum=list(ORIENTATIONS),
            description="Property orientation",
        ),
    ],
)

LISTING_DETAILS = ExtractionSchema(
    name="extract_listing_details",
    description="Extract listing information like price, operation type, and availability",
    fields=[
        FieldSpec(
            name="listing_type", type="string", enum=list(LISTING_TYPES),
            description=(
                "Type of listing operation (Sale=venta, Rent=alquiler, "
                "RentWithOption=alquiler con opción a compra, Transfer=traspaso, "
                "RoomSharing=compartir habitación)"
            ),
        ),
        FieldSpec(
            name="price", type="number", minimum=0,
            description="Price in euros (remove currency symbols)",
        ),
        _flag("is_furnished", "Whether the property comes furnished/amueblado"),
        _flag("has_keys", "Whether keys are available/con llaves"),
        _flag("pets_allowed", "Whether pets are allowed/mascotas permitidas"),
        _flag("student_friendly", "Whether suitable for students/para estudiantes"),
        _flag("internet", "Whether internet/WiFi is included"),
    ],
)

PROPERTY_FEATURES = ExtractionSchema(
    name="extract_property_features",
    description="Extract property features and amenities like elevator, garage, pool, etc.",
    fields=[
        _flag("has_elevator", "Whether the property has elevator/ascensor"),
        _flag("has_garage", "Whether the property has garage/garaje"),
        _flag("has_storage_room", "Whether the property has storage room/trastero"),
        _flag("terrace", "Whether the property has terrace/terraza"),
        _flag("community_pool", "Whether the property has community pool/piscina comunitaria"),
        _flag("private_pool", "Whether the property has private pool/piscina privada"),
        _flag("garden", "Whether the property has garden/jardín"),
        FieldSpec(
            name="air_conditioning_type", type="string",
            enum=list(AIR_CONDITIONING_TYPES),
            description="Type of air conditioning/aire acondicionado",
        ),
        FieldSpec(
            name="heating_type", type="string", enum=list(HEATING_TYPES),
            description="Type of heating/calefacción",
        ),
        FieldSpec(
            name="energy_consumption_scale", type="string",
            enum=["A", "B", "C", "D", "E", "F", "G"],
            description="Energy efficiency rating/certificado energético",
        ),
        FieldSpec(
            name="conservation_status", type="integer", enum=[1, 2, 3, 4, 6],
            description=(
                "Property conservation status (1=excelente, 2=bueno, "
                "3=regular, 4=malo, 6=obra nueva)"
            ),
        ),
    ],
)

APPLIANCES_AMENITIES = ExtractionSchema(
    name="extract_appliances_amenities",
    description="Extract information about appliances and additional amenities",
    fields=[
        _flag("oven", "Whether the property has oven/horno"),
        _flag("microwave", "Whether the property has microwave/microondas"),
        _flag("washing_machine", "Whether the property has washing machine/lavadora"),
        _flag("fridge", "Whether the property has fridge/frigorífico"),
        _flag("tv", "Whether the property has TV/televisión"),
        _flag("dishwasher", "Whether the property has dishwasher/lavavajillas"),
        _flag("stoneware", "Whether dishes/vajilla are included"),
        _flag("appliances_included", "Whether appliances/electrodomésticos are included"),
    ],
)

# Processing order matters: on an overlapping column the later category wins.
EXTRACTION_SCHEMAS: list[ExtractionSchema] = [
    BASIC_PROPERTY_INFO,
    LISTING_DETAILS,
    PROPERTY_FEATURES,
    APPLIANCES_AMENITIES,
]

# category -> field -> (db_table, db_column)
CATEGORY_FIELD_MAP: dict[str, dict[str, tuple[str, str]]] = {
    "extract_basic_property_info": {
        "property_type": ("property", "propertyType"),
        "bedrooms": ("property", "bedrooms"),
        "bathrooms": ("property", "bathrooms"),
        "square_meter": ("property", "squareMeter"),
        "year_built": ("property", "yearBuilt"),
        "street": ("property", "street"),
        "postal_code": ("property", "postalCode"),
        "city": ("property", "extractedCity"),
        "province": ("property", "extractedProvince"),
        "orientation": ("property", "orientation"),
    },
    "extract_listing_details": {
        "listing_type": ("listing", "listingType"),
        "price": ("listing", "price"),
        "is_furnished": ("listing", "isFurnished"),
        "has_keys": ("listing", "hasKeys"),
        "pets_allowed": ("listing", "petsAllowed"),
        "student_friendly": ("listing", "studentFriendly"),
        "internet": ("listing", "internet"),
    },
    "extract_property_features": {
        "has_elevator": ("property", "hasElevator"),
        "has_garage": ("property", "hasGarage"),
        "has_storage_room": ("property", "hasStorageRoom"),
        "terrace": ("property", "terrace"),
        "community_pool": ("property", "communityPool"),
        "private_pool": ("property", "privatePool"),
        "garden": ("property", "garden"),
        "air_conditioning_type": ("property", "airConditioningType"),
        "heating_type": ("property", "heatingType"),
        "energy_consumption_scale": ("property", "energyConsumptionScale"),
        "conservation_status": ("property", "conservationStatus"),
    },
    "extract_appliances_amenities": {
        "oven": ("listing", "oven"),
        "microwave": ("listing", "microwave"),
        "washing_machine": ("listing", "washingMachine"),
        "fridge": ("listing", "fridge"),
        "tv": ("listing", "tv"),
        "dishwasher": ("listing", "dishwasher"),
        "stoneware": ("listing", "stoneware"),
        "appliances_included": ("listing", "appliancesIncluded"),
    },
}


def validate_category_mappings(
    schemas: list[ExtractionSchema] | None = None,
    category_map: dict[str, dict[str, tuple[str, str]]] | None = None,
) -> None:
    """Fail fast if any schema field cannot reach a registry column.

    Raises:
        FieldMappingConfigError: listing every unresolved field.
    """
    schemas = EXTRACTION_SCHEMAS if schemas is None else schemas
    category_map = CATEGORY_FIELD_MAP if category_map is None else category_map

    problems: list[str] = []
    for schema in schemas:
        columns = category_map.get(schema.name)
        if columns is None:
            problems.append(f"{schema.name}: no column map")
            continue
        for field_name in schema.field_names:
            target = columns.get(field_name)
            if target is None:
                problems.append(f"{schema.name}:{field_name}: no column mapping")
            elif get_field_mapping(*target) is None:
                problems.append(
                    f"{schema.name}:{field_name}: unknown column {target[0]}.{target[1]}"
                )

    if problems:
        raise FieldMappingConfigError(
            "Invalid extraction category mappings: " + "; ".join(problems)
        )
    logger.info(
        "Validated %d extraction categories against the field registry", len(schemas)
    )
