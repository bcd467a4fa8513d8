"""Canonical field mapping registry for property and listing columns.

Each entry describes one ``(db_table, db_column)`` pair: its runtime type,
an optional validation predicate (a hard gate) and an optional converter
(best effort). The registry is shared with other ingestion pipelines and is
read-only at runtime.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from property_voice.schemas.extraction import DbTable, FieldType

Validator = Callable[[Any], bool]
Converter = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldMapping:
    db_table: DbTable
    db_column: str
    data_type: FieldType
    validation: Validator | None = None
    converter: Converter | None = None
    aliases: tuple[str, ...] = field(default_factory=tuple)
    category: str = ""


# ── Validators ─────────────────────────────────────────────────────────────

_TRUE_TOKENS = {"sí", "si", "yes", "true", "1", "x", "✓", "tiene", "incluye", "con"}
_FALSE_TOKENS = {"no", "false", "0", "sin", "ninguno", "ninguna", "no tiene"}


def _as_number(value: Any) -> float | None:
    """Parse a plain numeric value; booleans are not numbers here."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().replace(",", "."))
        except ValueError:
            return None
    else:
        return None
    # "inf" and "nan" parse as floats but are never valid measurements.
    return number if math.isfinite(number) else None


def is_positive_number(value: Any) -> bool:
    number = _as_number(value)
    return number is not None and number > 0


def is_year(value: Any) -> bool:
    number = _as_number(value)
    return (
        number is not None
        and number.is_integer()
        and 1800 <= number <= date.today().year + 5
    )


def is_bedroom_count(value: Any) -> bool:
    number = _as_number(value)
    return number is not None and number.is_integer() and 0 <= number <= 10


def is_bathroom_count(value: Any) -> bool:
    number = _as_number(value)
    return number is not None and 0 <= number <= 10


def is_conservation_status(value: Any) -> bool:
    number = _as_number(value)
    return number is not None and number in (1, 2, 3, 4, 6)


def is_energy_scale(value: Any) -> bool:
    return isinstance(value, str) and re.fullmatch(r"[A-G]", value.strip(), re.I) is not None


def is_postal_code(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return re.fullmatch(r"\d{5}", str(value).strip()) is not None


def is_price(value: Any) -> bool:
    try:
        return to_price(value) > 0
    except (TypeError, ValueError):
        return False


def is_boolean_like(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, str):
        token = value.strip().lower()
        return token in _TRUE_TOKENS or token in _FALSE_TOKENS
    return False


def one_of(*choices: str) -> Validator:
    """Case-insensitive enum membership check."""
    allowed = {choice.lower() for choice in choices}

    def _validate(value: Any) -> bool:
        return isinstance(value, str) and value.strip().lower() in allowed

    return _validate


# ── Converters ─────────────────────────────────────────────────────────────


def _integral(number: float) -> int | float:
    if not math.isfinite(number):
        raise ValueError(f"Not a finite number: {number!r}")
    return int(number) if number.is_integer() else number


def to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        raise TypeError("Boolean is not a number")
    if isinstance(value, (int, float)):
        return _integral(float(value))
    cleaned = re.sub(r"[^\d.,-]", "", str(value)).replace(",", ".")
    return _integral(float(cleaned))


def to_price(value: Any) -> int | float:
    """Parse a euro amount, honouring Spanish separators.

    Examples:
        "150.000"     -> 150000
        "€1.250,50"   -> 1250.5
        "95000"       -> 95000
        "1,5"         -> 1.5
    """
    if isinstance(value, bool):
        raise TypeError("Boolean is not a price")
    if isinstance(value, (int, float)):
        return _integral(float(value))

    text = re.sub(r"[€$\s]|euros?", "", str(value), flags=re.I)
    if "." in text and "," in text:
        text = text.replace(".", "").replace(",", ".")
    elif re.fullmatch(r"\d{1,3}(\.\d{3})+", text):
        text = text.replace(".", "")
    elif re.fullmatch(r"\d{1,3}(,\d{3})+", text):
        text = text.replace(",", "")
    else:
        text = text.replace(",", ".")
    return _integral(float(text))


def to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    token = str(value).strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


def to_upper(value: Any) -> str:
    return str(value).strip().upper()


def to_lower(value: Any) -> str:
    return str(value).strip().lower()


_STREET_TYPES: dict[str, str] = {
    "c/": "Calle",
    "cl": "Calle",
    "calle": "Calle",
    "av/": "Avenida",
    "av": "Avenida",
    "avda": "Avenida",
    "avenida": "Avenida",
    "pl/": "Plaza",
    "pl": "Plaza",
    "plaza": "Plaza",
    "ps/": "Paseo",
    "ps": "Paseo",
    "paseo": "Paseo",
    "cr/": "Carrera",
    "cr": "Carrera",
    "carrera": "Carrera",
    "tr/": "Travesía",
    "tr": "Travesía",
    "travesia": "Travesía",
    "travesía": "Travesía",
    "ct/": "Cuesta",
    "ct": "Cuesta",
    "cuesta": "Cuesta",
    "cm/": "Camino",
    "cm": "Camino",
    "camino": "Camino",
    "rd/": "Ronda",
    "rd": "Ronda",
    "ronda": "Ronda",
}
_STREET_TYPE_RE = re.compile(
    r"^("
    + "|".join(re.escape(key) for key in sorted(_STREET_TYPES, key=len, reverse=True))
    + r")\.?\s+",
    re.IGNORECASE,
)
# Street name, then the portal number; trailing floor/door numbers are dropped.
_STREET_NUMBER_RE = re.compile(r"^([^0-9]+?)[\s,]*(\d+)(?:[\s:,º/-]+.*)?$")


def _title(words: str) -> str:
    return " ".join(word.capitalize() for word in words.lower().split())


def standardize_spanish_address(value: Any) -> str:
    """Standardize a Spanish street address.

    Examples:
        "c/ mayor 12"        -> "Calle Mayor, 12"
        "avda. de la paz 3"  -> "Avenida De La Paz, 3"
        "gran via 4:6"       -> "Calle Gran Via, 4"
    """
    address = str(value).strip()
    if not address:
        return address

    street_type = ""
    rest = address
    type_match = _STREET_TYPE_RE.match(address)
    if type_match:
        street_type = _STREET_TYPES[type_match.group(1).lower()]
        rest = address[type_match.end():]

    number_match = _STREET_NUMBER_RE.match(rest)
    if number_match:
        name, portal = number_match.group(1).strip(), number_match.group(2)
        return f"{street_type or 'Calle'} {_title(name)}, {portal}"
    if street_type:
        return f"{street_type} {_title(rest)}"
    return _title(address)


# ── Registry ───────────────────────────────────────────────────────────────

ORIENTATIONS = (
    "norte", "sur", "este", "oeste", "noreste", "noroeste", "sureste", "suroeste",
)
LISTING_TYPES = ("Sale", "Rent", "RentWithOption", "Transfer", "RoomSharing")
AIR_CONDITIONING_TYPES = ("individual", "centralizado", "no")
HEATING_TYPES = ("individual", "centralizado", "gas", "eléctrico", "no")


def _flag(db_table: DbTable, db_column: str, *aliases: str, category: str) -> FieldMapping:
    return FieldMapping(
        db_table=db_table,
        db_column=db_column,
        data_type="boolean",
        validation=is_boolean_like,
        converter=to_boolean,
        aliases=aliases,
        category=category,
    )


def _listing_type(value: Any) -> str:
    lookup = {choice.lower(): choice for choice in LISTING_TYPES}
    return lookup[str(value).strip().lower()]


PROPERTY_FIELD_MAPPINGS: list[FieldMapping] = [
    FieldMapping(
        "property", "propertyType", "string",
        converter=to_lower,
        aliases=("tipo", "tipo de vivienda", "tipo propiedad"),
        category="basic",
    ),
    FieldMapping(
        "property", "description", "string",
        aliases=("descripción", "detalles", "observaciones"),
        category="basic",
    ),
    FieldMapping(
        "property", "bedrooms", "number",
        validation=is_bedroom_count, converter=to_number,
        aliases=("dormitorios", "habitaciones", "cuartos"),
        category="specifications",
    ),
    FieldMapping(
        "property", "bathrooms", "decimal",
        validation=is_bathroom_count, converter=to_number,
        aliases=("baños", "aseos", "cuartos de baño"),
        category="specifications",
    ),
    FieldMapping(
        "property", "squareMeter", "number",
        validation=is_positive_number, converter=to_number,
        aliases=("superficie", "metros cuadrados", "m2", "m²"),
        category="specifications",
    ),
    FieldMapping(
        "property", "builtSurfaceArea", "decimal",
        validation=is_positive_number, converter=to_number,
        aliases=("superficie construida", "metros construidos"),
        category="specifications",
    ),
    FieldMapping(
        "property", "yearBuilt", "number",
        validation=is_year, converter=to_number,
        aliases=("año construcción", "construido"),
        category="specifications",
    ),
    FieldMapping(
        "property", "conservationStatus", "number",
        validation=is_conservation_status, converter=to_number,
        aliases=("estado conservación", "estado"),
        category="specifications",
    ),
    FieldMapping(
        "property", "cadastralReference", "string",
        converter=to_upper,
        aliases=("referencia catastral", "catastro"),
        category="specifications",
    ),
    FieldMapping(
        "property", "street", "string",
        converter=standardize_spanish_address,
        aliases=("dirección", "calle", "avenida", "domicilio"),
        category="location",
    ),
    FieldMapping(
        "property", "postalCode", "string",
        validation=is_postal_code, converter=lambda value: str(value).strip(),
        aliases=("código postal", "cp"),
        category="location",
    ),
    # Resolved to a location record by the consumer, not stored as-is.
    FieldMapping(
        "property", "extractedCity", "string",
        converter=to_upper, aliases=("ciudad", "localidad"), category="location",
    ),
    FieldMapping(
        "property", "extractedProvince", "string",
        converter=to_upper, aliases=("provincia",), category="location",
    ),
    FieldMapping(
        "property", "orientation", "string",
        validation=one_of(*ORIENTATIONS), converter=to_lower,
        aliases=("orientación", "orientado"),
        category="interior",
    ),
    FieldMapping(
        "property", "energyConsumptionScale", "string",
        validation=is_energy_scale, converter=to_upper,
        aliases=("certificado energético", "calificación energética"),
        category="energy",
    ),
    FieldMapping(
        "property", "heatingType", "string",
        validation=one_of(*HEATING_TYPES), converter=to_lower,
        aliases=("tipo calefacción", "calefacción"),
        category="energy",
    ),
    FieldMapping(
        "property", "airConditioningType", "string",
        validation=one_of(*AIR_CONDITIONING_TYPES), converter=to_lower,
        aliases=("aire acondicionado", "climatización"),
        category="interior",
    ),
    _flag("property", "hasHeating", "calefacción", category="energy"),
    _flag("property", "hasElevator", "ascensor", category="amenities"),
    _flag("property", "hasGarage", "garaje", "aparcamiento", "parking", category="amenities"),
    _flag("property", "hasStorageRoom", "trastero", category="amenities"),
    _flag("property", "terrace", "terraza", category="amenities"),
    _flag("property", "communityPool", "piscina comunitaria", category="amenities"),
    _flag("property", "privatePool", "piscina privada", category="amenities"),
    _flag("property", "garden", "jardín", category="amenities"),
    _flag("property", "exterior", "exterior", category="views"),
    _flag("property", "bright", "luminoso", category="views"),
]

LISTING_FIELD_MAPPINGS: list[FieldMapping] = [
    FieldMapping(
        "listing", "listingType", "string",
        validation=one_of(*LISTING_TYPES), converter=_listing_type,
        aliases=("tipo operación", "venta", "alquiler"),
        category="listing",
    ),
    FieldMapping(
        "listing", "price", "decimal",
        validation=is_price, converter=to_price,
        aliases=("precio", "valor", "importe"),
        category="listing",
    ),
    _flag("listing", "isFurnished", "amueblado", "muebles", category="listing"),
    _flag("listing", "hasKeys", "llaves", category="listing"),
    _flag("listing", "petsAllowed", "mascotas", category="listing"),
    _flag("listing", "studentFriendly", "estudiantes", category="listing"),
    _flag("listing", "appliancesIncluded", "electrodomésticos", category="listing"),
    _flag("listing", "internet", "internet", "wifi", "fibra", category="appliances"),
    _flag("listing", "oven", "horno", category="appliances"),
    _flag("listing", "microwave", "microondas", category="appliances"),
    _flag("listing", "washingMachine", "lavadora", category="appliances"),
    _flag("listing", "fridge", "frigorífico", "nevera", category="appliances"),
    _flag("listing", "tv", "televisión", "tv", category="appliances"),
    _flag("listing", "dishwasher", "lavavajillas", category="appliances"),
    _flag("listing", "stoneware", "vajilla", "menaje", category="appliances"),
    _flag("listing", "optionalGarage", "garaje opcional", category="optional"),
    FieldMapping(
        "listing", "optionalGaragePrice", "decimal",
        validation=is_price, converter=to_price,
        aliases=("precio garaje",),
        category="optional",
    ),
]

ALL_FIELD_MAPPINGS: list[FieldMapping] = [
    *PROPERTY_FIELD_MAPPINGS,
    *LISTING_FIELD_MAPPINGS,
]

_BY_COLUMN: dict[tuple[str, str], FieldMapping] = {
    (mapping.db_table, mapping.db_column): mapping for mapping in ALL_FIELD_MAPPINGS
}


def get_field_mapping(db_table: str, db_column: str) -> FieldMapping | None:
    return _BY_COLUMN.get((db_table, db_column))


def get_field_mappings_by_category(category: str) -> list[FieldMapping]:
    return [mapping for mapping in ALL_FIELD_MAPPINGS if mapping.category == category]
