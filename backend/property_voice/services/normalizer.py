"""Rule-based canonicalization of Spanish real estate transcripts.

Runs before extraction so the LLM sees one spelling per concept. The rules
are applied in a fixed order (whitespace, synonyms, units and currency) and
repeated until the text stops changing, so normalizing an already
normalized transcript is a no-op.

Examples:
    "90 metros cuadrados con parking" -> "90 m² con garaje"
    "precio 150.000 euros"            -> "precio 150.000€"
"""

from __future__ import annotations

import re

# Colloquial or regional term -> canonical term. Keys are matched as whole
# phrases, case-insensitively, longest first.
TERM_SYNONYMS: dict[str, str] = {
    # Features
    "plaza de garaje": "garaje",
    "plaza de aparcamiento": "garaje",
    "parking": "garaje",
    "aparcamiento": "garaje",
    "cochera": "garaje",
    "a/c": "aire acondicionado",
    # Property types
    "apartamento": "piso",
    "flat": "piso",
    # Rooms
    "cuartos de baño": "baños",
    "cuarto de baño": "baño",
    "dormitorios": "habitaciones",
    "dormitorio": "habitación",
    "cuartos": "habitaciones",
    "aseos": "baños",
    "aseo": "baño",
    # Conditions
    "buena conservación": "buen estado",
    "para reformar": "a reformar",
    "necesita reforma": "a reformar",
    # Orientations
    "hacia el norte": "orientación norte",
    "hacia el sur": "orientación sur",
    "hacia el este": "orientación este",
    "hacia el oeste": "orientación oeste",
}


def _phrase_pattern(phrase: str) -> str:
    return r"\s+".join(re.escape(word) for word in phrase.split())


_SYNONYM_RE = re.compile(
    r"(?<!\w)(?:"
    + "|".join(
        _phrase_pattern(key) for key in sorted(TERM_SYNONYMS, key=len, reverse=True)
    )
    + r")(?!\w)",
    re.IGNORECASE,
)
_SYNONYM_LOOKUP = {" ".join(key.split()): value for key, value in TERM_SYNONYMS.items()}

_AMOUNT = r"\d+(?:[.,]\d+)*"
_MAGNITUDE = r"mil|millones"
_EURO = r"(?:euros?|eur|€)(?!\w)"

_AREA_RE = re.compile(
    rf"({_AMOUNT})\s*(?:metros?\s+cuadrados?|mts\s?2|m\s?2|m²)(?!\w)",
    re.IGNORECASE,
)
# One scan, two shapes: "150.000 euros" and "€150.000" both become
# "150.000€". A leading symbol is only moved past a complete amount that no
# currency already trails, and never when it follows a word character.
_CURRENCY_RE = re.compile(
    rf"(?P<amount>{_AMOUNT})(?:\s+(?P<magnitude>{_MAGNITUDE}))?\s*{_EURO}"
    rf"|(?<!\w)€\s*(?P<lead_amount>{_AMOUNT})"
    rf"(?:\s+(?P<lead_magnitude>{_MAGNITUDE}))?"
    rf"(?![.,]?\d|\w)(?!\s*(?:(?:{_MAGNITUDE})\s*)?{_EURO})",
    re.IGNORECASE,
)
_WHITESPACE_RE = re.compile(r"\s+")


def _replace_synonym(match: re.Match[str]) -> str:
    key = " ".join(match.group(0).lower().split())
    return _SYNONYM_LOOKUP[key]


def _replace_currency(match: re.Match[str]) -> str:
    number = match.group("amount") or match.group("lead_amount")
    magnitude = match.group("magnitude") or match.group("lead_magnitude")
    if magnitude:
        return f"{number} {magnitude.lower()}€"
    return f"{number}€"


def canonicalize_terms(text: str) -> str:
    # A replacement can complete a longer key ("plaza de parking" ->
    # "plaza de garaje"), so substitute until nothing changes. Only those
    # cascades fire after the first pass and each one shortens the text.
    while True:
        replaced = _SYNONYM_RE.sub(_replace_synonym, text)
        if replaced == text:
            return text
        text = replaced


def normalize_units(text: str) -> str:
    text = _AREA_RE.sub(r"\1 m²", text)
    return _CURRENCY_RE.sub(_replace_currency, text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_transcript(transcript: str) -> str:
    """Canonicalize terminology, units and currency in a raw transcript.

    Whitespace is collapsed first so that unit rules see the same spacing
    on a raw transcript as on an already normalized one.
    """
    text = collapse_whitespace(transcript)
    # Moving a euro sign can complete a unit ("5m €2" -> "5m 2€"), so the
    # rules run until the text is stable. A moved sign lands after a word
    # character and is never moved again; other rules only canonicalize.
    while True:
        normalized = collapse_whitespace(normalize_units(canonicalize_terms(text)))
        if normalized == text:
            return normalized
        text = normalized
