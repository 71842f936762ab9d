"""
Pure functions turning raw PokeAPI JSON fragments into domain fragments.

None of these functions touch the network or the store; a missing or
malformed fragment yields an empty result rather than an error.
"""
from typing import Any

from pokecenter.models import Description, Stats, TypeRef
from pokecenter.translator import TypeTranslator

ENGLISH = "en"

# PokeAPI stat name -> Stats field
STAT_FIELDS = {
    "hp": "hp",
    "attack": "attack",
    "defense": "defense",
    "speed": "speed",
    "special-attack": "special_attack",
    "special-defense": "special_defense",
}


def _name_of(entry: Any, key: str) -> str | None:
    """Reads entry[key]['name'], tolerating missing or non-dict nodes."""
    if not isinstance(entry, dict):
        return None
    node = entry.get(key)
    if not isinstance(node, dict):
        return None
    name = node.get("name")
    return name if isinstance(name, str) else None


def _language_of(entry: Any) -> str | None:
    return _name_of(entry, "language")


def extract_types(types: Any, translator: TypeTranslator) -> list[TypeRef]:
    """One TypeRef per entry, in source order. Duplicates are kept."""
    if not isinstance(types, list):
        return []
    result = []
    for entry in types:
        code = _name_of(entry, "type") or ""
        localized = translator.translate(code)
        result.append(TypeRef(name=localized, name_en=code, name_localized=localized))
    return result


def extract_stats(stats: Any) -> Stats:
    values = {}
    if isinstance(stats, list):
        for entry in stats:
            field = STAT_FIELDS.get(_name_of(entry, "stat"))
            base = entry.get("base_stat") if isinstance(entry, dict) else None
            if field and isinstance(base, int):
                values[field] = base
    return Stats(**values)


def extract_abilities(abilities: Any) -> list[str]:
    if not isinstance(abilities, list):
        return []
    names = (_name_of(entry, "ability") for entry in abilities)
    return [name for name in names if name and name.strip()]


def extract_localized_name(species: dict | None, locale: str) -> str | None:
    """
    Looks up the species name for `locale`, falling back to English.
    Returns None when neither is present; the caller substitutes the English slug.
    """
    if not species:
        return None
    names = species.get("names")
    if not isinstance(names, list):
        return None
    for language in (locale, ENGLISH):
        for entry in names:
            if _language_of(entry) == language:
                return entry.get("name")
    return None


def clean_flavor_text(raw: str | None) -> str | None:
    # Flavor texts carry hard line breaks and form feeds from the game cartridges
    if raw is None:
        return None
    return raw.replace("\n", " ").replace("\f", " ").strip()


def extract_description(species: dict | None, locale: str) -> Description | None:
    """
    Captures the first localized and the first English flavor text in a single
    pass. Returns None only when there is no species document at all.
    """
    if not species:
        return None
    localized = english = None
    entries = species.get("flavor_text_entries")
    if isinstance(entries, list):
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            language = _language_of(entry)
            text = clean_flavor_text(entry.get("flavor_text"))
            if localized is None and language == locale:
                localized = text
            if english is None and language == ENGLISH:
                english = text
            if localized is not None and english is not None:
                break
    return Description(text_localized=localized, text_en=english)


def member_id_from_url(url: str | None) -> str | None:
    """Returns the last non-blank path segment, e.g. '.../pokemon/25/' -> '25'."""
    if not url:
        return None
    segments = [segment for segment in url.split("/") if segment.strip()]
    return segments[-1] if segments else None


def to_metric(value: Any) -> float | None:
    # PokeAPI reports height in decimeters and weight in hectograms
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    return value / 10
