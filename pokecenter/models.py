from pydantic import BaseModel, Field


# Elemental type. `id` is only set once the type is backed by the store.
class TypeRef(BaseModel):
    id: int | None = None
    name: str
    name_en: str
    name_localized: str


# Base stats; None means upstream did not report the category (not zero)
class Stats(BaseModel):
    owner_id: int | None = None
    hp: int | None = None
    attack: int | None = None
    defense: int | None = None
    speed: int | None = None
    special_attack: int | None = None
    special_defense: int | None = None


class Description(BaseModel):
    owner_id: int | None = None
    text_localized: str | None = None
    text_en: str | None = None


# The assembled species record. `external_id` is the PokeAPI id,
# `id` is assigned by the store on first insert.
class SpeciesRecord(BaseModel):
    id: int | None = None
    external_id: int
    name_en: str
    name_localized: str | None = None
    sprite_url: str | None = None
    height: float | None = None  # meters
    weight: float | None = None  # kilograms
    current_hp: int | None = None
    max_hp: int | None = None
    types: list[TypeRef] = Field(default_factory=list)
    abilities: list[str] = Field(default_factory=list)
    stats: Stats | None = None
    descriptions: list[Description] = Field(default_factory=list)
