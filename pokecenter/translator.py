from types import MappingProxyType
from typing import Mapping

# PokeAPI type code -> Brazilian Portuguese display name
TYPE_TRANSLATIONS_PT_BR: Mapping[str, str] = MappingProxyType({
    "normal": "Normal",
    "fighting": "Lutador",
    "flying": "Voador",
    "poison": "Venenoso",
    "ground": "Terrestre",
    "rock": "Pedra",
    "bug": "Inseto",
    "ghost": "Fantasma",
    "steel": "Aço",
    "fire": "Fogo",
    "water": "Água",
    "grass": "Planta",
    "electric": "Elétrico",
    "psychic": "Psíquico",
    "ice": "Gelo",
    "dragon": "Dragão",
    "dark": "Sombrio",
    "fairy": "Fada",
})


class TypeTranslator:
    def __init__(self, table: Mapping[str, str] = TYPE_TRANSLATIONS_PT_BR):
        # Private read-only copy so callers cannot mutate the table afterwards
        self._table = MappingProxyType(dict(table))

    @property
    def table(self) -> Mapping[str, str]:
        return self._table

    def translate(self, code: str) -> str:
        """Returns the localized name for a type code, or the code itself when unknown."""
        return self._table.get(code, code)
