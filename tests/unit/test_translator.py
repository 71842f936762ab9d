import pytest

from pokecenter.translator import TYPE_TRANSLATIONS_PT_BR, TypeTranslator


def test_known_type_is_translated():
    assert TypeTranslator().translate("fire") == "Fogo"
    assert TypeTranslator().translate("steel") == "Aço"


def test_unknown_type_passes_through():
    assert TypeTranslator().translate("???") == "???"
    assert TypeTranslator().translate("stellar") == "stellar"


def test_table_covers_the_eighteen_types():
    assert len(TYPE_TRANSLATIONS_PT_BR) == 18


def test_table_cannot_be_mutated():
    translator = TypeTranslator()
    with pytest.raises(TypeError):
        translator.table["fire"] = "Chama"


def test_translator_keeps_its_own_copy():
    source = {"fire": "Fogo"}
    translator = TypeTranslator(source)
    source["fire"] = "Chama"

    assert translator.translate("fire") == "Fogo"
