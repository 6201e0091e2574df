"""Tests for the object catalog and instruction generator."""
import random
from collections import Counter

import pytest
from pydantic import ValidationError

from tangkap.game.catalog import (
    FAMILY_ORDER,
    classifications_for,
    items_for,
    unlocked_families,
)
from tangkap.game.instructions import InstructionGenerator, Locale, available_locales
from tangkap.models import ObjectFamily


class TestCatalog:
    """Catalog contents and classification rules."""

    @pytest.mark.parametrize("family,count", [
        (ObjectFamily.FRUIT, 8),
        (ObjectFamily.NUMBER, 10),
        (ObjectFamily.LETTER, 26),
        (ObjectFamily.SHAPE, 6),
    ])
    def test_family_sizes(self, family, count):
        assert len(items_for(family)) == count

    def test_number_parity(self):
        for item in items_for(ObjectFamily.NUMBER):
            expected = "even" if int(item.value) % 2 == 0 else "odd"
            assert item.classification == expected

    def test_letter_vowel_class(self):
        vowels = {i.value for i in items_for(ObjectFamily.LETTER) if i.classification == "vowel"}
        assert vowels == set("AEIOU")

    def test_fruit_colors_are_targetable(self):
        colors = {i.classification for i in items_for(ObjectFamily.FRUIT)}
        assert colors == set(classifications_for(ObjectFamily.FRUIT))

    def test_shape_colors_all_distinct(self):
        colors = [i.classification for i in items_for(ObjectFamily.SHAPE)]
        assert sorted(colors) == sorted(classifications_for(ObjectFamily.SHAPE))

    def test_items_for_returns_copy(self):
        items = items_for(ObjectFamily.FRUIT)
        items.clear()
        assert len(items_for(ObjectFamily.FRUIT)) == 8

    def test_items_are_immutable(self):
        item = items_for(ObjectFamily.FRUIT)[0]
        with pytest.raises(ValidationError):
            item.classification = "blue"

    @pytest.mark.parametrize("level,expected", [
        (1, 1), (2, 2), (3, 3), (4, 4), (10, 4),
    ])
    def test_unlocked_families(self, level, expected):
        assert unlocked_families(level) == FAMILY_ORDER[:expected]


class TestInstructionGenerator:
    """Family draw and instruction text."""

    def test_level_one_is_always_fruit(self):
        gen = InstructionGenerator(rng=random.Random(7), locale=Locale('id'))
        assert {gen.choose_family(1) for _ in range(50)} == {ObjectFamily.FRUIT}

    def test_families_unlock_progressively(self):
        gen = InstructionGenerator(rng=random.Random(7), locale=Locale('id'))
        seen = {gen.choose_family(2) for _ in range(200)}
        assert seen == {ObjectFamily.FRUIT, ObjectFamily.NUMBER}
        seen = {gen.choose_family(8) for _ in range(400)}
        assert seen == set(ObjectFamily)

    @pytest.mark.parametrize("family", list(ObjectFamily))
    def test_target_is_valid_for_family(self, family):
        gen = InstructionGenerator(rng=random.Random(3), locale=Locale('id'))
        for _ in range(30):
            instruction = gen.generate(family, level=1)
            assert instruction.target_classification in classifications_for(family)
            assert instruction.family == family

    def test_targets_are_roughly_uniform(self):
        gen = InstructionGenerator(rng=random.Random(11), locale=Locale('id'))
        counts = Counter(gen.generate(ObjectFamily.NUMBER, 1).target_classification
                         for _ in range(1000))
        assert 400 < counts["even"] < 600

    def test_indonesian_text(self):
        locale = Locale('id')
        assert locale.instruction(ObjectFamily.FRUIT, "red") == "Tangkap buah berwarna merah!"
        assert locale.instruction(ObjectFamily.NUMBER, "even") == "Tangkap angka genap!"
        assert locale.instruction(ObjectFamily.LETTER, "consonant") == "Tangkap huruf konsonan!"
        assert locale.instruction(ObjectFamily.SHAPE, "blue") == "Tangkap lingkaran biru!"

    def test_english_text(self):
        assert Locale('en').instruction(ObjectFamily.FRUIT, "green") == "Catch the green fruit!"

    def test_unknown_locale_falls_back(self):
        assert Locale('xx').code == 'id'

    def test_every_locale_names_every_classification(self):
        for code in available_locales():
            locale = Locale(code)
            for family in ObjectFamily:
                for target in classifications_for(family):
                    assert locale.classification_name(target) != ""
                    assert "{" not in locale.instruction(family, target)

    def test_messages(self):
        locale = Locale('id')
        assert locale.message('correct', points=10) == "Benar! +10"
        assert locale.message('time_up') == "Waktu habis!"
