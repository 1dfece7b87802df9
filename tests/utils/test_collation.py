from __future__ import annotations

from presetNav.utils.collation import collation_key


def test_case_is_secondary_to_letters():
    assert sorted(["beta", "Alpha", "alpha", "Beta"], key=collation_key) == ["alpha", "Alpha", "beta", "Beta"]


def test_accents_sort_with_base_letter():
    assert sorted(["Zed", "Élan", "eagle"], key=collation_key) == ["eagle", "Élan", "Zed"]


def test_unaccented_before_accented():
    assert sorted(["é", "e"], key=collation_key) == ["e", "é"]
