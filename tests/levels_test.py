import pytest

from sudoku.errors import DuplicateLevelError, UnknownLevelError
from sudoku.levels import EASY, EXTREME, HARD, LEVELS, MEDIUM, DifficultyLevel, build_levels, get_level


def test_predefined_levels():
    assert [(lv.name, lv.initial_given) for lv in LEVELS.values()] == [
        ("Easy", 38),
        ("Medium", 32),
        ("Hard", 21),
        ("Extreme", 17),
    ]


def test_get_level_ignores_case():
    assert get_level("easy") is EASY
    assert get_level("MEDIUM") is MEDIUM
    assert get_level(" Hard ") is HARD
    assert get_level(EXTREME) is EXTREME


def test_get_level_passes_level_objects_through():
    custom = DifficultyLevel("Tiny", 6)
    assert get_level(custom) is custom


def test_unknown_level():
    with pytest.raises(UnknownLevelError) as info:
        get_level("impossible")
    assert "impossible" in str(info.value)
    with pytest.raises(ValueError):
        get_level("impossible")


def test_levels_compare_by_name_ignoring_case():
    assert DifficultyLevel("EASY", 1) == EASY
    assert hash(DifficultyLevel("easy", 1)) == hash(EASY)
    assert DifficultyLevel("Easier", 38) != EASY


def test_duplicate_level_names_are_rejected():
    with pytest.raises(DuplicateLevelError) as info:
        build_levels([EASY, DifficultyLevel("eAsY", 40)])
    assert "eAsY" in str(info.value)
    with pytest.raises(KeyError):
        build_levels([HARD, HARD])


def test_level_table_is_read_only():
    with pytest.raises(TypeError):
        LEVELS["trivial"] = DifficultyLevel("Trivial", 70)
