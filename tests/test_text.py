import pytest

from tallerkit.text import (
    Classification,
    classify_all,
    classify_chars,
    count_spaces,
    string_length,
)


def test_length_of_none_is_zero():
    assert string_length(None) == 0


@pytest.mark.parametrize(
    ("string", "expected"),
    [
        ("Soy un string", 13),
        ("", 0),
        ("exactas-uba-/-/-", 16),
        ("un string muy \n muy muy muy \nlarg" + "o" * 51, 84),
    ],
)
def test_string_length(string, expected):
    assert string_length(string) == expected


def test_count_spaces_of_none_is_zero():
    assert count_spaces(None) == 0


@pytest.mark.parametrize(
    ("string", "expected"),
    [
        ("orga2 se gu ndo cuatrimestre", 4),
        ("", 0),
        ("unstringmuylarg" + "o" * 50, 0),
    ],
)
def test_count_spaces(string, expected):
    assert count_spaces(string) == expected


def test_classify_one():
    result = classify_chars("orgados-segundo-cuatri")
    assert result.vowels == "oaoeuouai"
    assert result.consonants == "rgds-sgnd-ctr"


def test_classify_two():
    results = classify_all(["orgados-segundo-cuatri", "exactasuubbaa"])
    assert results == [
        Classification("oaoeuouai", "rgds-sgnd-ctr"),
        Classification("eaauuaa", "xctsbb"),
    ]


def test_classify_five():
    strings = [
        "orgados-segundo-cuatri",
        "exactasuubbaa",
        "aaaaaa",
        "kkkkj",
        "ceromasinfinito",
    ]
    expected = [
        ("oaoeuouai", "rgds-sgnd-ctr"),
        ("eaauuaa", "xctsbb"),
        ("aaaaaa", ""),
        ("", "kkkkj"),
        ("eoaiiio", "crmsnfnt"),
    ]
    assert [tuple(r) for r in classify_all(strings)] == expected


def test_classify_none_gives_empty_parts():
    assert classify_chars(None) == Classification("", "")


def test_classification_preserves_all_characters():
    string = "Hola Mundo, orga2!"
    result = classify_chars(string)
    assert sorted(result.vowels + result.consonants) == sorted(string)
    assert set(result.vowels) <= set("aeiou")