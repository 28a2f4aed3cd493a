"""Small string utilities: length, space counting and vowel/consonant split."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

VOWELS = frozenset("aeiou")


class Classification(NamedTuple):
    """The vowels and the other characters of a string, in their original order."""

    vowels: str
    consonants: str


def string_length(string: str | None) -> int:
    """Return the number of characters in ``string``; a missing string has length 0."""
    if string is None:
        return 0
    return len(string)


def count_spaces(string: str | None) -> int:
    """Return how many ``' '`` characters ``string`` holds; a missing string has none."""
    if not string:
        return 0
    return string.count(" ")


def classify_chars(string: str | None) -> Classification:
    """Split ``string`` into lowercase vowels and every other character.

    Only ``a``, ``e``, ``i``, ``o`` and ``u`` count as vowels; anything else,
    including punctuation and uppercase letters, goes to the second part.
    """
    if string is None:
        return Classification("", "")
    vowels = "".join(ch for ch in string if ch in VOWELS)
    consonants = "".join(ch for ch in string if ch not in VOWELS)
    return Classification(vowels, consonants)


def classify_all(strings: Iterable[str | None]) -> list[Classification]:
    """Classify every string of ``strings``, keeping their order."""
    return [classify_chars(string) for string in strings]