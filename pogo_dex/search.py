"""Fuzzy name search over the species gallery."""

from __future__ import annotations

from collections.abc import Iterable

from .species import Species


def fuzzy_match(needle: str, haystack: str) -> bool:
    """Return ``True`` when every character of *needle* appears in *haystack* in order.

    Characters need not be adjacent, so ``"chzd"`` matches ``"charizard"``.
    Matching is case-sensitive; callers lower-case both sides.
    """

    if len(needle) > len(haystack):
        return False
    if len(needle) == len(haystack):
        return needle == haystack
    remaining = iter(haystack)
    return all(char in remaining for char in needle)


def filter_species(species: Iterable[Species], term: str = "") -> list[Species]:
    """Return the species whose names fuzzily match *term*, in dex order."""

    needle = term.lower()
    matches = [entry for entry in species if fuzzy_match(needle, entry.name.lower())]
    return sorted(matches, key=lambda entry: entry.number)


__all__ = ["filter_species", "fuzzy_match"]
