"""Species base stats loaded from the static Pokédex dataset."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Iterator

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_DEX_NUMBER = re.compile(r"\d+", re.ASCII)


def normalise_name(value: str) -> str:
    """Lower-case ``value`` and strip everything but letters and digits."""

    return _NON_ALNUM.sub("", value.strip().lower())


@dataclass(frozen=True)
class Species:
    """Base attack, defense and HP for one species, plus release dates."""

    number: int
    name: str
    atk: int
    defense: int
    hit: int
    released: date | None = None
    shiny: date | None = None

    @property
    def number_label(self) -> str:
        """Return the dex number as shown on cards, e.g. ``#001``."""

        return f"#{self.number:03d}"


class SpeciesRepository:
    """Dex-ordered collection of :class:`Species` with name and number lookup."""

    def __init__(self, entries: Iterable[Species]):
        self._entries = tuple(sorted(entries, key=lambda entry: entry.number))
        self._by_number = {entry.number: entry for entry in self._entries}
        by_name: dict[str, Species] = {}
        for entry in self._entries:
            by_name.setdefault(normalise_name(entry.name), entry)
        self._by_name = by_name

    def get(self, identifier: str | int) -> Species:
        """Return the species named or numbered by *identifier*.

        Accepts names in any case or punctuation, ``"25"``, ``"#025"`` or an
        ``int``. Raises :class:`KeyError` when nothing matches.
        """

        if isinstance(identifier, int):
            entry = self._by_number.get(identifier)
        else:
            text = identifier.strip()
            digits = text.removeprefix("#")
            if _DEX_NUMBER.fullmatch(digits):
                entry = self._by_number.get(int(digits))
            else:
                entry = self._by_name.get(normalise_name(text))
        if entry is None:
            raise KeyError(identifier)
        return entry

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, (str, int)):
            return False
        try:
            self.get(identifier)
        except KeyError:
            return False
        return True

    def __iter__(self) -> Iterator[Species]:
        yield from self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    return date.fromisoformat(str(value)[:10])


def _parse_entry(item: dict[str, Any]) -> Species:
    number = int(item["number"])
    if number <= 0:
        raise ValueError("number must be positive")
    stats = [int(item[key]) for key in ("atk", "def", "hit")]
    if any(value < 0 for value in stats):
        raise ValueError("base stats must be non-negative")
    return Species(
        number=number,
        name=str(item["name"]),
        atk=stats[0],
        defense=stats[1],
        hit=stats[2],
        released=_parse_date(item.get("released")),
        shiny=_parse_date(item.get("shiny")),
    )


def load_species(path: str | Path | None = None) -> SpeciesRepository:
    """Load species from *path* or the bundled ``pokemon.json``."""

    if path is None:
        payload_path = resources.files(__package__).joinpath("data").joinpath("pokemon.json")
        raw = payload_path.read_text(encoding="utf-8")
    else:
        raw = Path(path).read_text(encoding="utf-8")

    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("Species payload must be a JSON array of records.")

    entries: list[Species] = []
    seen: set[int] = set()
    for item in data:
        if not isinstance(item, dict):
            raise ValueError(f"Invalid species entry: {item!r}")
        try:
            entry = _parse_entry(item)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid species entry: {item}") from exc
        if entry.number in seen:
            raise ValueError(f"Duplicate species number {entry.number}.")
        seen.add(entry.number)
        entries.append(entry)
    if not entries:
        raise ValueError("No species entries were loaded.")

    return SpeciesRepository(entries)


@lru_cache(maxsize=1)
def load_default_species() -> SpeciesRepository:
    """Return the cached repository backed by the bundled dataset."""

    return load_species()


__all__ = [
    "Species",
    "SpeciesRepository",
    "load_default_species",
    "load_species",
    "normalise_name",
]
