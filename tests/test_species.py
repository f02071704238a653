"""Unit tests for the species dataset loader and repository."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from pogo_dex.species import Species, SpeciesRepository, load_default_species, load_species


@pytest.fixture(scope="module")
def repository() -> SpeciesRepository:
    return load_default_species()


def _write(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "pokemon.json"
    path.write_text(json.dumps(payload))
    return path


def test_lookup_by_name_is_case_insensitive(repository: SpeciesRepository) -> None:
    entry = repository.get("dragonite")
    assert (entry.atk, entry.defense, entry.hit) == (263, 198, 209)
    assert repository.get("  DRAGONITE ") is entry


def test_lookup_by_number_forms(repository: SpeciesRepository) -> None:
    bulbasaur = repository.get("Bulbasaur")
    assert repository.get(1) is bulbasaur
    assert repository.get("1") is bulbasaur
    assert repository.get("#001") is bulbasaur
    assert bulbasaur.number_label == "#001"
    assert bulbasaur.released == date(2016, 7, 6)


def test_unknown_species_raises(repository: SpeciesRepository) -> None:
    with pytest.raises(KeyError):
        repository.get("Missingno")
    assert "Missingno" not in repository
    assert "Mew" in repository


@pytest.mark.parametrize("identifier", ["2.5", "1.0", "\u00b2", "#", ""])
def test_malformed_numbers_raise_key_error(repository: SpeciesRepository, identifier: str) -> None:
    with pytest.raises(KeyError):
        repository.get(identifier)
    assert identifier not in repository


def test_bundled_entries_are_in_dex_order(repository: SpeciesRepository) -> None:
    numbers = [entry.number for entry in repository]
    assert numbers == sorted(numbers)
    assert len(repository) == len(numbers)


def test_load_species_sorts_and_parses_optional_dates(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        [
            {"number": 25, "name": "Pikachu", "atk": 112, "def": 96, "hit": 111, "released": "2016-07-06"},
            {"number": 4, "name": "Charmander", "atk": 116, "def": 93, "hit": 118, "shiny": "2018-05-19"},
        ],
    )
    repo = load_species(path)
    first, second = list(repo)
    assert first == Species(
        number=4, name="Charmander", atk=116, defense=93, hit=118, released=None, shiny=date(2018, 5, 19)
    )
    assert second.released == date(2016, 7, 6)
    assert second.shiny is None


@pytest.mark.parametrize(
    "payload",
    [
        {"number": 1},
        [],
        [{"number": 1, "name": "Bulbasaur", "atk": 118, "def": 111}],
        [{"number": 0, "name": "Zero", "atk": 1, "def": 1, "hit": 1}],
        [{"number": 1, "name": "Neg", "atk": -1, "def": 1, "hit": 1}],
        [{"number": 1, "name": "Bad", "atk": "lots", "def": 1, "hit": 1}],
        [{"number": 1, "name": "Date", "atk": 1, "def": 1, "hit": 1, "released": "soon"}],
        [
            {"number": 1, "name": "A", "atk": 1, "def": 1, "hit": 1},
            {"number": 1, "name": "B", "atk": 1, "def": 1, "hit": 1},
        ],
        ["not a record"],
    ],
)
def test_invalid_payloads_raise_value_error(tmp_path: Path, payload: object) -> None:
    with pytest.raises(ValueError):
        load_species(_write(tmp_path, payload))
