"""Tests for the species detail view."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone

import pytest

from pogo_dex.detail import (
    CP_RANGE_LEVELS,
    breakpoint_labels,
    build_detail,
    detail_as_dict,
    format_date,
    render_detail,
)
from pogo_dex.formulas import combat_power_range
from pogo_dex.species import Species, load_default_species

NOW = datetime(2024, 7, 6, tzinfo=timezone.utc)


@pytest.fixture()
def probe() -> Species:
    return Species(
        number=7, name="Probe", atk=100, defense=100, hit=100, released=date(2016, 7, 6), shiny=None
    )


def test_build_detail_collects_ranges_and_breakpoints(probe: Species) -> None:
    detail = build_detail(probe, now=NOW)
    assert detail.number_label == "#007"
    assert [cp_range.level for cp_range in detail.cp_ranges] == list(CP_RANGE_LEVELS)
    for cp_range in detail.cp_ranges:
        assert (cp_range.low, cp_range.high) == combat_power_range(probe, cp_range.level)
    assert detail.breakpoint_levels == ("L40",)
    assert detail.release.days_ago == 2922
    assert detail.shiny_release.released_on is None


def test_render_detail_text(probe: Species) -> None:
    text = render_detail(build_detail(probe, now=NOW))
    lines = text.splitlines()
    assert lines[0] == "#007 Probe"
    assert lines[1] == "ATK 100 • DEF 100 • HP 100"
    assert "  L50: 854 - 933" in lines
    assert "Fundo at L40" in lines
    assert "RELEASED: 06/07/2016 (2,922 days ago)" in lines
    assert lines[-1] == "SHINY RELEASED: Not Released"


def test_fundo_line_omitted_without_breakpoints() -> None:
    species = Species(number=2, name="Sturdy", atk=100, defense=100, hit=101)
    detail = build_detail(species, now=NOW)
    assert detail.breakpoint_levels == ()
    assert "Fundo" not in render_detail(detail)


def test_bundled_bulbasaur_breakpoint_and_shiny_age() -> None:
    bulbasaur = load_default_species().get("Bulbasaur")
    detail = build_detail(bulbasaur, now=NOW)
    assert detail.breakpoint_levels == ("L51",)
    assert breakpoint_labels(bulbasaur) == detail.breakpoint_levels
    assert "SHINY RELEASED: 25/03/2018 (2,295 days ago)" in render_detail(detail)


def test_out_of_domain_stats_render_as_unknown() -> None:
    broken = Species(number=3, name="Broken", atk=100, defense=-50, hit=100)
    detail = build_detail(broken, now=NOW)
    assert all(cp_range.low is None and cp_range.high is None for cp_range in detail.cp_ranges)
    assert "  L40: ? - ?" in render_detail(detail).splitlines()


def test_detail_as_dict_is_json_serialisable(probe: Species) -> None:
    payload = detail_as_dict(build_detail(probe, now=NOW))
    assert payload["cp_ranges"]["L50"] == {"low": 854, "high": 933}
    assert payload["base_stats"] == {"atk": 100, "def": 100, "hit": 100}
    assert payload["released"] == {"date": "2016-07-06", "days_ago": 2922}
    assert payload["shiny_released"] == {"date": None, "days_ago": None}
    assert json.loads(json.dumps(payload)) == payload


def test_format_date_is_day_first() -> None:
    assert format_date(date(2018, 11, 16)) == "16/11/2018"
