"""Detail view for a single species: CP ranges, breakpoints and release ages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Final

from .formulas import combat_power_range, days_since, has_equal_hit_points_across_iv
from .species import Species

CP_RANGE_LEVELS: Final[tuple[int, ...]] = (15, 20, 25, 30, 35, 40, 50)
BREAKPOINT_LEVELS: Final[tuple[int, ...]] = (40, 50, 51)

_UNKNOWN = "?"


@dataclass(frozen=True)
class CombatPowerRange:
    """CP at 10/10/10 (``low``) and 15/15/15 (``high``) IVs; ``None`` if unknown."""

    level: int
    low: int | None
    high: int | None


@dataclass(frozen=True)
class ReleaseInfo:
    """A release date and how many days ago it was."""

    label: str
    released_on: date | None
    days_ago: int | None


@dataclass(frozen=True)
class SpeciesDetail:
    """Everything the detail view shows for one species."""

    number_label: str
    name: str
    atk: int
    defense: int
    hit: int
    cp_ranges: tuple[CombatPowerRange, ...]
    breakpoint_levels: tuple[str, ...]
    release: ReleaseInfo
    shiny_release: ReleaseInfo


def _cp_range(species: Species, level: int) -> CombatPowerRange:
    try:
        low, high = combat_power_range(species, level)
    except ValueError:
        return CombatPowerRange(level=level, low=None, high=None)
    return CombatPowerRange(level=level, low=low, high=high)


def _release(label: str, released_on: date | None, now: datetime | date | None) -> ReleaseInfo:
    if released_on is None:
        return ReleaseInfo(label=label, released_on=None, days_ago=None)
    return ReleaseInfo(label=label, released_on=released_on, days_ago=days_since(released_on, now))


def breakpoint_labels(species: Species) -> tuple[str, ...]:
    """Return ``L40``-style labels of the levels where IV 14 and 15 share HP."""

    return tuple(
        f"L{level}"
        for level in BREAKPOINT_LEVELS
        if has_equal_hit_points_across_iv(species, level).equal
    )


def build_detail(species: Species, *, now: datetime | date | None = None) -> SpeciesDetail:
    """Assemble the detail view for *species* as of *now*."""

    return SpeciesDetail(
        number_label=species.number_label,
        name=species.name,
        atk=species.atk,
        defense=species.defense,
        hit=species.hit,
        cp_ranges=tuple(_cp_range(species, level) for level in CP_RANGE_LEVELS),
        breakpoint_levels=breakpoint_labels(species),
        release=_release("RELEASED", species.released, now),
        shiny_release=_release("SHINY RELEASED", species.shiny, now),
    )


def format_date(value: date) -> str:
    """Format *value* day-first, e.g. ``06/07/2016``."""

    return value.strftime("%d/%m/%Y")


def _render_release(info: ReleaseInfo) -> str:
    if info.released_on is None:
        return f"{info.label}: Not Released"
    return f"{info.label}: {format_date(info.released_on)} ({info.days_ago:,} days ago)"


def _render_cp(value: int | None) -> str:
    return _UNKNOWN if value is None else str(value)


def render_detail(detail: SpeciesDetail) -> str:
    """Render *detail* as the multi-line text block shown by ``pogo-dex show``."""

    lines = [
        f"{detail.number_label} {detail.name}",
        f"ATK {detail.atk} • DEF {detail.defense} • HP {detail.hit}",
        "CP RANGES (10/10/10 - 15/15/15):",
    ]
    for cp_range in detail.cp_ranges:
        lines.append(f"  L{cp_range.level}: {_render_cp(cp_range.low)} - {_render_cp(cp_range.high)}")
    if detail.breakpoint_levels:
        lines.append("Fundo at " + " • ".join(detail.breakpoint_levels))
    lines.append(_render_release(detail.release))
    lines.append(_render_release(detail.shiny_release))
    return "\n".join(lines)


def _release_as_dict(info: ReleaseInfo) -> dict[str, Any]:
    return {
        "date": info.released_on.isoformat() if info.released_on else None,
        "days_ago": info.days_ago,
    }


def detail_as_dict(detail: SpeciesDetail) -> dict[str, Any]:
    """Return a JSON-serialisable mapping of *detail*."""

    return {
        "number": detail.number_label,
        "name": detail.name,
        "base_stats": {"atk": detail.atk, "def": detail.defense, "hit": detail.hit},
        "cp_ranges": {
            f"L{cp_range.level}": {"low": cp_range.low, "high": cp_range.high}
            for cp_range in detail.cp_ranges
        },
        "fundo_levels": list(detail.breakpoint_levels),
        "released": _release_as_dict(detail.release),
        "shiny_released": _release_as_dict(detail.shiny_release),
    }


__all__ = [
    "BREAKPOINT_LEVELS",
    "CP_RANGE_LEVELS",
    "CombatPowerRange",
    "ReleaseInfo",
    "SpeciesDetail",
    "breakpoint_labels",
    "build_detail",
    "detail_as_dict",
    "format_date",
    "render_detail",
]
