"""Stat formulas: combat power, hit points, breakpoints and release ages."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Protocol

from .cpm_table import (
    COMBAT_POWER_FALLBACK_LEVEL,
    HIT_POINTS_FALLBACK_LEVEL,
    multiplier_for_level,
)

_SECONDS_PER_DAY = 24 * 60 * 60

MIN_RANGE_IVS: tuple[int, int, int] = (10, 10, 10)
MAX_IVS: tuple[int, int, int] = (15, 15, 15)


class BaseStatsLike(Protocol):
    """Anything exposing species base attack, defense and hit points."""

    @property
    def atk(self) -> int: ...

    @property
    def defense(self) -> int: ...

    @property
    def hit(self) -> int: ...


@dataclass(frozen=True)
class HitPointComparison:
    """Hit points at two IV values for the same level."""

    equal: bool
    hp_low: int
    hp_high: int


def calculate_combat_power(
    species: BaseStatsLike,
    atk_iv: float = 15,
    def_iv: float = 15,
    hp_iv: float = 15,
    level: float = 50,
) -> int:
    """Return the Combat Power for ``species`` at the given IVs and level.

    The result is floored and clamped to a minimum of 10. Untabulated levels
    fall back to the level 50 multiplier. IVs are not range checked; a
    negative defense or stamina sum makes :func:`math.sqrt` raise
    :class:`ValueError`, which is left to the caller.
    """

    cpm = multiplier_for_level(level, fallback_level=COMBAT_POWER_FALLBACK_LEVEL)
    raw = (
        (atk_iv + species.atk)
        * math.sqrt(def_iv + species.defense)
        * math.sqrt(hp_iv + species.hit)
        * cpm**2
    ) / 10
    return math.floor(max(10, raw))


def combat_power_range(species: BaseStatsLike, level: float) -> tuple[int, int]:
    """Return ``(low, high)`` CP at 10/10/10 and 15/15/15 IVs for ``level``."""

    low = calculate_combat_power(species, *MIN_RANGE_IVS, level=level)
    high = calculate_combat_power(species, *MAX_IVS, level=level)
    return low, high


def calculate_hit_points(species: BaseStatsLike, hp_iv: float = 15, level: float = 40) -> int:
    """Return floored hit points; untabulated levels use the level 40 multiplier."""

    cpm = multiplier_for_level(level, fallback_level=HIT_POINTS_FALLBACK_LEVEL)
    return math.floor((species.hit + hp_iv) * cpm)


def has_equal_hit_points_across_iv(
    species: BaseStatsLike,
    level: float,
    iv_low: float = 14,
    iv_high: float = 15,
) -> HitPointComparison:
    """Compare hit points at ``iv_low`` and ``iv_high`` for the same level.

    ``equal`` is ``True`` when floor rounding makes both IVs display the same
    HP, i.e. the HP stat cannot tell a 14 from a 15 at that level.
    """

    hp_low = calculate_hit_points(species, iv_low, level)
    hp_high = calculate_hit_points(species, iv_high, level)
    return HitPointComparison(equal=hp_low == hp_high, hp_low=hp_low, hp_high=hp_high)


def _as_utc(moment: date | datetime | str) -> datetime:
    if isinstance(moment, str):
        text = moment.strip()
        moment = datetime.fromisoformat(text) if "T" in text or " " in text else date.fromisoformat(text)
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment
    return datetime(moment.year, moment.month, moment.day, tzinfo=timezone.utc)


def days_since(reference: date | datetime | str, now: date | datetime | None = None) -> int:
    """Return the whole days (rounded up) between ``reference`` and ``now``.

    The absolute difference is used, so future references also yield a
    non-negative count. Plain dates are treated as UTC midnight and naive
    datetimes as UTC. ``now`` defaults to the current UTC instant.
    """

    current = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    elapsed = abs(current - _as_utc(reference))
    return math.ceil(elapsed.total_seconds() / _SECONDS_PER_DAY)


__all__ = [
    "BaseStatsLike",
    "HitPointComparison",
    "MAX_IVS",
    "MIN_RANGE_IVS",
    "calculate_combat_power",
    "calculate_hit_points",
    "combat_power_range",
    "days_since",
    "has_equal_hit_points_across_iv",
]
