"""Combat Power Multiplier (CPM) table for levels 1.0 through 51.0."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Final

COMBAT_POWER_FALLBACK_LEVEL: Final[float] = 50.0
HIT_POINTS_FALLBACK_LEVEL: Final[float] = 40.0

MIN_LEVEL: Final[float] = 1.0
MAX_LEVEL: Final[float] = 51.0

_CPM_VALUES: Final[dict[float, float]] = {
    1.0: 0.094,
    1.5: 0.135137432,
    2.0: 0.16639787,
    2.5: 0.192650919,
    3.0: 0.21573247,
    3.5: 0.236572661,
    4.0: 0.25572005,
    4.5: 0.273530381,
    5.0: 0.29024988,
    5.5: 0.306057377,
    6.0: 0.3210876,
    6.5: 0.335445036,
    7.0: 0.34921268,
    7.5: 0.362457751,
    8.0: 0.37523559,
    8.5: 0.387592406,
    9.0: 0.39956728,
    9.5: 0.411193551,
    10.0: 0.42250001,
    10.5: 0.432926419,
    11.0: 0.44310755,
    11.5: 0.4530599578,
    12.0: 0.46279839,
    12.5: 0.472336083,
    13.0: 0.48168495,
    13.5: 0.4908558,
    14.0: 0.49985844,
    14.5: 0.508701765,
    15.0: 0.51739395,
    15.5: 0.525942511,
    16.0: 0.53435433,
    16.5: 0.542635767,
    17.0: 0.55079269,
    17.5: 0.558830586,
    18.0: 0.56675452,
    18.5: 0.574569153,
    19.0: 0.58227891,
    19.5: 0.589887917,
    20.0: 0.59740001,
    20.5: 0.604818814,
    21.0: 0.61215729,
    21.5: 0.619399365,
    22.0: 0.62656713,
    22.5: 0.633644533,
    23.0: 0.64065295,
    23.5: 0.647576426,
    24.0: 0.65443563,
    24.5: 0.661214806,
    25.0: 0.667934,
    25.5: 0.674577537,
    26.0: 0.68116492,
    26.5: 0.687680648,
    27.0: 0.69414365,
    27.5: 0.700538673,
    28.0: 0.70688421,
    28.5: 0.713164996,
    29.0: 0.71939909,
    29.5: 0.725571552,
    30.0: 0.7317,
    30.5: 0.734741009,
    31.0: 0.73776948,
    31.5: 0.740785574,
    32.0: 0.74378943,
    32.5: 0.746781211,
    33.0: 0.74976104,
    33.5: 0.752729087,
    34.0: 0.75568551,
    34.5: 0.758630378,
    35.0: 0.76156384,
    35.5: 0.764486065,
    36.0: 0.76739717,
    36.5: 0.770297266,
    37.0: 0.7731865,
    37.5: 0.776064962,
    38.0: 0.77893275,
    38.5: 0.781790055,
    39.0: 0.78463697,
    39.5: 0.787473578,
    40.0: 0.79030001,
    40.5: 0.792803968,
    41.0: 0.79530001,
    41.5: 0.797803921,
    42.0: 0.80030001,
    42.5: 0.802803876,
    43.0: 0.80530001,
    43.5: 0.807803833,
    44.0: 0.81030001,
    44.5: 0.812803792,
    45.0: 0.81530001,
    45.5: 0.817803753,
    46.0: 0.82030001,
    46.5: 0.822803716,
    47.0: 0.82530001,
    47.5: 0.827803681,
    48.0: 0.83030001,
    48.5: 0.832803648,
    49.0: 0.83530001,
    49.5: 0.837803617,
    50.0: 0.84029999,
    50.5: 0.842803586,
    51.0: 0.84530001,
}

CPM: Final[Mapping[float, float]] = MappingProxyType(_CPM_VALUES)


def levels() -> Iterator[float]:
    """Yield every tabulated level in ascending order."""

    return iter(sorted(CPM))


def get_cpm(level: float) -> float:
    """Return the CPM for ``level`` or raise :class:`ValueError`.

    Only half-level steps between :data:`MIN_LEVEL` and :data:`MAX_LEVEL` are
    tabulated.
    """

    multiplier = CPM.get(level)
    if multiplier is None:
        raise ValueError(
            f"Level {level!r} is not a half-level step between {MIN_LEVEL} and {MAX_LEVEL}."
        )
    return multiplier


def multiplier_for_level(level: float, *, fallback_level: float) -> float:
    """Return the CPM for ``level``, or for ``fallback_level`` when untabulated.

    No interpolation happens between table entries: a level such as ``10.25``
    or ``999`` silently resolves to the fallback level's multiplier.
    """

    try:
        multiplier = CPM.get(level)
    except TypeError:
        multiplier = None
    if multiplier is None:
        return CPM[fallback_level]
    return multiplier


__all__ = [
    "CPM",
    "COMBAT_POWER_FALLBACK_LEVEL",
    "HIT_POINTS_FALLBACK_LEVEL",
    "MAX_LEVEL",
    "MIN_LEVEL",
    "get_cpm",
    "levels",
    "multiplier_for_level",
]
