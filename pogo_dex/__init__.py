"""Pokédex gallery with CP ranges and HP breakpoint detection."""

from __future__ import annotations

import re
from importlib import metadata as _metadata
from pathlib import Path

from .cpm_table import CPM, get_cpm, multiplier_for_level
from .detail import SpeciesDetail, build_detail, render_detail
from .formulas import (
    HitPointComparison,
    calculate_combat_power,
    calculate_hit_points,
    combat_power_range,
    days_since,
    has_equal_hit_points_across_iv,
)
from .search import filter_species, fuzzy_match
from .species import Species, SpeciesRepository, load_default_species, load_species


def _read_local_version() -> str:
    """Return the project version from ``pyproject.toml`` when not installed."""

    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    if pyproject.is_file():
        match = re.search(
            r'^version\s*=\s*"([^"]+)"', pyproject.read_text(), re.MULTILINE
        )
        if match:
            return match.group(1)
    return "0.0.0"


try:
    __version__ = _metadata.version("pogo-dex")
except _metadata.PackageNotFoundError:
    __version__ = _read_local_version()

__all__ = [
    "CPM",
    "HitPointComparison",
    "Species",
    "SpeciesDetail",
    "SpeciesRepository",
    "build_detail",
    "calculate_combat_power",
    "calculate_hit_points",
    "combat_power_range",
    "days_since",
    "filter_species",
    "fuzzy_match",
    "get_cpm",
    "has_equal_hit_points_across_iv",
    "load_default_species",
    "load_species",
    "multiplier_for_level",
    "render_detail",
    "__version__",
]
