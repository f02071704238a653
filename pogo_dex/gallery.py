"""Gallery cards and tabular export of the species list."""

from __future__ import annotations

import csv
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any

from .config import ExportConfig
from .detail import breakpoint_labels
from .formulas import calculate_combat_power, calculate_hit_points
from .observability import get_logger
from .species import Species

pd: ModuleType | None
try:  # Excel export goes through pandas when it is installed.
    import pandas as pd
except ModuleNotFoundError:  # pragma: no cover - executed when pandas is absent.
    pd = None

LOGGER = get_logger(__name__)

Row = dict[str, Any]

COLUMNS: tuple[str, ...] = (
    "Number",
    "Name",
    "Attack",
    "Defense",
    "HP",
    "Max CP L40",
    "Max CP L50",
    "Max HP L40",
    "Fundo Levels",
    "Released",
    "Shiny Released",
)


@dataclass(frozen=True)
class GalleryCard:
    """One card in the gallery list."""

    number_label: str
    name: str


@dataclass(frozen=True)
class ExportResult:
    """Outcome of :func:`export_gallery`."""

    rows: int
    csv_path: Path
    excel_path: Path | None
    excel_written: bool
    excel_error: str | None


def build_cards(species: Iterable[Species]) -> list[GalleryCard]:
    """Return gallery cards in the order given."""

    return [GalleryCard(number_label=entry.number_label, name=entry.name) for entry in species]


def render_cards(cards: Sequence[GalleryCard]) -> str:
    """Render cards one per line, e.g. ``#001  Bulbasaur``."""

    return "\n".join(f"{card.number_label}  {card.name}" for card in cards)


def _max_cp_cell(entry: Species, level: int) -> int | str:
    try:
        return calculate_combat_power(entry, level=level)
    except ValueError:
        return ""


def build_gallery_rows(species: Iterable[Species]) -> list[Row]:
    """Return one export row per species with its headline numbers."""

    rows: list[Row] = []
    for entry in species:
        rows.append(
            {
                "Number": entry.number,
                "Name": entry.name,
                "Attack": entry.atk,
                "Defense": entry.defense,
                "HP": entry.hit,
                "Max CP L40": _max_cp_cell(entry, 40),
                "Max CP L50": _max_cp_cell(entry, 50),
                "Max HP L40": calculate_hit_points(entry, level=40),
                "Fundo Levels": " ".join(breakpoint_labels(entry)),
                "Released": entry.released.isoformat() if entry.released else "",
                "Shiny Released": entry.shiny.isoformat() if entry.shiny else "",
            }
        )
    return rows


def _write_csv(rows: Sequence[Row], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(COLUMNS))
        writer.writeheader()
        writer.writerows(rows)


def export_gallery(rows: Sequence[Row], *, config: ExportConfig) -> ExportResult:
    """Write *rows* to CSV and, when configured and possible, to Excel."""

    _write_csv(rows, config.csv_path)
    LOGGER.info(
        "gallery_csv_written",
        extra={"event": "gallery_csv_written", "path": str(config.csv_path), "rows": len(rows)},
    )

    excel_path = config.excel_path
    excel_written = False
    excel_error: str | None = None
    if not config.excel_requested:
        excel_error = "disabled"
    elif pd is None:
        excel_error = "pandas-missing"
    else:
        try:
            excel_path.parent.mkdir(parents=True, exist_ok=True)
            pd.DataFrame(list(rows), columns=list(COLUMNS)).to_excel(excel_path, index=False)
            excel_written = True
        except (ImportError, OSError, ValueError) as exc:
            excel_error = str(exc)
            LOGGER.warning(
                "gallery_excel_failed",
                extra={"event": "gallery_excel_failed", "path": str(excel_path), "reason": excel_error},
            )

    return ExportResult(
        rows=len(rows),
        csv_path=config.csv_path,
        excel_path=excel_path,
        excel_written=excel_written,
        excel_error=excel_error,
    )


__all__ = [
    "COLUMNS",
    "ExportResult",
    "GalleryCard",
    "Row",
    "build_cards",
    "build_gallery_rows",
    "export_gallery",
    "render_cards",
]
