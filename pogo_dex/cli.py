"""Command line interface for browsing the Pokédex gallery."""
from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from typing import Any, Dict, Sequence

from . import preferences
from .config import AppConfig, build_app_config, build_export_config
from .detail import build_detail, detail_as_dict, render_detail
from .errors import DatasetError, InputValidationError, PogoDexError
from .formulas import calculate_combat_power, calculate_hit_points, has_equal_hit_points_across_iv
from .gallery import build_cards, build_gallery_rows, export_gallery, render_cards
from .observability import configure_logging, generate_trace_id, get_logger
from .search import filter_species
from .species import Species, SpeciesRepository, load_default_species, load_species


def _parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ISO timestamp: {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pogo-dex",
        description="Browse species, CP ranges and HP breakpoints",
    )
    parser.add_argument("--dataset", help="Path to a species JSON file")
    parser.add_argument("--state-file", dest="state_file", help="Where the saved search is kept")
    parser.add_argument("--log-level", dest="log_level", help="Logging level (default WARNING)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List species matching a search")
    list_parser.add_argument("term", nargs="?", help="Fuzzy search term; saved for next time")
    list_parser.add_argument("--clear", action="store_true", help="Forget the saved search")

    show_parser = subparsers.add_parser("show", help="Show the detail view for one species")
    show_parser.add_argument("identifier", help="Species name or dex number")
    show_parser.add_argument("--output", choices=["text", "json"], default="text")
    show_parser.add_argument("--now", type=_parse_now, help="Reference time for release ages (ISO 8601)")

    stats_parser = subparsers.add_parser("stats", help="CP and HP for an IV/level combination")
    stats_parser.add_argument("identifier", help="Species name or dex number")
    stats_parser.add_argument(
        "--iv", nargs=3, type=int, metavar=("ATK", "DEF", "STA"), default=[15, 15, 15]
    )
    stats_parser.add_argument("--level", type=float)
    stats_parser.add_argument("--output", choices=["text", "json"], default="text")

    export_parser = subparsers.add_parser("export", help="Write the gallery to CSV/Excel")
    export_parser.add_argument("--output-dir", dest="output_dir")
    export_parser.add_argument("--csv-name", dest="csv_name")
    export_parser.add_argument("--excel-name", dest="excel_name")
    export_parser.add_argument("--no-excel", dest="no_excel", action="store_true")

    return parser


def _load_repository(config: AppConfig) -> SpeciesRepository:
    try:
        if config.dataset_path is None:
            return load_default_species()
        return load_species(config.dataset_path)
    except (OSError, ValueError) as exc:
        raise DatasetError(
            f"Could not load species data: {exc}",
            remediation="Check the --dataset path or POGO_DEX_DATASET points at a valid JSON array.",
            context={"dataset": str(config.dataset_path) if config.dataset_path else "bundled"},
        ) from exc


def _resolve_species(repository: SpeciesRepository, identifier: str) -> Species:
    try:
        return repository.get(identifier)
    except KeyError as exc:
        raise InputValidationError(
            f"Unknown species {identifier!r}",
            remediation="Use 'pogo-dex list' to see available names and numbers.",
            context={"identifier": identifier},
        ) from exc


def _cmd_list(args: argparse.Namespace, config: AppConfig, repository: SpeciesRepository) -> Dict[str, Any]:
    try:
        if args.clear:
            preferences.clear_saved_search(config.state_path)
            term = ""
        elif args.term is not None:
            term = preferences.save_search(args.term, config.state_path)
        else:
            term = preferences.load_saved_search(config.state_path)
    except (OSError, ValueError) as exc:
        raise DatasetError(
            f"Could not use saved search state: {exc}",
            remediation="Delete or fix the state file, or pass --state-file.",
            context={"state_file": str(config.state_path)},
        ) from exc

    matches = filter_species(repository, term)
    if term:
        print(f"Search: {term}")
    if matches:
        print(render_cards(build_cards(matches)))
    else:
        print("No species match.")
    return {"term": term, "matches": len(matches)}


def _cmd_show(args: argparse.Namespace, repository: SpeciesRepository) -> Dict[str, Any]:
    species = _resolve_species(repository, args.identifier)
    detail = build_detail(species, now=args.now)
    if args.output == "json":
        print(json.dumps(detail_as_dict(detail), indent=2))
    else:
        print(render_detail(detail))
    return {"species": species.number}


def _cmd_stats(args: argparse.Namespace, repository: SpeciesRepository) -> Dict[str, Any]:
    species = _resolve_species(repository, args.identifier)
    atk_iv, def_iv, hp_iv = args.iv
    cp_level = args.level if args.level is not None else 50.0
    hp_level = args.level if args.level is not None else 40.0
    try:
        cp = calculate_combat_power(species, atk_iv, def_iv, hp_iv, level=cp_level)
    except ValueError as exc:
        raise InputValidationError(
            "IVs produce no valid CP for this species",
            remediation="Use IV values between 0 and 15.",
            context={"ivs": list(args.iv)},
        ) from exc
    hp = calculate_hit_points(species, hp_iv, level=hp_level)
    comparison = has_equal_hit_points_across_iv(species, hp_level)
    result = {
        "number": species.number_label,
        "name": species.name,
        "ivs": [atk_iv, def_iv, hp_iv],
        "cp": {"level": cp_level, "value": cp},
        "hp": {"level": hp_level, "value": hp},
        "fundo": {
            "level": hp_level,
            "equal": comparison.equal,
            "hp_iv14": comparison.hp_low,
            "hp_iv15": comparison.hp_high,
        },
    }
    if args.output == "json":
        print(json.dumps(result, indent=2))
    else:
        print(f"{species.number_label} {species.name} IV {atk_iv}/{def_iv}/{hp_iv}")
        print(f"CP {cp} at L{cp_level:g}")
        print(f"HP {hp} at L{hp_level:g}")
        verdict = "same" if comparison.equal else "different"
        print(
            f"HP with 14 vs 15 HP IV at L{hp_level:g}: "
            f"{comparison.hp_low} / {comparison.hp_high} ({verdict})"
        )
    return {"species": species.number}


def _cmd_export(args: argparse.Namespace, repository: SpeciesRepository) -> Dict[str, Any]:
    export_config = build_export_config(args)
    result = export_gallery(build_gallery_rows(repository), config=export_config)
    print("Saved:", result.csv_path)
    if result.excel_path is None:
        print("Skipped Excel export: disabled via configuration.")
    elif result.excel_written:
        print("Saved:", result.excel_path)
    elif result.excel_error == "pandas-missing":
        print("Skipped Excel export: install the 'pandas' extra to enable Excel output.")
    else:
        print("Warning: failed to write Excel. Reason:", result.excel_error)
    return {"rows": result.rows, "excel_written": result.excel_written}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = build_app_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    configure_logging(config.log_level_number)
    logger = get_logger(__name__)
    trace_id = generate_trace_id()

    try:
        repository = _load_repository(config)
        if args.command == "list":
            summary = _cmd_list(args, config, repository)
        elif args.command == "show":
            summary = _cmd_show(args, repository)
        elif args.command == "stats":
            summary = _cmd_stats(args, repository)
        else:
            summary = _cmd_export(args, repository)
    except PogoDexError as exc:
        logger.error(
            "cli_command_failed",
            extra={
                "event": "cli_command_failed",
                "trace_id": trace_id,
                "command": args.command,
                "error": exc.to_payload(),
            },
        )
        print(f"error: {exc.message} (trace: {trace_id})", file=sys.stderr)
        if exc.remediation:
            print(exc.remediation, file=sys.stderr)
        return exc.exit_code

    logger.info(
        "cli_command_completed",
        extra={"event": "cli_command_completed", "trace_id": trace_id, "command": args.command, **summary},
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
