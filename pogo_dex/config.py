"""Runtime settings merged from CLI arguments and environment variables."""

from __future__ import annotations

import logging
import os
from argparse import Namespace
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .preferences import DEFAULT_STATE_FILE

__all__ = ["AppConfig", "ExportConfig", "build_app_config", "build_export_config"]

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class AppConfig:
    """Where the dataset and saved search live, and how loud logging is."""

    dataset_path: Path | None
    state_path: Path
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(sorted(_LOG_LEVELS))}."
            )

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


@dataclass(frozen=True)
class ExportConfig:
    """Configuration describing how gallery exports should be produced."""

    csv_path: Path
    excel_path: Path | None

    @property
    def excel_requested(self) -> bool:
        """Return ``True`` when an Excel file should be attempted."""

        return self.excel_path is not None


def _truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in {"1", "true", "yes", "on"}


def _resolve_output_path(base_dir: Path, value: str | Path) -> Path:
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate
    return (base_dir / candidate).resolve()


def build_app_config(
    args: Namespace,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Construct application settings; CLI flags win over the environment."""

    env = os.environ if env is None else env

    dataset = getattr(args, "dataset", None) or env.get("POGO_DEX_DATASET")
    dataset_path = Path(dataset).expanduser() if dataset else None

    state = getattr(args, "state_file", None) or env.get("POGO_DEX_STATE_FILE")
    state_path = Path(state).expanduser() if state else DEFAULT_STATE_FILE

    log_level = getattr(args, "log_level", None) or env.get("POGO_DEX_LOG_LEVEL") or "WARNING"

    return AppConfig(
        dataset_path=dataset_path,
        state_path=state_path,
        log_level=log_level.strip().upper(),
    )


def build_export_config(
    args: Namespace,
    env: Mapping[str, str] | None = None,
) -> ExportConfig:
    """Construct export settings by merging CLI arguments and environment variables."""

    env = os.environ if env is None else env
    if args.output_dir is not None:
        base_dir = Path(args.output_dir).expanduser()
    else:
        env_dir = env.get("POGO_DEX_OUTPUT_DIR")
        base_dir = Path(env_dir).expanduser() if env_dir else Path.cwd()

    csv_name = args.csv_name or env.get("POGO_DEX_CSV") or "pogo_dex_gallery.csv"
    csv_path = _resolve_output_path(base_dir, csv_name)

    disable_excel = args.no_excel or _truthy(env.get("POGO_DEX_DISABLE_EXCEL"))
    if disable_excel:
        excel_path = None
    else:
        excel_name = args.excel_name or env.get("POGO_DEX_EXCEL") or "pogo_dex_gallery.xlsx"
        excel_path = _resolve_output_path(base_dir, excel_name)

    return ExportConfig(csv_path=csv_path, excel_path=excel_path)
