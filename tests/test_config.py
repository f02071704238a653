"""Tests for merging CLI arguments with environment configuration."""

from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path

import pytest

from pogo_dex.config import AppConfig, build_app_config, build_export_config
from pogo_dex.preferences import DEFAULT_STATE_FILE


def _export_args(**overrides: object) -> Namespace:
    values = {"output_dir": None, "csv_name": None, "excel_name": None, "no_excel": False}
    values.update(overrides)
    return Namespace(**values)


def test_app_config_defaults() -> None:
    config = build_app_config(Namespace(), env={})
    assert config.dataset_path is None
    assert config.state_path == DEFAULT_STATE_FILE
    assert config.log_level == "WARNING"
    assert config.log_level_number == logging.WARNING


def test_app_config_environment_and_flag_precedence(tmp_path: Path) -> None:
    env = {
        "POGO_DEX_DATASET": str(tmp_path / "env.json"),
        "POGO_DEX_STATE_FILE": str(tmp_path / "env_state.json"),
        "POGO_DEX_LOG_LEVEL": "debug",
    }
    from_env = build_app_config(Namespace(dataset=None, state_file=None, log_level=None), env=env)
    assert from_env.dataset_path == tmp_path / "env.json"
    assert from_env.state_path == tmp_path / "env_state.json"
    assert from_env.log_level == "DEBUG"

    flags = Namespace(dataset=str(tmp_path / "flag.json"), state_file=None, log_level="error")
    from_flags = build_app_config(flags, env=env)
    assert from_flags.dataset_path == tmp_path / "flag.json"
    assert from_flags.log_level == "ERROR"


def test_app_config_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        AppConfig(dataset_path=None, state_path=Path("state.json"), log_level="LOUD")


def test_export_config_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = build_export_config(_export_args(), env={})
    assert config.csv_path == (tmp_path / "pogo_dex_gallery.csv").resolve()
    assert config.excel_path == (tmp_path / "pogo_dex_gallery.xlsx").resolve()
    assert config.excel_requested


def test_export_config_environment_overrides(tmp_path: Path) -> None:
    env = {
        "POGO_DEX_OUTPUT_DIR": str(tmp_path),
        "POGO_DEX_CSV": "dex.csv",
        "POGO_DEX_DISABLE_EXCEL": "yes",
    }
    config = build_export_config(_export_args(), env=env)
    assert config.csv_path == (tmp_path / "dex.csv").resolve()
    assert config.excel_path is None
    assert not config.excel_requested


def test_export_config_absolute_names_are_kept(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere" / "dex.xlsx"
    config = build_export_config(
        _export_args(output_dir=str(tmp_path / "out"), excel_name=str(target)), env={}
    )
    assert config.excel_path == target
    assert config.csv_path.parent == (tmp_path / "out").resolve()
