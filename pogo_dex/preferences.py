"""Persistence of the gallery search box between runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

SEARCH_KEY = "pokemonSearch"
DEFAULT_STATE_FILE = Path.home() / ".pogo_dex" / "state.json"


def _load_json(path: Path) -> Any:
    if not path.exists():
        return None
    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return None
    return json.loads(text)


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def _read_state(path: Path) -> dict[str, Any]:
    data = _load_json(path)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"State file {path} must contain a JSON object")
    return dict(data)


def load_saved_search(path: Path | str = DEFAULT_STATE_FILE) -> str:
    """Return the saved search term, or ``""`` when nothing was saved."""

    value = _read_state(Path(path)).get(SEARCH_KEY)
    if isinstance(value, str):
        return value
    return ""


def save_search(term: str, path: Path | str = DEFAULT_STATE_FILE) -> str:
    """Persist the lower-cased *term* and return it."""

    state_path = Path(path)
    state = _read_state(state_path)
    normalized = term.lower()
    state[SEARCH_KEY] = normalized
    _write_json(state_path, state)
    return normalized


def clear_saved_search(path: Path | str = DEFAULT_STATE_FILE) -> None:
    """Forget the saved search term."""

    state_path = Path(path)
    state = _read_state(state_path)
    if SEARCH_KEY not in state:
        return
    del state[SEARCH_KEY]
    _write_json(state_path, state)


__all__ = [
    "DEFAULT_STATE_FILE",
    "SEARCH_KEY",
    "clear_saved_search",
    "load_saved_search",
    "save_search",
]
