import json

import pytest

from pogo_dex import preferences


@pytest.fixture()
def state_path(tmp_path):
    return tmp_path / "nested" / "state.json"


def test_missing_state_means_empty_search(state_path):
    assert preferences.load_saved_search(state_path) == ""


def test_save_lowercases_and_persists(state_path):
    stored = preferences.save_search("PikA", state_path)
    assert stored == "pika"
    assert preferences.load_saved_search(state_path) == "pika"
    assert json.loads(state_path.read_text()) == {"pokemonSearch": "pika"}


def test_clear_keeps_other_keys(state_path):
    state_path.parent.mkdir(parents=True)
    state_path.write_text(json.dumps({"pokemonSearch": "mew", "other": 1}))
    preferences.clear_saved_search(state_path)
    assert json.loads(state_path.read_text()) == {"other": 1}
    assert preferences.load_saved_search(state_path) == ""


def test_clear_without_state_is_noop(state_path):
    preferences.clear_saved_search(state_path)
    assert not state_path.exists()


def test_blank_file_and_non_string_values_are_ignored(state_path):
    state_path.parent.mkdir(parents=True)
    state_path.write_text("   ")
    assert preferences.load_saved_search(state_path) == ""
    state_path.write_text(json.dumps({"pokemonSearch": 42}))
    assert preferences.load_saved_search(state_path) == ""


def test_corrupt_state_raises(state_path):
    state_path.parent.mkdir(parents=True)
    state_path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        preferences.load_saved_search(state_path)
    state_path.write_text("{not json")
    with pytest.raises(ValueError):
        preferences.save_search("mew", state_path)
