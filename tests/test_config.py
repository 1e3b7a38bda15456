from __future__ import annotations

import json
from pathlib import Path

import pytest

from rlconsole.config import DEFAULTS, load_config


def test_defaults_without_sources(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert config.prompt == DEFAULTS["PROMPT"]
    assert config.history_file_path is None
    assert config.history_length == 1000
    assert config.engine == "auto"
    assert config.enable_completion is True
    assert config.log_level is None
    assert config.extra == {}


def test_toml_file_with_nested_tables(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text(
        'prompt = "db> "\n'
        "[history]\n"
        'file_path = "hist/console"\n'
        "length = 50\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path, environ={})

    assert config.prompt == "db> "
    assert config.history_length == 50
    assert config.history_file_path == (tmp_path / "hist" / "console").resolve()


def test_later_sources_win(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text('ENGINE="plain"\nLOG_LEVEL=info\n', encoding="utf-8")
    (tmp_path / "config.json").write_text(json.dumps({"engine": "readline"}), encoding="utf-8")

    config = load_config(tmp_path, environ={"RLCONSOLE_LOG_LEVEL": "debug"})

    assert config.engine == "readline"
    assert config.log_level == "DEBUG"


def test_ini_file_and_boolean_coercion(tmp_path: Path) -> None:
    (tmp_path / "config.ini").write_text(
        "[console]\nenable_completion = off\n", encoding="utf-8")

    assert load_config(tmp_path, environ={}).enable_completion is False


def test_unprefixed_environment_is_ignored(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={"PROMPT": "$ ", "ENGINE": "bogus"})
    assert config.prompt == DEFAULTS["PROMPT"]


def test_unknown_keys_are_kept(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={"RLCONSOLE_THEME": "dark"})
    assert config.extra == {"THEME": "dark"}


@pytest.mark.parametrize(
    ("key", "value", "message"),
    [
        ("RLCONSOLE_ENGINE", "emacs", "ENGINE"),
        ("RLCONSOLE_LOG_LEVEL", "loud", "LOG_LEVEL"),
        ("RLCONSOLE_HISTORY_LENGTH", "-5", "HISTORY_LENGTH"),
        ("RLCONSOLE_HISTORY_LENGTH", "many", "HISTORY_LENGTH must be an integer"),
        ("RLCONSOLE_ENABLE_COMPLETION", "maybe", "ENABLE_COMPLETION must be a boolean"),
    ],
)
def test_invalid_values_raise(tmp_path: Path, key: str, value: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        load_config(tmp_path, environ={key: value})
