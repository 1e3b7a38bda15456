#!/usr/bin/env python3
# rlconsole/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in the base directory: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with RLCONSOLE_

Validation:
  - PROMPT: str (may be empty)
  - HISTORY_FILE_PATH: None or normalized path
  - HISTORY_LENGTH: int >= -1 (-1 keeps everything)
  - ENGINE: one of ENGINE_NAMES
  - ENABLE_COMPLETION: bool
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH: None or normalized path
"""

from dataclasses import dataclass, field
from typing import Any, Mapping
from pathlib import Path
import configparser
import json
import os
import re
import tomllib

from rlconsole.interface.cli import ENGINE_NAMES

ENV_PREFIX = "RLCONSOLE_"

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "PROMPT": "> ",
    "HISTORY_FILE_PATH": None,
    "HISTORY_LENGTH": 1000,
    "ENGINE": "auto",
    "ENABLE_COMPLETION": True,
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
}


# ---------- data model ----------

@dataclass(frozen=True)
class ConsoleConfig:
    prompt: str
    history_file_path: Path | None
    history_length: int
    engine: str
    enable_completion: bool
    log_level: str | None
    log_file_path: Path | None

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser()
    try:
        cfg.read(path, encoding="utf-8")
    except configparser.Error:
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'history': {'length': 50}} -> {'HISTORY_LENGTH': 50}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(base_dir: Path) -> list[Path]:
    return [
        base_dir / ".env",
        base_dir / "config.ini",
        base_dir / "config.json",
        base_dir / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {val!r}")


def _as_int(key: str, val: Any) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    try:
        return int(str(val).strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {val!r}") from exc


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_opt_path(val: Any, base_dir: Path) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    # expand both ~ and env vars
    p = Path(os.path.expandvars(os.path.expanduser(v)))
    return (p if p.is_absolute() else base_dir / p).resolve()


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _merge_sources(base_dir: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base_dir):
        if file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override all; only our prefix, prefix stripped
    env_overrides = {k[len(ENV_PREFIX):]: v for k, v in environ.items()
                     if k.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", k)}
    merged.update(env_overrides)
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any], base_dir: Path) -> ConsoleConfig:
    prompt_raw = config.get("PROMPT", DEFAULTS["PROMPT"])
    prompt = "" if prompt_raw is None else str(prompt_raw)

    history_file_path = _as_opt_path(
        config.get("HISTORY_FILE_PATH", DEFAULTS["HISTORY_FILE_PATH"]), base_dir)
    history_length = _as_int(
        "HISTORY_LENGTH", config.get("HISTORY_LENGTH", DEFAULTS["HISTORY_LENGTH"]))
    if history_length < -1:
        raise ValueError("HISTORY_LENGTH must be >= -1")

    engine = str(config.get("ENGINE", DEFAULTS["ENGINE"])).strip().lower()
    if engine not in ENGINE_NAMES:
        raise ValueError(
            f"ENGINE must be one of {list(ENGINE_NAMES)}, got {engine!r}")

    enable_completion = _as_bool("ENABLE_COMPLETION", config.get(
        "ENABLE_COMPLETION", DEFAULTS["ENABLE_COMPLETION"]))
    log_level = _as_log_level(config.get("LOG_LEVEL", DEFAULTS["LOG_LEVEL"]))
    log_file_path = _as_opt_path(
        config.get("LOG_FILE_PATH", DEFAULTS["LOG_FILE_PATH"]), base_dir)

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return ConsoleConfig(
        prompt=prompt,
        history_file_path=history_file_path,
        history_length=history_length,
        engine=engine,
        enable_completion=enable_completion,
        log_level=log_level,
        log_file_path=log_file_path,
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    base_dir: Path | str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ConsoleConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects. Raises ValueError on invalid values.
    """
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    raw = _merge_sources(base, os.environ if environ is None else environ)
    return _validate_and_build(raw, base)
