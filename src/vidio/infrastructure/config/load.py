from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

# Flat setting name (env var suffix, CLI override) -> (YAML section, key)
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "playback_mode": ("playback", "mode"),
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}

_TOP_LEVEL_KEYS = ("app_name", "environment")


def _merge_into(base: dict[str, Any], layer: Mapping[str, Any]) -> None:
    """Overlay *layer* onto *base*; sections merge key by key."""
    for key, value in layer.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            current.update(value)
        else:
            base[key] = value


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Accept flat or sectioned keys and return the sectioned shape.

    Flat keys win over a section given in the same layer.
    """
    out: dict[str, Any] = {k: layer[k] for k in _TOP_LEVEL_KEYS if k in layer}

    for section, _ in _FLAT_KEYS.values():
        block = layer.get(section)
        if isinstance(block, Mapping):
            out[section] = dict(block)

    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[key] = layer[flat_key]

    return out


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration with strict precedence:
    defaults < YAML file < env vars (including .env) < cli overrides

    Never writes to the filesystem.
    """
    # .env values join the process environment before EnvOverrides reads it.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [deepcopy(DEFAULT_CONFIG)]
    if config_path is not None:
        layers.append(_read_yaml_config(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        _merge_into(merged, _sectioned(layer))

    return AppConfig.model_validate(merged)
