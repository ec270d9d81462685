"""Layered configuration loader for the ServiceNow connector."""

import json
import os
from pathlib import Path
from typing import Any

from ._logging import get_logger, redact_config

LOGGER = get_logger("config")


def _read_prefixed_env(prefix: str) -> dict[str, Any]:
    """Read environment keys matching <PREFIX>_* and lower-case the remainder."""
    prefix_token = f"{prefix.upper()}_"
    values: dict[str, Any] = {}

    for key, value in os.environ.items():
        if key.startswith(prefix_token):
            values[key.removeprefix(prefix_token).lower()] = value

    LOGGER.debug("Loaded %s config keys from environment prefix %s", len(values), prefix_token)
    return values


def _parse_config_text(content: str, suffix: str) -> Any:
    if suffix == ".json":
        return json.loads(content)

    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:
            raise RuntimeError("PyYAML is not installed. Add it to requirements to use YAML config files.") from exc
        return yaml.safe_load(content)

    raise ValueError("Unsupported config format. Use JSON (.json) or YAML (.yaml/.yml).")


def read_config_file(file_path: str | Path | None) -> dict[str, Any]:
    """Read a JSON or YAML config file; no path means an empty mapping."""
    if not file_path:
        return {}

    path = Path(file_path)
    if not path.exists():
        LOGGER.error("Config file not found: %s", file_path)
        raise FileNotFoundError(f"Config file not found: {file_path}")

    data = _parse_config_text(path.read_text(encoding="utf-8"), path.suffix.lower())
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a key-value object at the root")

    LOGGER.info("Loaded config file %s", file_path)
    return data


def _not_none_values(values: dict[str, Any] | None) -> dict[str, Any]:
    """Drop keys with None values so they do not mask earlier layers."""
    if not values:
        return {}
    return {key: value for key, value in values.items() if value is not None}


def _apply_aliases(values: dict[str, Any], aliases: dict[str, str] | None) -> dict[str, Any]:
    """Rename alternate key spellings to their canonical name within one layer."""
    if not aliases:
        return values
    return {aliases.get(key, key): value for key, value in values.items()}


def _ensure_required_keys(config: dict[str, Any], required: tuple[str, ...]) -> None:
    missing = [key for key in required if config.get(key) in (None, "")]
    if missing:
        joined = ", ".join(missing)
        LOGGER.error("Required config keys missing: %s", joined)
        raise ValueError(f"Missing required connection config keys: {joined}")


def load_connection_config(
    config: dict[str, Any] | None = None,
    *,
    file_path: str | Path | None = None,
    env_prefix: str | None = None,
    required: tuple[str, ...] = (),
    defaults: dict[str, Any] | None = None,
    overrides: dict[str, Any] | None = None,
    aliases: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Resolve connector options from defaults, file, env, config, and overrides.

    Layers are merged in that order and the last one wins. ``None`` overrides
    are ignored, so keyword arguments left at ``None`` never hide a value
    coming from the file or the environment. ``aliases`` maps alternate key
    spellings (``serviceNowTable``) onto canonical ones before merging.
    """
    layers = [
        defaults or {},
        read_config_file(file_path),
        _read_prefixed_env(env_prefix) if env_prefix else {},
        config or {},
        _not_none_values(overrides),
    ]

    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(_apply_aliases(layer, aliases))

    _ensure_required_keys(merged, required)
    LOGGER.info("Connection config resolved: %s", redact_config(merged))
    return merged
