from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from waveparser.core.errors import ConfigError
from waveparser.resources import schemas_dir

CONFIG_ENV_VAR = "WAVEPARSER_CONFIG"
_YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass(frozen=True)
class LoadConfig:
    truncate_payload: bool = False
    strict_file_type: bool = False
    pad_odd_chunks: bool = False


DEFAULT_LOAD_CONFIG = LoadConfig()


def _load_json_schema(schema_path: Path) -> dict[str, Any]:
    try:
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to load schema from {schema_path}: {exc}") from exc
    if not isinstance(schema, dict):
        raise ConfigError(f"Schema JSON must be an object: {schema_path}")
    return schema


def _validate_against_schema(payload: dict[str, Any]) -> None:
    schema = _load_json_schema(schemas_dir() / "load_config.schema.json")
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=lambda err: list(err.path))
    if not errors:
        return

    lines: list[str] = []
    for err in errors:
        path = ".".join(str(item) for item in err.path) or "$"
        lines.append(f"- {path}: {err.message}")
    details = "\n".join(lines)
    raise ConfigError(f"Load config schema validation failed:\n{details}")


def normalize_load_config(payload: Any) -> LoadConfig:
    """Validate an in-memory mapping and return the matching LoadConfig."""
    if payload is None:
        return DEFAULT_LOAD_CONFIG
    if not isinstance(payload, dict):
        raise ConfigError("Load config must be a mapping.")
    _validate_against_schema(payload)
    return LoadConfig(**payload)


def _read_config_payload(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read load config from {path}: {exc}") from exc

    if path.suffix.lower() in _YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Load config YAML is not valid YAML: {path}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Load config JSON is not valid JSON: {path}") from exc


def load_config(path: Path | str) -> LoadConfig:
    """Load a JSON or YAML load config file."""
    config_path = Path(path)
    payload = _read_config_payload(config_path)
    if not isinstance(payload, dict):
        raise ConfigError(f"Load config root must be a mapping: {config_path}")
    return normalize_load_config(payload)


def resolve_load_config(path: Path | str | None = None) -> LoadConfig:
    """Return the config from ``path``, else ``$WAVEPARSER_CONFIG``, else defaults."""
    if path is not None:
        return load_config(path)
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return load_config(Path(env).expanduser())
    return DEFAULT_LOAD_CONFIG
