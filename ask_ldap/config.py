"""Configuration file handling."""

import argparse
import json
import os
from pathlib import Path
from typing import Any, Dict

from .models import Config


# Config field -> key in the JSON file. The file layout is shared with the
# older Go tool, so existing ~/.go-ask-ldap.conf files can be reused.
FILE_KEYS = {
    "hostname": "Hostname",
    "port": "Port",
    "use_tls": "UseTLS",
    "tls_validate": "TLSValidate",
    "base_dn": "BaseDn",
    "username": "Username",
    "password": "Password",
    "verbosity": "Verbosity",
}

FIELD_TYPES = {
    "hostname": str,
    "port": int,
    "use_tls": bool,
    "tls_validate": bool,
    "base_dn": str,
    "username": str,
    "password": str,
    "verbosity": int,
}


class ConfigError(ValueError):
    """The config file could not be used."""


def resolve_path(path: str) -> Path:
    """Expand '~' and normalize a config file path."""
    return Path(os.path.expanduser(path))


def _check_type(field_name: str, value: Any) -> Any:
    expected = FIELD_TYPES[field_name]
    # bool is an int subclass, so reject it explicitly for int fields
    if expected is int and isinstance(value, bool):
        raise ConfigError(f"'{FILE_KEYS[field_name]}' must be an integer, got {value!r}")
    if not isinstance(value, expected):
        raise ConfigError(
            f"'{FILE_KEYS[field_name]}' must be of type {expected.__name__}, got {value!r}"
        )
    return value


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Keys are matched case-insensitively; unknown keys are ignored.
    Returns a dict keyed by Config field name, containing only the fields
    present in the file. A missing file yields an empty dict.
    """
    path = resolve_path(config_path)
    if not path.exists():
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")

    lowered = {str(k).lower(): v for k, v in data.items()}
    result: Dict[str, Any] = {}
    for field_name, file_key in FILE_KEYS.items():
        if file_key.lower() in lowered:
            result[field_name] = _check_type(field_name, lowered[file_key.lower()])
    return result


def merge_config_with_args(config: Dict[str, Any], args: argparse.Namespace) -> Config:
    """
    Merge config file values with CLI args. CLI args take precedence.

    CLI options default to None, so anything the user did not pass falls
    back to the file, and then to the Config defaults.
    """
    values = dict(config)
    for field_name in FILE_KEYS:
        arg_value = getattr(args, field_name, None)
        if arg_value is not None:
            values[field_name] = arg_value
    return Config(**values)


def write_config(config_path: str, config: Config) -> Path:
    """
    Write the effective configuration back to the JSON file.

    The file holds the bind password, so it is created with mode 0600.
    """
    path = resolve_path(config_path)
    data = {FILE_KEYS[k]: v for k, v in config.to_dict().items()}
    atomic_write_json(path, data)
    return path


def atomic_write_json(path: Path, data: Any, indent: int = 2) -> None:
    """Write JSON atomically using temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(path.suffix + '.tmp')
    try:
        fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with open(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=indent)
            f.write('\n')
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise
