import functools
import os
import re
from collections.abc import Mapping
from datetime import timedelta
from logging import Logger
from pathlib import Path
from typing import Any

import tomli
import tomli_w
import yaml
from pydantic import BaseModel

from . import exceptions as pce
from .version import __version__, __version_comments__  # noqa: F401

TIME_UNITS = {"d": "days", "h": "hours", "m": "minutes", "s": "seconds"}


def parse_timedelta(s: str | int | float | timedelta | None) -> timedelta:
    """Convert disparate types into a timedelta object.

    Numbers get interpreted as seconds. Strings can be in the formats ``HH:MM:SS``, ``MM:SS`` or ``SS``, or use unit
    suffixes like ``1h 2m 3s``.

    Examples:
        >>> parse_timedelta(2.5)
        datetime.timedelta(seconds=2, microseconds=500000)

        >>> parse_timedelta("02:30")
        datetime.timedelta(seconds=150)

        >>> parse_timedelta("1m 30s")
        datetime.timedelta(seconds=90)

    """
    match s:
        case timedelta():
            return s
        case bool():
            raise ValueError(f"Invalid type for timedelta: {type(s)}. Must be str, int, float, or timedelta")
        case int() | float():
            return timedelta(seconds=s)
        case str() if re.fullmatch(r"(\s*\d+(\.\d+)?\s*[dhms]\s*)+", s):
            return sum(
                (timedelta(**{TIME_UNITS[unit]: float(n)}) for n, unit in re.findall(r"(\d+(?:\.\d+)?)\s*([dhms])", s)),
                timedelta(),
            )
        case str():
            parts = tuple(float(p.strip()) for p in s.split(":"))
            match len(parts):
                case 1:
                    return timedelta(seconds=parts[0])
                case 2:
                    min, sec = parts
                    return timedelta(minutes=min, seconds=sec)
                case 3:
                    hour, min, sec = parts
                    return timedelta(hours=hour, minutes=min, seconds=sec)
                case 4:
                    day, hour, min, sec = parts
                    return timedelta(days=day, hours=hour, minutes=min, seconds=sec)
                case _:
                    raise ValueError(
                        f"Invalid string format for timedelta: {s}."
                        "Must be in the format 'HH:MM:SS', 'MM:SS', or 'SS'."
                    )
        case None:
            return timedelta()
        case _:
            raise ValueError(f"Invalid type for timedelta: {type(s)}. Must be str, int, float, or timedelta")


def write_config_file(file: Path, **kwargs):
    """Writes a single YAML or TOML file."""
    file = Path(file) if not isinstance(file, Path) else file
    match file.suffix:
        case ".yaml" | ".yml":
            return write_yaml_config(file, **kwargs)
        case ".toml":
            return write_toml_config(file, **kwargs)
        case _:
            raise ValueError(f"ERROR: unknown file extension: {file.suffix}")


def write_yaml_config(path: Path, **kwargs):
    with open(path, "w") as stream:
        yaml.dump(kwargs, stream, Dumper=yaml.SafeDumper, sort_keys=False)


def write_toml_config(path: Path, **kwargs):
    with open(path, "wb") as stream:
        tomli_w.dump(kwargs, stream)


def read_config_file(file: Path) -> dict[str, Any]:
    """Reads a single YAML or TOML file.

    This includes all the mechanics for including secrets and environment variables.

    Raises:
        ConfigReadFailure: for anything that goes wrong, with the original error as its cause.
    """
    try:
        file = Path(file) if not isinstance(file, Path) else file
        match file.suffix:
            case ".yaml" | ".yml":
                return read_yaml_config(file)
            case ".toml":
                return read_toml_config(file)
            case _:
                raise ValueError(f"ERROR: unknown file extension: {file.suffix}")
    except Exception as exc:
        raise pce.ConfigReadFailure(file) from exc


def read_toml_config(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        config = tomli.load(f)

    if "secrets" in config:
        secrets_file = path.parent / config["secrets"]
    else:
        secrets_file = path.with_name("secrets.toml")

    try:
        with secrets_file.open("rb") as f:
            secrets = tomli.load(f)
    except FileNotFoundError:
        # We have no secrets
        secrets = None

    return toml_sub(config, secrets, os.environ)


def toml_sub(data: Any, secrets: dict | None, env: Mapping[str, str]) -> Any:
    """Return a copy of ``data`` with ``!secret`` and ``!env`` strings replaced."""
    match data:
        case dict():
            return {key: toml_sub(value, secrets, env) for key, value in data.items()}
        case list():
            return [toml_sub(item, secrets, env) for item in data]
        case str():
            if r := re.match(r"^!secret\s+(\w+)$", data):
                key = r.group(1)
                if secrets is None:
                    raise ValueError(f"!secret used and no secrets file: '{data}'")
                elif key not in secrets:
                    raise ValueError(f"!secret ({key}) not found in secrets file")
                return secrets[key]

            if r := re.match(r"^!env\s+(\w+)$", data):
                key = r.group(1)
                if key not in env:
                    raise ValueError(f"!env ({key}) not found in environment")
                return env[key]

            return data
        case _:
            return data


def _dummy_secret(loader, node):
    pass


def _secret_yaml(secrets: dict | None, loader, node):
    if secrets is None:
        raise ValueError("!secret used but no secrets file found")

    if node.value not in secrets:
        raise ValueError(f"{node.value} not found in secrets file")

    return secrets[node.value]


def _env_var_yaml(loader, node):
    env_var = node.value
    if env_var not in os.environ:
        raise ValueError(f"{env_var} not found in as environment variable")

    return os.environ[env_var]


def _include_yaml(base: Path, loader, node):
    file = base / node.value
    if not file.is_file() or file.suffix not in (".yaml", ".yml"):
        raise ValueError(f"{file} is not a valid yaml file")

    with file.open("r") as f:
        return yaml.load(f, Loader=type(loader))


def _yaml_loader(base: Path, secret_constructor) -> type[yaml.SafeLoader]:
    """Make a SafeLoader subclass with the custom tags, without touching the global SafeLoader."""

    class ConfigLoader(yaml.SafeLoader):
        pass

    ConfigLoader.add_constructor("!include", functools.partial(_include_yaml, base))
    ConfigLoader.add_constructor("!env_var", _env_var_yaml)
    ConfigLoader.add_constructor("!secret", secret_constructor)
    return ConfigLoader


def read_yaml_config(file: Path) -> dict[str, Any]:
    # Initially load file to see if a secrets file is named
    with file.open("r") as yamlfd:
        config = yaml.load(yamlfd, Loader=_yaml_loader(file.parent, _dummy_secret))

    # No need to keep processing if the file is empty
    if not bool(config):
        return {}

    if "secrets" in config:
        secrets_file = file.parent / config["secrets"]
    else:
        secrets_file = file.with_name("secrets.yaml")

    secrets = None
    if secrets_file.exists():
        with secrets_file.open("r") as yamlfd:
            secrets = yaml.safe_load(yamlfd)

    # Read config file again, this time with secrets
    loader = _yaml_loader(file.parent, functools.partial(_secret_yaml, secrets))
    with file.open("r") as yamlfd:
        return yaml.load(yamlfd, Loader=loader)


def extra_field_warnings(model: BaseModel, logger: Logger, prefix: str = "") -> None:
    """Log a warning for every unknown key that made it into ``model`` or any model nested inside it."""
    if model.__pydantic_extra__:
        for field in model.__pydantic_extra__:
            logger.warning(f"Extra config field '{prefix}{field}'. This will be ignored")

    for name, info in type(model).model_fields.items():
        key = f"{prefix}{info.serialization_alias or name}"
        match attr := getattr(model, name):
            case dict():
                for sub_key, val in attr.items():
                    if isinstance(val, BaseModel):
                        extra_field_warnings(val, logger, f"{key}.{sub_key}.")
            case BaseModel():
                extra_field_warnings(attr, logger, f"{key}.")
