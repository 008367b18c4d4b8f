"""Run configuration and the optional ``ccgen.toml`` project file.

Command-line flags always win; ``ccgen.toml`` only supplies defaults.  The
file is looked up from the current directory upward, similar to how ``git``
locates ``.git/``, and may be absent entirely::

    [backend]
    command = "gcc"      # default for -x
    shell = true         # false: exec argv directly, no shell

    [output]
    extension = "o"      # default for -e

    [limits]
    max_options = 100
    max_alternatives = 10
    max_args = 100
    max_command_len = 1000
    max_filename_len = 50

Usage::

    from ccgen.config import build_run_config, load_settings

    settings = load_settings()
    run_cfg = build_run_config(settings, backend="clang", args=["a.c"])
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ccgen.errors import CapacityExceededError, ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = "ccgen.toml"
DEFAULT_BACKEND = "cc"


@dataclass(frozen=True)
class Limits:
    """Fixed maxima; buffer capacities include the terminating marker."""

    max_options: int = 100
    max_alternatives: int = 10
    max_args: int = 100
    max_command_len: int = 1000
    max_filename_len: int = 50


@dataclass(frozen=True)
class Settings:
    """Defaults read from ``ccgen.toml`` (or built in)."""

    backend: str = DEFAULT_BACKEND
    shell: bool = True
    extension: str | None = None
    limits: Limits = field(default_factory=Limits)
    source: Path | None = None


@dataclass(frozen=True)
class RunConfiguration:
    """Process-wide settings, read-only once argument parsing is done."""

    backend: str = DEFAULT_BACKEND
    output_base: str | None = None
    extension: str | None = None
    log_file: Path | None = None
    arguments: tuple[str, ...] = ()
    shell: bool = True
    limits: Limits = field(default_factory=Limits)


def normalize_extension(ext: str | None) -> str | None:
    """Strip one leading dot so ``.o`` and ``o`` both give ``<name>.o``."""
    if ext is None:
        return None
    if ext.startswith("."):
        ext = ext[1:]
    return ext or None


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (or cwd) and return the first ``ccgen.toml``."""
    candidate = (start or Path.cwd()).resolve()
    while True:
        path = candidate / CONFIG_FILENAME
        if path.is_file():
            return path
        if candidate == candidate.parent:
            return None
        candidate = candidate.parent


def _get(table: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = table.get(key, default)
    # bool is an int subclass; don't accept it where a number is expected
    if value is not default and (
        not isinstance(value, kind) or (kind is int and isinstance(value, bool))
    ):
        raise ConfigError(f"{key!r} must be of type {kind.__name__}, got {value!r}")
    return value


def _table(raw: dict[str, Any], name: str) -> dict[str, Any]:
    table = raw.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{name}] must be a table")
    return table


def _parse_limits(table: dict[str, Any]) -> Limits:
    defaults = Limits()
    values = {}
    for name in Limits.__dataclass_fields__:
        value = _get(table, name, int, getattr(defaults, name))
        if value < 1:
            raise ConfigError(f"limits.{name} must be >= 1 (got {value})")
        values[name] = value
    return Limits(**values)


def load_settings(path: Path | None = None, start: Path | None = None) -> Settings:
    """Load ``ccgen.toml``.

    Args:
        path: Explicit config file; must exist.  Auto-detected if ``None``.
        start: Directory to start the upward search from (default: cwd).

    Returns built-in defaults when no file is found.
    """
    if path is None:
        path = find_config(start)
        if path is None:
            return Settings()
    elif not path.is_file():
        raise ConfigError(f"Config not found: {path}")

    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    backend = _table(raw, "backend")
    output = _table(raw, "output")

    return Settings(
        backend=_get(backend, "command", str, DEFAULT_BACKEND),
        shell=_get(backend, "shell", bool, True),
        extension=normalize_extension(_get(output, "extension", str, None)),
        limits=_parse_limits(_table(raw, "limits")),
        source=path,
    )


def build_run_config(
    settings: Settings,
    *,
    backend: str | None = None,
    output_base: str | None = None,
    extension: str | None = None,
    log_file: Path | None = None,
    args: list[str] | None = None,
) -> RunConfiguration:
    """Merge command-line values over *settings* into a RunConfiguration."""
    arguments = tuple(args or ())
    if len(arguments) > settings.limits.max_args:
        raise CapacityExceededError("arguments", settings.limits.max_args)

    return RunConfiguration(
        backend=backend if backend is not None else settings.backend,
        output_base=output_base,
        extension=normalize_extension(extension) if extension is not None else settings.extension,
        log_file=log_file,
        arguments=arguments,
        shell=settings.shell,
        limits=settings.limits,
    )
