"""YAML-backed dataclass configuration helpers."""

import dataclasses
import logging
import os
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar('T')


def find_config_path(
    config_name: str | None,
    config_dir: Path,
    default_name: str = "prod",
    env_var: str | None = None,
) -> Path:
    """Resolve `<config_dir>/<name>.yaml`.

    The name comes from `config_name`, else `env_var`, else `default_name`.

    Raises:
        FileNotFoundError: If no such file exists; the message lists the available names.
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    config_path = config_dir / f"{config_name}.yaml"
    if not config_path.exists():
        available = sorted(p.stem for p in config_dir.glob("*.yaml"))
        raise FileNotFoundError(f"Config file not found: {config_path} (available: {', '.join(available) or 'none'})")
    return config_path


def load_yaml(path: Path) -> dict:
    """Load a YAML mapping; an empty file loads as {}."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def build_section(cls: type[T], raw: dict[str, Any] | None) -> T:
    """Instantiate dataclass `cls` from a YAML mapping; unknown keys are logged and dropped."""
    raw = raw or {}
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning("Ignoring unknown %s keys: %s", cls.__name__, ", ".join(unknown))
    return cls(**{k: v for k, v in raw.items() if k in known})


class ConfigSingleton(Generic[T]):
    """Process-wide config, loaded on first use.

    Tests and the app factory call `set` to inject a config; `reset` drops it
    so the next `get` reloads from disk.
    """

    def __init__(self, loader: Callable[[], T]):
        self._config: T | None = None
        self._loader = loader

    def get(self) -> T:
        if self._config is None:
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        self._config = config

    def reset(self) -> None:
        self._config = None
