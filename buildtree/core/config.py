# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Layout configuration for build directory relocation.

Values come from, in increasing order of precedence: the defaults below,
``BUILDTREE_*`` environment variables, a JSON config file and explicit
overrides (usually CLI flags).
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BUILD_DIR_NAME = "build"
DEFAULT_ROOT_OFFSET = "../../build"
DEFAULT_EVALUATION_ROOT = "app"
DEFAULT_BUILD_SCRIPT_NAMES = ("build.gradle", "build.gradle.kts")

ENV_PREFIX = "BUILDTREE_"
_ENV_KEYS = {
    "ROOT_OFFSET": "root_offset",
    "EVALUATION_ROOT": "evaluation_root",
    "DEFAULT_BUILD_DIR": "default_build_dir_name",
}


@dataclass(frozen=True)
class LayoutConfig:
    """Configuration for the relocated build layout."""

    default_build_dir_name: str = DEFAULT_BUILD_DIR_NAME
    # Resolved against the root project's conventional build directory
    root_offset: str = DEFAULT_ROOT_OFFSET
    evaluation_root: str = DEFAULT_EVALUATION_ROOT
    build_script_names: Tuple[str, ...] = DEFAULT_BUILD_SCRIPT_NAMES

    def __post_init__(self):
        if not self.default_build_dir_name:
            raise ConfigurationError("default_build_dir_name must not be empty")
        if not self.root_offset:
            raise ConfigurationError("root_offset must not be empty")
        if not self.evaluation_root:
            raise ConfigurationError("evaluation_root must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["build_script_names"] = list(self.build_script_names)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutConfig":
        return cls().merged(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "LayoutConfig":
        """Load configuration from a JSON file."""
        return cls.from_dict(read_config_file(path))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LayoutConfig":
        """Build configuration from ``BUILDTREE_*`` environment variables."""
        return cls().merged(env_overrides(environ))

    def merged(self, overrides: Optional[Mapping[str, Any]]) -> "LayoutConfig":
        """Return a copy with every non-None override applied."""
        if not overrides:
            return self

        unknown = sorted(set(overrides) - {f.name for f in fields(self)})
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                details={"unknown_keys": unknown},
            )

        values = {key: value for key, value in overrides.items() if value is not None}
        scripts = values.get("build_script_names")
        if isinstance(scripts, str):
            values["build_script_names"] = (scripts,)
        elif scripts is not None:
            values["build_script_names"] = tuple(scripts)
        return replace(self, **values)


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read the raw key/value pairs of a JSON config file."""
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {config_path}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a JSON object")

    logger.debug(f"Loaded layout config from {config_path}")
    return data


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect configuration values set in the environment."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for suffix, key in _ENV_KEYS.items():
        value = environ.get(ENV_PREFIX + suffix)
        if value:
            overrides[key] = value
    return overrides


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> LayoutConfig:
    """
    Resolve the effective layout configuration.

    Args:
        config_file: Optional JSON config file
        overrides: Explicit values, typically from the command line
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        LayoutConfig with defaults < environment < file < overrides applied
    """
    config = LayoutConfig.from_env(environ)
    if config_file:
        config = config.merged(read_config_file(config_file))
    return config.merged(overrides)
