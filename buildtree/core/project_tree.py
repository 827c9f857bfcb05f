# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Project tree model: a root project plus its ordered subordinate modules.

Module names double as directory names under the relocated build root,
so they are normalised from Gradle-style project paths (``:app``) and
validated when the tree is built.
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .config import LayoutConfig
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_SEPARATORS = {"/", "\\", os.sep}


def normalize_module_name(name: str) -> str:
    """Strip the leading ``:`` of a Gradle project path."""
    return name.strip().lstrip(":")


def validate_module_name(name: str) -> str:
    """
    Validate a module name for use as a directory name.

    Returns:
        The normalised name

    Raises:
        ConfigurationError: If the name is empty or not a single path segment
    """
    normalized = normalize_module_name(name) if isinstance(name, str) else name
    if not isinstance(normalized, str) or not normalized:
        raise ConfigurationError(f"Module name must be non-empty: {name!r}", name=name)
    if normalized in (".", ".."):
        raise ConfigurationError(f"Invalid module name: {name!r}", name=name)
    if any(sep in normalized for sep in _SEPARATORS) or ":" in normalized:
        raise ConfigurationError(
            f"Module name must be a single path segment: {name!r}", name=name
        )
    return normalized


@dataclass(frozen=True)
class Module:
    """A build unit with its own output directory."""

    name: str
    build_dir: Optional[Path] = None

    def with_build_dir(self, build_dir: Union[str, Path]) -> "Module":
        return replace(self, build_dir=Path(build_dir))


@dataclass(frozen=True)
class ProjectTree:
    """Root project and ordered, uniquely named subordinate modules."""

    location: Path
    root: Module
    modules: Tuple[Module, ...] = ()

    def __post_init__(self):
        seen = set()
        normalized = []
        for module in self.modules:
            name = validate_module_name(module.name)
            if name in seen:
                raise ConfigurationError(f"Duplicate module name: {name}", name=name)
            seen.add(name)
            normalized.append(module if name == module.name else replace(module, name=name))
        # Stored names are always normalised, e.g. Module(":app") becomes Module("app")
        object.__setattr__(self, "modules", tuple(normalized))

    @classmethod
    def from_names(
        cls,
        location: Union[str, Path],
        names: Iterable[str],
        root_name: Optional[str] = None,
        config: Optional[LayoutConfig] = None,
    ) -> "ProjectTree":
        """
        Build a tree from module names with conventional default build dirs.

        Args:
            location: File-system location of the project tree
            names: Subordinate module names, in declaration order
            root_name: Name of the root project (defaults to the directory name)
            config: Layout configuration for the default build dir name
        """
        config = config or LayoutConfig()
        location = Path(os.path.abspath(location))
        build_dir_name = config.default_build_dir_name

        root = Module(
            name=root_name or location.name or "root",
            build_dir=location / build_dir_name,
        )
        modules = []
        for raw_name in names:
            name = validate_module_name(raw_name)
            modules.append(Module(name=name, build_dir=location / name / build_dir_name))

        return cls(location=location, root=root, modules=tuple(modules))

    def names(self) -> List[str]:
        return [module.name for module in self.modules]

    def module(self, name: str) -> Module:
        name = normalize_module_name(name)
        for module in self.modules:
            if module.name == name:
                return module
        raise ConfigurationError(f"Module not found in project tree: {name}", name=name)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return normalize_module_name(name) in self.names()

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)


def discover_modules(
    location: Union[str, Path], config: Optional[LayoutConfig] = None
) -> List[str]:
    """
    Find subordinate modules by looking for build scripts one level down.

    Hidden directories and the conventional build directory are skipped.
    Results are sorted by name.
    """
    config = config or LayoutConfig()
    location = Path(location)
    if not location.is_dir():
        raise ConfigurationError(f"Project directory not found: {location}")

    found = []
    for child in sorted(location.iterdir()):
        if not child.is_dir() or child.name.startswith("."):
            continue
        if child.name == config.default_build_dir_name:
            continue
        if any((child / script).is_file() for script in config.build_script_names):
            found.append(child.name)

    logger.debug(f"Discovered {len(found)} modules in {location}: {found}")
    return found
