# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Relocated build directory layout.

The layout is computed in two phases. ``compute_root_directory`` resolves
the shared root once, from the project location; every subordinate
module directory is then derived from that resolved value, which has to
be passed in explicitly:

    <parent of project>/
    ├── <project>/          # sources; <project>/build is NOT used
    └── build/              # resolved root (default offset ../../build)
        ├── app/
        ├── libA/
        └── libB/
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union

from .config import LayoutConfig
from .exceptions import ConfigurationError, RootNotResolvedError
from .project_tree import Module, ProjectTree, validate_module_name

logger = logging.getLogger(__name__)

# Key of the root project in flattened directory mappings (Gradle's root path)
ROOT_KEY = ":"


@dataclass(frozen=True)
class ResolvedRoot:
    """The shared build root, resolved from a project location."""

    path: Path
    project_location: Path
    default_build_dir: Path

    def __str__(self) -> str:
        return str(self.path)


def compute_root_directory(
    project_location: Union[str, Path], config: Optional[LayoutConfig] = None
) -> ResolvedRoot:
    """
    Compute the relocated root build directory.

    The configured offset is resolved against the root project's
    conventional build directory and normalised lexically, so the
    result only depends on the inputs and never touches the file system.

    Raises:
        ConfigurationError: If the offset resolves back to the default location
    """
    config = config or LayoutConfig()
    location = Path(os.path.abspath(project_location))
    default_build_dir = location / config.default_build_dir_name
    root = Path(os.path.normpath(default_build_dir / config.root_offset))

    if root == default_build_dir:
        raise ConfigurationError(
            f"Root offset {config.root_offset!r} resolves to the default build "
            f"directory {default_build_dir}",
            details={"root_offset": config.root_offset},
        )

    logger.debug(f"Resolved build root {root} for project {location}")
    return ResolvedRoot(path=root, project_location=location, default_build_dir=default_build_dir)


def assign_module_directory(root: ResolvedRoot, module_name: str) -> Path:
    """Return ``root/module_name`` for a resolved root."""
    if not isinstance(root, ResolvedRoot):
        raise RootNotResolvedError(name=module_name)
    return root.path / validate_module_name(module_name)


def apply_assignment(module: Module, path: Union[str, Path]) -> Module:
    """Return ``module`` with its output directory set to ``path``."""
    return module.with_build_dir(path)


@dataclass(frozen=True)
class BuildDirectoryAssignment:
    """Immutable output directory of the root project and every module."""

    root_name: str
    root_directory: Path
    module_directories: Tuple[Tuple[str, Path], ...] = ()

    def for_module(self, name: str) -> Path:
        if name == ROOT_KEY:
            return self.root_directory
        for module_name, path in self.module_directories:
            if module_name == name:
                return path
        raise ConfigurationError(f"No directory assigned to module: {name}", name=name)

    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.module_directories)

    def directories(self) -> Dict[str, Path]:
        """Flattened mapping, with the root project under ``ROOT_KEY``."""
        mapping = {ROOT_KEY: self.root_directory}
        mapping.update(self.module_directories)
        return mapping

    def __getitem__(self, name: str) -> Path:
        return self.for_module(name)

    def __iter__(self) -> Iterator[Tuple[str, Path]]:
        return iter(self.module_directories)

    def __len__(self) -> int:
        return len(self.module_directories)

    def to_dict(self):
        return {
            "root": {"name": self.root_name, "path": str(self.root_directory)},
            "modules": {name: str(path) for name, path in self.module_directories},
        }


def build_assignment(tree: ProjectTree, root: ResolvedRoot) -> BuildDirectoryAssignment:
    """
    Assign every subordinate module of ``tree`` a directory under ``root``.

    Raises:
        RootNotResolvedError: If ``root`` is not a resolved root
        ConfigurationError: On duplicate or invalid module names
    """
    if not isinstance(root, ResolvedRoot):
        raise RootNotResolvedError()

    assigned = {}
    for module in tree.modules:
        name = validate_module_name(module.name)
        if name in assigned:
            raise ConfigurationError(f"Duplicate module name: {name}", name=name)
        assigned[name] = assign_module_directory(root, name)

    return BuildDirectoryAssignment(
        root_name=tree.root.name,
        root_directory=root.path,
        module_directories=tuple(assigned.items()),
    )


def apply_to_tree(tree: ProjectTree, assignment: BuildDirectoryAssignment) -> ProjectTree:
    """Return a copy of ``tree`` with every output directory relocated."""
    return ProjectTree(
        location=tree.location,
        root=apply_assignment(tree.root, assignment.root_directory),
        modules=tuple(
            apply_assignment(module, assignment.for_module(module.name))
            for module in tree.modules
        ),
    )
