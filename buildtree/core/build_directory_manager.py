# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Build directory management for a multi-module project tree.

BuildDirectoryManager runs the configuration pass that relocates every
module's build output beneath one shared root:

1. compute the root directory from the project location and apply it
   to the root project
2. assign each subordinate module ``root/<module name>``
3. require the designated module (``app`` by default) to be evaluated
   before every other module

The pass is single-threaded and runs once; its result is an immutable
BuildDirectoryAssignment. ``clean`` deletes the relocated tree and can
run whether or not anything was configured or built.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .cleanup import CleanReport, clean
from .config import LayoutConfig
from .directory_layout import (
    BuildDirectoryAssignment,
    ResolvedRoot,
    apply_assignment,
    apply_to_tree,
    assign_module_directory,
    build_assignment,
    compute_root_directory,
)
from .evaluation_order import EvaluationOrder, enforce_evaluation_order
from .exceptions import FileSystemError, RootNotResolvedError
from .project_tree import ProjectTree

logger = logging.getLogger(__name__)


class BuildDirectoryManager:
    """
    Centralized, non-default build output layout for a project tree.

    Example:
        tree = ProjectTree.from_names("/proj", ["app", "libA", "libB"])
        manager = BuildDirectoryManager(tree)
        assignment = manager.configure()
        assignment["libA"]  # Path("/build/libA")
        manager.clean()
    """

    def __init__(self, tree: ProjectTree, config: Optional[LayoutConfig] = None):
        self.tree = tree
        self.config = config or LayoutConfig()

        self.root_module = tree.root
        self.resolved_root: Optional[ResolvedRoot] = None
        self.assignment: Optional[BuildDirectoryAssignment] = None
        self.evaluation_order: Optional[EvaluationOrder] = None
        self.configured_tree: Optional[ProjectTree] = None

        logger.debug(
            f"Build directory manager initialized for {tree.location} "
            f"({len(tree)} modules)"
        )

    @property
    def is_configured(self) -> bool:
        return self.assignment is not None and self.evaluation_order is not None

    def compute_root_directory(self) -> ResolvedRoot:
        """Phase 1: resolve the shared root and apply it to the root project."""
        if self.resolved_root is None:
            self.resolved_root = compute_root_directory(self.tree.location, self.config)
            self.root_module = apply_assignment(self.tree.root, self.resolved_root.path)
            logger.info(f"Build root relocated to {self.resolved_root.path}")
        return self.resolved_root

    def assign_module_directory(self, module_name: str) -> Path:
        if self.resolved_root is None:
            raise RootNotResolvedError(name=module_name)
        return assign_module_directory(self.resolved_root, module_name)

    def assign_subprojects(self) -> BuildDirectoryAssignment:
        """Phase 2: give every subordinate module a directory under the root."""
        if self.resolved_root is None:
            raise RootNotResolvedError()

        assignment = build_assignment(self.tree, self.resolved_root)
        for name, path in assignment:
            logger.debug(f"Module '{name}' -> {path}")
        return assignment

    def enforce_evaluation_order(self, module_name: Optional[str] = None) -> EvaluationOrder:
        """Require ``module_name`` to be configured before every other module."""
        order = enforce_evaluation_order(
            self.tree, module_name or self.config.evaluation_root
        )
        self.evaluation_order = order
        return order

    def configure(self) -> BuildDirectoryAssignment:
        """
        Run the configuration pass once.

        No directory is created. Configuration errors surface here, before
        any build work could start.

        Returns:
            The immutable directory assignment
        """
        if self.is_configured:
            return self.assignment

        # Fail on a missing evaluation target before anything is assigned
        order = self.enforce_evaluation_order()

        self.compute_root_directory()
        assignment = self.assign_subprojects()

        self.configured_tree = apply_to_tree(self.tree, assignment)
        self.assignment = assignment
        logger.info(
            f"Configured {len(assignment)} modules under {assignment.root_directory} "
            f"(evaluation starts with '{order.first}')"
        )
        return assignment

    def prepare(self) -> BuildDirectoryAssignment:
        """Configure, then create the root and every module directory."""
        assignment = self.configure()
        for name, path in assignment.directories().items():
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FileSystemError(
                    f"Failed to create build directory for '{name}': {path}: "
                    f"{e.strerror or e}",
                    path=path,
                ) from e
        logger.info(f"Created {len(assignment) + 1} build directories")
        return assignment

    def clean(self, dry_run: bool = False, show_progress: bool = False) -> CleanReport:
        """Delete the relocated tree; a missing tree is not an error."""
        root = self.compute_root_directory()
        return clean(root, dry_run=dry_run, show_progress=show_progress)

    def summary(self) -> Dict[str, Any]:
        """Assignment and evaluation order as plain data."""
        assignment = self.configure()
        return {
            "project_location": str(self.tree.location),
            "config": self.config.to_dict(),
            "assignment": assignment.to_dict(),
            "evaluation_order": self.evaluation_order.to_dict(),
        }
