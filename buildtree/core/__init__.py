# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Core functionality for buildtree.

Main components:
- project_tree: Root project and subordinate modules
- directory_layout: Root resolution and per-module directory assignment
- evaluation_order: Which module is configured first
- build_directory_manager: The configuration pass tying these together
- cleanup: Deleting the relocated tree
- storage: Size and disk usage of the relocated tree
"""

from .build_directory_manager import BuildDirectoryManager
from .cleanup import CleanReport, clean, measure_tree
from .config import LayoutConfig, load_config
from .directory_layout import (
    ROOT_KEY,
    BuildDirectoryAssignment,
    ResolvedRoot,
    apply_assignment,
    apply_to_tree,
    assign_module_directory,
    build_assignment,
    compute_root_directory,
)
from .evaluation_order import EvaluationOrder, enforce_evaluation_order
from .exceptions import (
    BuildtreeError,
    ConfigurationError,
    FileSystemError,
    RootNotResolvedError,
)
from .project_tree import (
    Module,
    ProjectTree,
    discover_modules,
    normalize_module_name,
    validate_module_name,
)
from .storage import disk_usage, summarize_layout

__all__ = [
    "BuildDirectoryManager",
    "CleanReport",
    "clean",
    "measure_tree",
    "LayoutConfig",
    "load_config",
    "ROOT_KEY",
    "BuildDirectoryAssignment",
    "ResolvedRoot",
    "apply_assignment",
    "apply_to_tree",
    "assign_module_directory",
    "build_assignment",
    "compute_root_directory",
    "EvaluationOrder",
    "enforce_evaluation_order",
    "BuildtreeError",
    "ConfigurationError",
    "FileSystemError",
    "RootNotResolvedError",
    "Module",
    "ProjectTree",
    "discover_modules",
    "normalize_module_name",
    "validate_module_name",
    "disk_usage",
    "summarize_layout",
]
