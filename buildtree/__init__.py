"""
Buildtree: relocated build output directories for multi-module projects

Buildtree moves the build output of a root project and all of its
modules beneath one shared directory outside the project, keeps a
designated module first in evaluation order, and cleans the relocated
tree on demand.

Main components:
- core: Layout computation, evaluation order, cleanup
- cli: Command-line interface
"""

from typing import Any

# Version information
__version__ = "1.0.0"

__all__ = [
    # Package info
    "__version__",
    # Core functionality
    "BuildDirectoryManager",
    "BuildDirectoryAssignment",
    "ProjectTree",
    "LayoutConfig",
    "compute_root_directory",
    "assign_module_directory",
    "enforce_evaluation_order",
    "clean",
    "ConfigurationError",
    "FileSystemError",
]

# Lazy loading for core functionality
_CORE_IMPORTS = set(__all__) - {"__version__"}


def __getattr__(name: str) -> Any:
    """Lazy loading of core functionality."""
    if name in _CORE_IMPORTS:
        from . import core

        return getattr(core, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
