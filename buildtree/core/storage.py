# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Storage summary of a relocated build tree.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import psutil

from .cleanup import measure_tree
from .directory_layout import ROOT_KEY, BuildDirectoryAssignment

logger = logging.getLogger(__name__)

_MB = 1024 * 1024
_GB = 1024 * 1024 * 1024


def _nearest_existing(path: Path) -> Path:
    for candidate in (path, *path.parents):
        if candidate.exists():
            return candidate
    return path


def disk_usage(path: Path) -> Dict[str, float]:
    """Free and total space of the file system that holds ``path``."""
    usage = psutil.disk_usage(str(_nearest_existing(path)))
    return {
        "total_gb": usage.total / _GB,
        "free_gb": usage.free / _GB,
        "percent_used": usage.percent,
    }


def summarize_layout(assignment: BuildDirectoryAssignment) -> Dict[str, Any]:
    """
    Summarize what is currently stored in each assigned directory.

    The root's own entry covers the whole tree; module entries cover their
    own subdirectory only.
    """
    directories = {}
    for name, path in assignment.directories().items():
        files, size = measure_tree(path)
        directories[name] = {
            "path": str(path),
            "exists": path.is_dir(),
            "files": files,
            "size_mb": size / _MB,
        }

    root_entry = directories[ROOT_KEY]
    summary = {
        "root": str(assignment.root_directory),
        "directories": directories,
        "total_files": root_entry["files"],
        "total_size_mb": root_entry["size_mb"],
        "disk": disk_usage(assignment.root_directory),
    }
    logger.debug(
        f"Layout summary for {assignment.root_directory}: "
        f"{summary['total_files']} files, {summary['total_size_mb']:.1f}MB"
    )
    return summary
