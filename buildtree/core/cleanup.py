# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Clean operation for the relocated build tree.

``clean`` deletes the entire tree under the resolved root. A missing
root is not an error. Any failure to delete is raised as a
``FileSystemError`` and aborts the command; nothing is retried.
"""

import logging
import os
import shutil
import sys
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from tqdm import tqdm

from .directory_layout import ResolvedRoot
from .exceptions import ConfigurationError, FileSystemError

logger = logging.getLogger(__name__)


@dataclass
class CleanReport:
    """Outcome of a clean run."""

    path: str
    removed: bool = False
    dry_run: bool = False
    files_removed: int = 0
    bytes_freed: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def mb_freed(self) -> float:
        return self.bytes_freed / (1024 * 1024)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["mb_freed"] = round(self.mb_freed, 3)
        return data


def measure_tree(path: Union[str, Path]) -> Tuple[int, int]:
    """Count files and bytes below ``path`` without following symlinks."""
    path = Path(path)
    if not path.exists():
        return 0, 0

    files = 0
    total = 0
    for dirpath, _, filenames in os.walk(path):
        for filename in filenames:
            file_path = Path(dirpath) / filename
            try:
                total += file_path.lstat().st_size
            except OSError as e:
                logger.debug(f"Could not stat {file_path}: {e}")
            files += 1
    return files, total


def _check_not_containing_project(root: Path, project_location: Optional[Path]):
    if project_location is None:
        return
    project = Path(os.path.abspath(project_location))
    if root == project or root in project.parents:
        raise ConfigurationError(
            f"Refusing to clean {root}: it contains the project at {project}",
            details={"root": str(root), "project_location": str(project)},
        )


def _raise_delete_error(path: Path, error: OSError):
    raise FileSystemError(
        f"Failed to delete {path}: {error.strerror or error}", path=path
    ) from error


def clean(
    root: Union[str, Path, ResolvedRoot],
    project_location: Optional[Union[str, Path]] = None,
    dry_run: bool = False,
    show_progress: bool = False,
) -> CleanReport:
    """
    Delete the whole relocated tree rooted at ``root``.

    Args:
        root: Resolved build root (or a ResolvedRoot)
        project_location: Project sources; a root containing them is refused
        dry_run: Report what would be removed without deleting anything
        show_progress: Show a progress bar over the root's direct children

    Returns:
        CleanReport describing what was (or would be) removed

    Raises:
        FileSystemError: If the root cannot be deleted
        ConfigurationError: If the root contains the project location
    """
    if isinstance(root, ResolvedRoot):
        project_location = project_location or root.project_location
        root = root.path
    root = Path(os.path.abspath(root))
    _check_not_containing_project(root, project_location)

    report = CleanReport(path=str(root), dry_run=dry_run)

    if not root.exists() and not root.is_symlink():
        logger.info(f"Nothing to clean: {root} does not exist")
        return report

    if root.is_symlink() or not root.is_dir():
        raise FileSystemError(f"Build root is not a directory: {root}", path=root)

    report.files_removed, report.bytes_freed = measure_tree(root)

    if dry_run:
        logger.info(
            f"Would remove {root}: {report.files_removed} files, "
            f"{report.mb_freed:.1f}MB"
        )
        return report

    try:
        children = sorted(root.iterdir())
    except OSError as e:
        _raise_delete_error(root, e)

    progress = tqdm(
        children,
        desc=f"Cleaning {root.name}",
        unit="dir",
        file=sys.stderr,
        leave=False,
        disable=not show_progress,
    )
    with progress:
        for child in progress:
            try:
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
            except OSError as e:
                _raise_delete_error(child, e)
            logger.debug(f"Removed {child}")

    try:
        root.rmdir()
    except OSError as e:
        _raise_delete_error(root, e)

    report.removed = True
    logger.info(
        f"Cleaned {root}: {report.files_removed} files, {report.mb_freed:.1f}MB freed"
    )
    return report
