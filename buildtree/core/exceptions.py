# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Error types raised while configuring or cleaning a relocated build tree.

Nothing here is recovered locally: configuration errors abort the
configuration pass before any directory is touched, and file-system
errors abort the command that triggered them.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union


class BuildtreeError(Exception):
    """Base class for all buildtree failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(BuildtreeError):
    """Invalid project tree or layout configuration."""

    def __init__(
        self,
        message: str,
        name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.name = name
        super().__init__(message, details)


class RootNotResolvedError(ConfigurationError):
    """A module directory was requested before the root was resolved."""

    def __init__(self, name: Optional[str] = None):
        super().__init__(
            "Root build directory has not been resolved; "
            "compute the root directory before assigning modules",
            name=name,
        )


class FileSystemError(BuildtreeError):
    """Creating or deleting part of the relocated tree failed."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.path = Path(path) if path is not None else None
        super().__init__(message, details)
