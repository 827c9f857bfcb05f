# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Buildtree CLI output configuration

Verbosity levels and the logging setup that goes with each of them.
"""

import logging
import os
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

VERBOSITY_ENV = "BUILDTREE_VERBOSITY"


class VerbosityLevel(Enum):
    """Output verbosity levels for the CLI."""

    MINIMAL = "minimal"  # Only warnings, errors and final results
    NORMAL = "normal"  # Lifecycle messages
    DETAILED = "detailed"  # Per-module detail from the CLI
    DEBUG = "debug"  # Full debugging information


def get_verbosity_level(value: Optional[str] = None) -> VerbosityLevel:
    """Resolve verbosity from an explicit value or ``BUILDTREE_VERBOSITY``."""
    value = value or os.environ.get(VERBOSITY_ENV, VerbosityLevel.NORMAL.value)
    try:
        return VerbosityLevel(value.lower())
    except ValueError:
        logger.warning(f"Unknown verbosity '{value}', using normal")
        return VerbosityLevel.NORMAL


_DETAILED_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# verbosity -> (root level, CLI logger level, format)
_LOGGING_LEVELS = {
    VerbosityLevel.MINIMAL: (logging.WARNING, logging.WARNING, "%(message)s"),
    VerbosityLevel.NORMAL: (logging.INFO, logging.INFO, "%(levelname)s: %(message)s"),
    VerbosityLevel.DETAILED: (logging.INFO, logging.DEBUG, _DETAILED_FORMAT),
    VerbosityLevel.DEBUG: (logging.DEBUG, logging.DEBUG, _DETAILED_FORMAT),
}


def configure_logging_for_verbosity(
    verbosity: VerbosityLevel, logger_name: str = "buildtree-cli"
):
    """Replace the root handlers with one stream handler for ``verbosity``."""
    root_level, cli_level, fmt = _LOGGING_LEVELS[verbosity]

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    root_logger.addHandler(handler)
    root_logger.setLevel(root_level)
    logging.getLogger(logger_name).setLevel(cli_level)


def set_log_level(level: str):
    """Override the root log level, e.g. from ``--log-level``."""
    logging.getLogger().setLevel(getattr(logging, level.upper()))
