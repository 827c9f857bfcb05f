#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025 Buildtree Team
# SPDX-License-Identifier: MIT
"""
Buildtree Command Line Interface

Relocates the build output of a multi-module project beneath one shared
root and manages that tree.

Usage examples:
  # Show where each module's build output goes
  buildtree assign --project-dir android

  # Show the module evaluation order
  buildtree order --project-dir android --module app --module plugin

  # Create the relocated directories
  buildtree prepare --project-dir android

  # Show what clean would remove, then remove it
  buildtree clean --project-dir android --dry-run
  buildtree clean --project-dir android

  # Size of the relocated tree and free disk space
  buildtree status --project-dir android --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from buildtree import __version__
from buildtree.core import (
    BuildDirectoryManager,
    ConfigurationError,
    FileSystemError,
    ProjectTree,
    discover_modules,
    load_config,
    summarize_layout,
)

from .ux_config import (
    VerbosityLevel,
    configure_logging_for_verbosity,
    get_verbosity_level,
    set_log_level,
)

logger = logging.getLogger("buildtree-cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def setup_parser():
    """Set up the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="buildtree",
        description="Relocated build output directories for multi-module projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s assign --project-dir android        # Show directory assignment
  %(prog)s clean --dry-run                     # Show what would be cleaned
  %(prog)s clean                               # Delete the relocated tree
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbosity",
        choices=[level.value for level in VerbosityLevel],
        help="Output verbosity level",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override the logging level",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--project-dir",
        default=".",
        help="Location of the project tree (default: current directory)",
    )
    common.add_argument(
        "--module",
        dest="modules",
        action="append",
        default=None,
        help="Subordinate module name, repeatable (default: discover modules)",
    )
    common.add_argument("--root-name", help="Name of the root project")
    common.add_argument("--config", dest="config_file", help="JSON layout config file")
    common.add_argument(
        "--root-offset",
        help="Root build directory relative to the default build dir "
        "(default: ../../build)",
    )
    common.add_argument(
        "--evaluation-root",
        help="Module evaluated before all others (default: app)",
    )
    common.add_argument(
        "--json", action="store_true", help="Output results in JSON format"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser(
        "assign", parents=[common], help="Show the build directory assignment"
    )
    subparsers.add_parser(
        "order", parents=[common], help="Show the module evaluation order"
    )
    subparsers.add_parser(
        "prepare", parents=[common], help="Create the relocated build directories"
    )
    clean_parser = subparsers.add_parser(
        "clean", parents=[common], help="Delete the relocated build tree"
    )
    clean_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be removed without deleting anything",
    )
    clean_parser.add_argument(
        "--progress", action="store_true", help="Show a progress bar while deleting"
    )
    subparsers.add_parser(
        "status", parents=[common], help="Show size of the relocated tree and disk usage"
    )

    return parser


def _load_config(args):
    return load_config(
        config_file=args.config_file,
        overrides={
            "root_offset": args.root_offset,
            "evaluation_root": args.evaluation_root,
        },
    )


def build_manager(args) -> BuildDirectoryManager:
    """Create the manager from command-line arguments."""
    config = _load_config(args)
    project_dir = Path(args.project_dir)
    names = args.modules
    if names is None:
        names = discover_modules(project_dir, config)
        logger.debug(f"Using discovered modules: {names}")

    tree = ProjectTree.from_names(project_dir, names, root_name=args.root_name, config=config)
    return BuildDirectoryManager(tree, config)


def build_root_manager(args) -> BuildDirectoryManager:
    """Create a manager for the root project only; modules are not resolved."""
    config = _load_config(args)
    tree = ProjectTree.from_names(args.project_dir, [], root_name=args.root_name, config=config)
    return BuildDirectoryManager(tree, config)


def _emit(args, data, lines):
    if args.json:
        print(json.dumps(data, indent=2))
    else:
        for line in lines:
            print(line)


def assign_command(args) -> int:
    manager = build_manager(args)
    assignment = manager.configure()
    lines = [f"{assignment.root_name} (root) -> {assignment.root_directory}"]
    lines += [f"  {name} -> {path}" for name, path in assignment]
    _emit(args, assignment.to_dict(), lines)
    return EXIT_OK


def order_command(args) -> int:
    manager = build_manager(args)
    manager.configure()
    order = manager.evaluation_order
    lines = [f"{index}. {name}" for index, name in enumerate(order.sequence(), 1)]
    _emit(args, order.to_dict(), lines)
    return EXIT_OK


def prepare_command(args) -> int:
    manager = build_manager(args)
    assignment = manager.prepare()
    lines = [f"Created {path}" for path in assignment.directories().values()]
    _emit(args, assignment.to_dict(), lines)
    return EXIT_OK


def clean_command(args) -> int:
    # Removing the root removes every module directory, so modules are never read
    manager = build_root_manager(args)
    report = manager.clean(dry_run=args.dry_run, show_progress=args.progress)

    if args.dry_run:
        line = (
            f"Would remove {report.path}: {report.files_removed} files, "
            f"{report.mb_freed:.1f} MB"
        )
    elif report.removed:
        line = (
            f"Removed {report.path}: {report.files_removed} files, "
            f"{report.mb_freed:.1f} MB freed"
        )
    else:
        line = f"Nothing to clean at {report.path}"
    _emit(args, report.to_dict(), [line])
    return EXIT_OK


def status_command(args) -> int:
    manager = build_manager(args)
    summary = summarize_layout(manager.configure())

    lines = [f"Build root: {summary['root']}"]
    for name, entry in summary["directories"].items():
        state = f"{entry['files']} files, {entry['size_mb']:.1f} MB" if entry["exists"] else "missing"
        lines.append(f"  {name}: {state}")
    disk = summary["disk"]
    lines.append(
        f"Disk: {disk['free_gb']:.1f} GB free of {disk['total_gb']:.1f} GB "
        f"({disk['percent_used']:.0f}% used)"
    )
    _emit(args, summary, lines)
    return EXIT_OK


COMMANDS = {
    "assign": assign_command,
    "order": order_command,
    "prepare": prepare_command,
    "clean": clean_command,
    "status": status_command,
}


def main(argv=None):
    """Main entry point for the CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)

    configure_logging_for_verbosity(get_verbosity_level(args.verbosity), "buildtree-cli")
    if args.log_level:
        set_log_level(args.log_level)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    try:
        return COMMANDS[args.command](args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        return EXIT_CONFIG_ERROR
    except FileSystemError as e:
        logger.error(f"File system error: {e.message}")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user")
        return EXIT_FAILURE
    except Exception as e:
        logger.error(f"Error: {str(e)}")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
