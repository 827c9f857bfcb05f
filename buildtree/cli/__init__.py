"""
Buildtree CLI Module

This module provides the command-line interface for buildtree.
It includes the main entry point for CLI usage.
"""

from .main import main

__all__ = ["main"]
