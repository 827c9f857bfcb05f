"""CLI tests for buildtree."""
