"""
Tests for BuildDirectoryManager.
"""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from buildtree.core.build_directory_manager import BuildDirectoryManager
from buildtree.core.config import LayoutConfig
from buildtree.core.exceptions import (
    ConfigurationError,
    FileSystemError,
    RootNotResolvedError,
)
from buildtree.core.project_tree import ProjectTree


class TestBuildDirectoryManager(unittest.TestCase):
    """Test the configuration pass on an in-memory tree."""

    def setUp(self):
        self.tree = ProjectTree.from_names("/proj", ["app", "libA", "libB"])
        self.manager = BuildDirectoryManager(self.tree)

    def test_configure_scenario(self):
        assignment = self.manager.configure()

        self.assertEqual(assignment.root_directory, Path("/build"))
        self.assertEqual(
            dict(assignment),
            {
                "app": Path("/build/app"),
                "libA": Path("/build/libA"),
                "libB": Path("/build/libB"),
            },
        )
        self.assertTrue(self.manager.is_configured)

    def test_configure_applies_root_then_modules(self):
        self.manager.configure()

        self.assertEqual(self.manager.root_module.build_dir, Path("/build"))
        configured = self.manager.configured_tree
        self.assertEqual(configured.root.build_dir, Path("/build"))
        self.assertEqual(configured.module("libB").build_dir, Path("/build/libB"))
        # The input tree is left untouched
        self.assertEqual(self.tree.module("libB").build_dir, Path("/proj/libB/build"))

    def test_configure_is_computed_once(self):
        first = self.manager.configure()
        second = self.manager.configure()

        self.assertIs(first, second)

    def test_module_assignment_before_root_resolution_fails(self):
        with self.assertRaises(RootNotResolvedError):
            self.manager.assign_module_directory("libA")
        with self.assertRaises(RootNotResolvedError):
            self.manager.assign_subprojects()

    def test_two_phase_calls(self):
        root = self.manager.compute_root_directory()
        self.assertEqual(root.path, Path("/build"))
        self.assertEqual(self.manager.assign_module_directory("libA"), Path("/build/libA"))
        self.assertEqual(len(self.manager.assign_subprojects()), 3)

    def test_compute_root_directory_is_stable(self):
        self.assertIs(
            self.manager.compute_root_directory(), self.manager.compute_root_directory()
        )

    def test_evaluation_order(self):
        self.manager.configure()

        self.assertEqual(self.manager.evaluation_order.sequence(), ("app", "libA", "libB"))

    def test_evaluation_root_from_config(self):
        manager = BuildDirectoryManager(self.tree, LayoutConfig(evaluation_root="libB"))
        manager.configure()

        self.assertEqual(manager.evaluation_order.first, "libB")

    def test_missing_evaluation_root_fails_configuration(self):
        tree = ProjectTree.from_names("/proj", ["libA", "libB"])
        manager = BuildDirectoryManager(tree)

        with self.assertRaises(ConfigurationError) as ctx:
            manager.configure()

        self.assertEqual(ctx.exception.name, "app")
        self.assertIsNone(manager.assignment)
        self.assertFalse(manager.is_configured)

    def test_summary(self):
        summary = self.manager.summary()

        self.assertEqual(summary["project_location"], "/proj")
        self.assertEqual(summary["assignment"]["modules"]["app"], "/build/app")
        self.assertEqual(summary["evaluation_order"]["first"], "app")
        self.assertEqual(summary["config"]["root_offset"], "../../build")


class TestBuildDirectoryManagerFileSystem(unittest.TestCase):
    """Test prepare and clean against a real directory tree."""

    def setUp(self):
        self.test_base_dir = Path(tempfile.mkdtemp(prefix="test_build_mgr_"))
        self.project = self.test_base_dir / "proj"
        self.project.mkdir()
        self.build_root = self.test_base_dir / "build"
        self.tree = ProjectTree.from_names(self.project, ["app", "libA", "libB"])

    def tearDown(self):
        if self.test_base_dir.exists():
            shutil.rmtree(self.test_base_dir)

    def test_configure_creates_nothing(self):
        BuildDirectoryManager(self.tree).configure()

        self.assertFalse(self.build_root.exists())
        self.assertFalse((self.project / "build").exists())

    def test_prepare_creates_every_directory(self):
        assignment = BuildDirectoryManager(self.tree).prepare()

        for path in assignment.directories().values():
            self.assertTrue(path.is_dir())
        self.assertEqual(
            sorted(p.name for p in self.build_root.iterdir()), ["app", "libA", "libB"]
        )

    def test_missing_evaluation_root_creates_no_directory(self):
        tree = ProjectTree.from_names(self.project, ["libA", "libB"])

        with self.assertRaises(ConfigurationError):
            BuildDirectoryManager(tree).prepare()

        self.assertFalse(self.build_root.exists())

    def test_prepare_failure_raises_file_system_error(self):
        with patch("pathlib.Path.mkdir", side_effect=PermissionError(13, "Permission denied")):
            with self.assertRaises(FileSystemError) as ctx:
                BuildDirectoryManager(self.tree).prepare()

        self.assertIsInstance(ctx.exception.__cause__, PermissionError)

    def test_clean_after_prepare(self):
        manager = BuildDirectoryManager(self.tree)
        manager.prepare()
        (self.build_root / "libA" / "classes.jar").write_bytes(b"x" * 64)

        report = manager.clean()

        self.assertTrue(report.removed)
        self.assertEqual(report.files_removed, 1)
        self.assertEqual(report.bytes_freed, 64)
        self.assertFalse(self.build_root.exists())
        self.assertTrue(self.project.exists())

    def test_clean_without_configuration(self):
        report = BuildDirectoryManager(self.tree).clean()

        self.assertFalse(report.removed)
        self.assertEqual(report.path, str(self.build_root))

    def test_clean_works_even_without_evaluation_root(self):
        self.build_root.mkdir()
        tree = ProjectTree.from_names(self.project, ["libA"])

        report = BuildDirectoryManager(tree).clean()

        self.assertTrue(report.removed)
        self.assertFalse(self.build_root.exists())

    def test_clean_refuses_root_containing_project(self):
        manager = BuildDirectoryManager(self.tree, LayoutConfig(root_offset="../.."))

        with self.assertRaises(ConfigurationError):
            manager.clean()

        self.assertTrue(self.project.exists())


if __name__ == "__main__":
    unittest.main()
