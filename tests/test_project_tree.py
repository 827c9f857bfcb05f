"""
Tests for the project tree model and module discovery.
"""

from pathlib import Path

import pytest

from buildtree.core.config import LayoutConfig
from buildtree.core.exceptions import ConfigurationError
from buildtree.core.project_tree import (
    Module,
    ProjectTree,
    discover_modules,
    normalize_module_name,
    validate_module_name,
)


class TestModuleNames:
    """Test module name normalisation and validation."""

    @pytest.mark.fast
    @pytest.mark.parametrize("raw, expected", [(":app", "app"), ("libA", "libA"), (" :core ", "core")])
    def test_normalize(self, raw, expected):
        assert normalize_module_name(raw) == expected

    @pytest.mark.fast
    @pytest.mark.parametrize("name", ["", ":", ".", "..", "a/b", "a\\b", "feature:core"])
    def test_invalid_names(self, name):
        with pytest.raises(ConfigurationError):
            validate_module_name(name)

    @pytest.mark.fast
    def test_error_carries_name(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_module_name("a/b")
        assert exc_info.value.name == "a/b"


class TestProjectTree:
    """Test ProjectTree construction and lookup."""

    @pytest.mark.fast
    def test_from_names_defaults(self):
        tree = ProjectTree.from_names("/proj", ["app", ":libA"])

        assert tree.location == Path("/proj")
        assert tree.root == Module("proj", Path("/proj/build"))
        assert tree.names() == ["app", "libA"]
        assert tree.module("libA").build_dir == Path("/proj/libA/build")

    @pytest.mark.fast
    def test_custom_root_name_and_build_dir(self):
        config = LayoutConfig(default_build_dir_name="out")
        tree = ProjectTree.from_names("/proj", ["app"], root_name="android", config=config)

        assert tree.root.name == "android"
        assert tree.root.build_dir == Path("/proj/out")
        assert tree.module("app").build_dir == Path("/proj/app/out")

    @pytest.mark.fast
    def test_duplicate_names_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ProjectTree.from_names("/proj", ["app", "libA", ":app"])

        assert exc_info.value.name == "app"
        assert "app" in str(exc_info.value)

    @pytest.mark.fast
    def test_duplicate_modules_rejected_on_direct_construction(self):
        with pytest.raises(ConfigurationError):
            ProjectTree(
                location=Path("/proj"),
                root=Module("proj"),
                modules=(Module("libA"), Module("libA")),
            )

    @pytest.mark.fast
    def test_membership_and_iteration(self):
        tree = ProjectTree.from_names("/proj", ["app", "libA"])

        assert "app" in tree
        assert ":libA" in tree
        assert "libB" not in tree
        assert 3 not in tree
        assert len(tree) == 2
        assert [m.name for m in tree] == ["app", "libA"]

    @pytest.mark.fast
    def test_missing_module_lookup(self):
        tree = ProjectTree.from_names("/proj", ["app"])

        with pytest.raises(ConfigurationError):
            tree.module("libA")

    @pytest.mark.fast
    def test_empty_tree_allowed(self):
        tree = ProjectTree.from_names("/proj", [])

        assert tree.names() == []


class TestDiscoverModules:
    """Test module discovery from build scripts."""

    def test_discovers_modules_with_build_scripts(self, project_dir):
        (project_dir / "docs").mkdir()
        (project_dir / ".gradle").mkdir()
        (project_dir / ".gradle" / "build.gradle").write_text("")
        (project_dir / "build").mkdir()
        (project_dir / "build" / "build.gradle").write_text("")
        groovy = project_dir / "legacy"
        groovy.mkdir()
        (groovy / "build.gradle").write_text("")

        assert discover_modules(project_dir) == ["app", "legacy", "libA", "libB"]

    def test_custom_build_script_names(self, project_dir):
        config = LayoutConfig(build_script_names=("BUILD",))
        (project_dir / "libA" / "BUILD").write_text("")

        assert discover_modules(project_dir, config) == ["libA"]

    def test_missing_project_directory(self, tmp_path):
        with pytest.raises(ConfigurationError):
            discover_modules(tmp_path / "missing")


class TestDirectConstruction:
    """Test trees built from Module instances with Gradle project paths."""

    @pytest.mark.fast
    def test_names_are_normalized(self):
        tree = ProjectTree(
            location=Path("/proj"),
            root=Module("proj"),
            modules=(Module(":app", Path("/proj/app/build")), Module("libA")),
        )

        assert tree.names() == ["app", "libA"]
        assert tree.module("app").build_dir == Path("/proj/app/build")
        assert tree.module(":app").name == "app"
        assert "app" in tree
        assert ":app" in tree

    @pytest.mark.fast
    def test_prefixed_and_plain_duplicates_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ProjectTree(
                location=Path("/proj"),
                root=Module("proj"),
                modules=(Module(":app"), Module("app")),
            )

        assert exc_info.value.name == "app"

    @pytest.mark.fast
    def test_invalid_name_rejected(self):
        with pytest.raises(ConfigurationError):
            ProjectTree(location=Path("/proj"), root=Module("proj"), modules=(Module("a/b"),))
