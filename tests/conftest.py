"""
pytest configuration and shared fixtures for buildtree tests.
"""

import logging

import pytest

from buildtree.core import LayoutConfig, ProjectTree

MODULE_NAMES = ["app", "libA", "libB"]


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Reduce logging noise during tests."""
    logging.getLogger("buildtree").setLevel(logging.WARNING)
    yield
    logging.getLogger("buildtree").setLevel(logging.INFO)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep BUILDTREE_* variables from the caller out of the tests."""
    for key in ("ROOT_OFFSET", "EVALUATION_ROOT", "DEFAULT_BUILD_DIR", "VERBOSITY"):
        monkeypatch.delenv(f"BUILDTREE_{key}", raising=False)


@pytest.fixture
def project_dir(tmp_path):
    """
    Project tree on disk: ``<tmp>/proj`` with app, libA and libB modules.

    The relocated root for this layout is ``<tmp>/build``.
    """
    project = tmp_path / "proj"
    for name in MODULE_NAMES:
        module_dir = project / name
        module_dir.mkdir(parents=True)
        (module_dir / "build.gradle.kts").write_text("// module\n")
    (project / "build.gradle.kts").write_text("// root\n")
    return project


@pytest.fixture
def project_tree(project_dir):
    return ProjectTree.from_names(project_dir, MODULE_NAMES)


@pytest.fixture
def layout_config():
    return LayoutConfig()


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "fast: mark test as fast running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
