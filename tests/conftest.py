"""
Shared pytest fixtures for kubeci-kubectl tests.
"""

import pytest

from kubeci_kubectl.rendering.io import ScratchFiles

PLUGIN_VARS = [
    "PLUGIN_DRY_RUN",
    "DRY_RUN",
    "PLUGIN_FILES",
    "FILES",
    "PLUGIN_KUBECTL",
    "KUBECTL",
    "PLUGIN_NAMESPACE",
    "NAMESPACE",
    "PLUGIN_TEMPLATES",
    "TEMPLATES",
    "PLUGIN_DEBUG",
    "DEBUG",
    "PLUGIN_ENV_FILE",
    "KUBECONFIG",
]


@pytest.fixture(autouse=True)
def clean_plugin_env(monkeypatch):
    """Start every test without plugin variables from the host environment."""
    for name in PLUGIN_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scratch(tmp_path):
    """Scratch area rooted in the test's temporary directory."""
    area = ScratchFiles(directory=tmp_path)
    yield area
    area.close()
