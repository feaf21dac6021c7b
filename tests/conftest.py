"""Pytest configuration and shared fixtures for the mdtree test suite.

This module provides shared fixtures and test configuration used across
the unit and integration tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mdtree import Container, TreeStore
from mdtree.constants import CONFIG_ENV_VAR, DEBUG_ENV_VAR

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Keep mdtree environment switches from leaking into tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)


@pytest.fixture
def store() -> TreeStore:
    """Provide an empty tree store.

    Returns
    -------
    TreeStore
        Fresh arena with no records.

    """
    return TreeStore()


@pytest.fixture
def container(store: TreeStore) -> Container:
    """Provide an empty container backed by the ``store`` fixture.

    Returns
    -------
    Container
        Container with no root.

    """
    return Container(store)
