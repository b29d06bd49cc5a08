"""Pytest configuration and shared fixtures for the taml_ast test suite.

This module provides shared fixtures and test configuration used across the
entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import build_hello_world

from taml_ast import Document, Node

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def hello_tree() -> tuple[Document, dict[str, Node]]:
    """Provide ``<red>Hello <bold>World</bold>!</red>`` wrapped in a document.

    Returns
    -------
    tuple
        The document and a dict of its named nodes.

    """
    return build_hello_world()


@pytest.fixture
def hello_doc(hello_tree) -> Document:
    """Provide just the document of ``hello_tree``."""
    return hello_tree[0]
