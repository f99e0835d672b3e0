"""Pytest configuration and shared fixtures for the htmlmark test suite."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging
import os
from typing import Generator

import pytest
from bs4 import BeautifulSoup
from hypothesis import Phase, Verbosity, settings

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
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "property: Property-based tests using Hypothesis")


@pytest.fixture
def soup_of():
    """Return a helper that parses markup with the default parser."""

    def _parse(markup: str) -> BeautifulSoup:
        return BeautifulSoup(markup, "html.parser")

    return _parse


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level after CLI runs reconfigure them."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        for handler in list(root.handlers):
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)
