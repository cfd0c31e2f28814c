"""Pytest configuration and shared fixtures for the tree2md test suite."""

import logging
from typing import Generator

import pytest

from tree2md.api import Tree2Markdown
from tree2md.logging_utils import PACKAGE_LOGGER_NAME
from tree2md.options import ConversionOptions

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    import os

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def options() -> ConversionOptions:
    """Default conversion options."""
    return ConversionOptions()


@pytest.fixture
def converter() -> Tree2Markdown:
    """Converter with default options and rules."""
    return Tree2Markdown()


@pytest.fixture
def reset_package_logger() -> Generator[None, None, None]:
    """Undo handler changes the CLI makes to the package logger."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    saved = (list(package_logger.handlers), package_logger.level, package_logger.propagate)
    try:
        yield
    finally:
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        handlers, level, propagate = saved
        for handler in handlers:
            package_logger.addHandler(handler)
        package_logger.setLevel(level)
        package_logger.propagate = propagate
