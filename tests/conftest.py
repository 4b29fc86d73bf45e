"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the obfuscation_markers test suite.
"""

import pytest

from obfuscation_markers import ObjectFactory

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def factory() -> ObjectFactory:
    """
    Provide the reflection-based object factory.

    Returns:
        ObjectFactory: Shared factory that calls classes without arguments
    """
    return ObjectFactory.using_reflection()


# =============================================================================
# Test Collection Hooks
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """
    Add the 'unit' marker to tests without other markers.

    Args:
        config: Pytest config object
        items: List of collected test items
    """
    for item in items:
        if not any(mark.name == "property" for mark in item.iter_markers()):
            item.add_marker(pytest.mark.unit)
