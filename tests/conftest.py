"""
Pytest configuration and shared fixtures for errorwire tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from errorwire.logging import reset_loggers  # noqa: E402
from errorwire.registry import ConstructorRegistry  # noqa: E402


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# =============================================================================
# Registry Fixtures
# =============================================================================


@pytest.fixture
def registry() -> ConstructorRegistry:
    """Fresh seeded registry, isolated from the shared default."""
    return ConstructorRegistry()


@pytest.fixture
def empty_registry() -> ConstructorRegistry:
    """Registry without any seeded kinds."""
    return ConstructorRegistry(seed=False)


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def clean_loggers():
    """Reset logger cache before and after a test."""
    reset_loggers()
    yield
    reset_loggers()


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "registry: Registry tests")
