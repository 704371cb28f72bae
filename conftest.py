"""
Root pytest configuration.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers",
        "critical: Tests that must never fail - core functionality",
    )
    config.addinivalue_line(
        "markers",
        "security: Security-critical tests (signing, secrets)",
    )
    config.addinivalue_line(
        "markers",
        "property: Property-based tests (may be slow)",
    )


@pytest.fixture(autouse=True)
def reset_diagnostics_cache() -> Generator[None, None, None]:
    """Reset the diagnostics module cache and writer around each test.

    The diagnostics module caches the ``internal_logging_enabled`` setting
    at first access; resetting it keeps tests from inheriting state.
    """
    import lawsender.core.diagnostics as diag

    diag._internal_logging_enabled = None
    diag.set_writer_for_tests(None)
    yield
    diag._internal_logging_enabled = None
    diag.set_writer_for_tests(None)
