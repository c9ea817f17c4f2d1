"""Shared test fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by a test, such as a CLI run."""
    yield
    structlog.reset_defaults()
