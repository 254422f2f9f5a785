"""Shared test fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def _restore_structlog_config():
    """Undo logging configuration a test applied, so later tests don't log to a closed stream."""
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)
