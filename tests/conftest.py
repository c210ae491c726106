"""Shared pytest configuration."""

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo structlog.configure() calls made by CLI tests."""
    yield
    structlog.reset_defaults()
