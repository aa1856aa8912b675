"""Shared fixtures for apigw tests."""

import pytest

from apigw.configuration._logging import cleanup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Give every test an unconfigured pipeline logger."""
    yield
    cleanup_logging()
