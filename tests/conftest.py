"""Shared fixtures for switchyard tests."""

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
