"""Test configuration and fixtures."""

import os
from unittest.mock import AsyncMock

import pytest

# Set test environment variables BEFORE importing the package
os.environ["BLUE_ENVIRONMENT"] = "test"

from blue_connector.config import get_settings
from blue_connector.types import AdditionalOptions, BlueCredentials, OperationContext


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def credentials():
    return BlueCredentials(token_id="token-id", token_secret="token-secret")


@pytest.fixture
def transport():
    """Transport double returning an empty successful envelope by default."""
    fake = AsyncMock()
    fake.send.return_value = {"data": {}}
    return fake


@pytest.fixture
def make_context(credentials, transport):
    """Factory for an OperationContext over the fake transport."""

    def _make(parameters=None, full_response=False, timeout_ms=30000, item_index=0):
        return OperationContext(
            item_index=item_index,
            credentials=credentials,
            parameters=parameters or {},
            transport=transport,
            options=AdditionalOptions(timeout_ms=timeout_ms, full_response=full_response),
        )

    return _make

