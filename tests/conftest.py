"""Shared fixtures for the secrets uploader tests"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from functions_secrets.config import NetworkConfig
from tests.helpers import FakeSecretsManager


@pytest.fixture
def fake_manager_factory():
    """Factory producing FakeSecretsManager instances; options apply to each one"""
    FakeSecretsManager.instances = []
    options = {}

    def factory(**kwargs):
        return FakeSecretsManager(**kwargs, **options)

    factory.options = options
    factory.created = lambda: FakeSecretsManager.instances[-1] if FakeSecretsManager.instances else None
    return factory


@pytest.fixture
def network():
    return NetworkConfig(
        router_address="0x0000000000000000000000000000000000000001",
        don_id="fun-test-1",
        gateway_urls=["https://gateway-a.test/", "https://gateway-b.test/"],
    )


@pytest.fixture
def mock_toolkit():
    toolkit = MagicMock()
    toolkit.call = AsyncMock()
    return toolkit
