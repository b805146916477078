from unittest.mock import patch

import pytest

from compass_provider import ProviderConfig, configure_provider

from fake_compass import FakeCompassAPI

BASE_URL = "https://compass.example.com"


@pytest.fixture
def fake_api():
    api = FakeCompassAPI()
    with patch("compass_provider.compass_client.requests.post", side_effect=api.post):
        yield api


@pytest.fixture
def provider(fake_api):
    config = ProviderConfig(
        email="test@example.com",
        api_token="test-token",
        base_url=BASE_URL,
        tenant="acme",
    )
    return configure_provider(config)


@pytest.fixture
def provider_without_tenant(fake_api):
    config = ProviderConfig(email="test@example.com", api_token="test-token", base_url=BASE_URL)
    return configure_provider(config)
