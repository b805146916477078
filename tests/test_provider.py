"""Tests for compass_provider.provider configuration and wiring."""

import os
from unittest.mock import patch

import pytest

from compass_provider import (
    ComponentLinkResource,
    ComponentResource,
    ProviderConfig,
    ResourceData,
    configure_provider,
)
from compass_provider.errors import NotFoundError, ValidationError


_BASE_ENV = {
    "COMPASS_EMAIL": "test@example.com",
    "COMPASS_API_TOKEN": "test-token",
    "COMPASS_BASE_URL": "https://compass.example.com",
    "COMPASS_TENANT": "acme",
    "COMPASS_AUTH_SCHEME": "basic",
    "DEBUG": "false",
}


def _config_from_env(env_overrides=None, **overrides):
    env = dict(_BASE_ENV)
    if env_overrides:
        env.update(env_overrides)
    with patch.dict(os.environ, env, clear=True):
        return ProviderConfig.from_env(env_file=None, **overrides)


def test_from_env_reads_all_values():
    config = _config_from_env()
    assert config.email == "test@example.com"
    assert config.api_token == "test-token"
    assert config.base_url == "https://compass.example.com"
    assert config.tenant == "acme"
    assert config.auth_scheme == "basic"
    assert config.debug is False


def test_from_env_defaults():
    config = _config_from_env({"COMPASS_BASE_URL": "", "COMPASS_AUTH_SCHEME": ""})
    assert config.base_url == "https://api.atlassian.com"
    assert config.auth_scheme == "basic"


def test_from_env_overrides_win_and_none_is_ignored():
    config = _config_from_env(tenant="other", base_url=None)
    assert config.tenant == "other"
    assert config.base_url == "https://compass.example.com"


def test_from_env_loads_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("COMPASS_TENANT=from-file\n")
    env = {k: v for k, v in _BASE_ENV.items() if k != "COMPASS_TENANT"}
    with patch.dict(os.environ, env, clear=True):
        config = ProviderConfig.from_env(env_file=str(env_file))
    assert config.tenant == "from-file"


def test_from_env_reports_loaded_file_only_when_debugging(tmp_path, capsys):
    env_file = tmp_path / ".env"
    env_file.write_text("COMPASS_TENANT=from-file\n")
    with patch.dict(os.environ, _BASE_ENV, clear=True):
        ProviderConfig.from_env(env_file=str(env_file))
        ProviderConfig.from_env(env_file="/nonexistent/.env")
    assert capsys.readouterr().out == ""

    with patch.dict(os.environ, _BASE_ENV, clear=True):
        ProviderConfig.from_env(env_file=str(env_file), debug=True)
    assert "Loaded configuration from" in capsys.readouterr().out


def test_api_token_not_in_repr():
    assert "test-token" not in repr(_config_from_env())


def test_validate_valid():
    assert _config_from_env().validate() == []


def test_validate_missing_token():
    errors = _config_from_env({"COMPASS_API_TOKEN": ""}).validate()
    assert errors == ["api_token is required"]


def test_validate_basic_requires_email():
    errors = _config_from_env({"COMPASS_EMAIL": ""}).validate()
    assert any("email is required" in e for e in errors)


def test_validate_bearer_without_email():
    config = _config_from_env({"COMPASS_EMAIL": "", "COMPASS_AUTH_SCHEME": "bearer"})
    assert config.validate() == []


def test_validate_unknown_scheme():
    errors = _config_from_env({"COMPASS_AUTH_SCHEME": "oauth"}).validate()
    assert any("auth_scheme" in e for e in errors)


def test_configure_provider_raises_on_invalid_config():
    with pytest.raises(ValidationError) as exc_info:
        configure_provider(ProviderConfig())
    assert "api_token is required" in str(exc_info.value)


def test_resources_share_one_client():
    provider = configure_provider(_config_from_env())
    resources = provider.resources()
    assert isinstance(resources["compass_component"], ComponentResource)
    assert isinstance(resources["compass_component_link"], ComponentLinkResource)
    assert resources["compass_component"].client is provider.client
    assert resources["compass_component_link"].client is provider.client


def test_unknown_resource_type():
    provider = configure_provider(_config_from_env())
    with pytest.raises(ValidationError):
        provider.resource("compass_scorecard")


def test_cloud_id_for_prefers_explicit_value(provider, fake_api):
    data = ResourceData.from_config({"cloud_id": "explicit"})
    assert provider.cloud_id_for(data) == "explicit"
    assert fake_api.calls == []


def test_cloud_id_for_stores_derived_value(provider, fake_api):
    data = ResourceData.from_config({})
    assert provider.cloud_id_for(data) == "cloud-123"
    assert data.get("cloud_id") == "cloud-123"


def test_cloud_id_for_passes_timeout(provider, fake_api):
    provider.cloud_id_for(ResourceData.from_config({}), timeout=9)
    assert fake_api.calls[0]["timeout"] == 9


def test_cloud_id_for_unknown_tenant(fake_api):
    provider = configure_provider(_config_from_env(tenant="ghost"))
    with pytest.raises(NotFoundError) as exc_info:
        provider.cloud_id_for(ResourceData.from_config({}))
    assert "failed to get cloud_id from tenant 'ghost'" in str(exc_info.value)
