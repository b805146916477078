"""
Provider — Configuration loading, validation, and wiring of the shared client.

ProviderConfig collects the provider-level settings (credentials, base URL,
tenant, auth scheme). configure_provider() validates them and returns a
ConfiguredProvider: the one object handed to every resource mapper, holding
the single CompassGraphQLClient they all share plus the tenant used to derive
cloud ids.

Configuration:
    Values come from keyword arguments, or from environment variables
    (typically via a .env file) with ProviderConfig.from_env():

      COMPASS_EMAIL        Atlassian account email (basic auth)
      COMPASS_API_TOKEN    API token (required, never printed)
      COMPASS_BASE_URL     API root, default https://api.atlassian.com
      COMPASS_TENANT       Tenant for automatic cloud_id detection
      COMPASS_AUTH_SCHEME  "basic" (default) or "bearer"
      DEBUG                "true" for verbose output

Typical usage:
    config = ProviderConfig.from_env(env_file="./.env")
    provider = configure_provider(config)
    components = provider.resource("compass_component")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from .compass_client import CompassGraphQLClient
from .errors import CompassProviderError, ValidationError
from .resource_component import ComponentResource
from .resource_component_link import ComponentLinkResource
from .resource_data import ResourceData
from .settings import (
    AUTH_SCHEMES,
    DEFAULT_SETTINGS,
    ENV_API_TOKEN,
    ENV_AUTH_SCHEME,
    ENV_BASE_URL,
    ENV_DEBUG,
    ENV_EMAIL,
    ENV_TENANT,
)


@dataclass(frozen=True)
class ProviderConfig:
    """Provider-level settings.

    Attributes:
        email: Atlassian account email (required for basic auth).
        api_token: API token (required).
        base_url: API root without the /graphql path.
        tenant: Optional tenant name used when a resource has no cloud_id.
        auth_scheme: "basic" or "bearer".
        debug: Whether to enable verbose output.
    """

    email: str = ""
    api_token: str = field(default="", repr=False)
    base_url: str = DEFAULT_SETTINGS["BASE_URL"]
    tenant: str = ""
    auth_scheme: str = DEFAULT_SETTINGS["AUTH_SCHEME"]
    debug: bool = DEFAULT_SETTINGS["DEBUG"]

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **overrides) -> "ProviderConfig":
        """Build the config from environment variables.

        Args:
            env_file: Optional path to a .env file, loaded via python-dotenv
                when it exists. Variables already set in the environment win.
            **overrides: Explicit values (e.g. from CLI flags); None is ignored.

        Which file was loaded is only printed when the resulting config has
        debug on, so normal output stays machine-readable.
        """
        status = ""
        if env_file:
            env_path = Path(env_file)
            if env_path.exists():
                load_dotenv(env_path)
                status = f"Loaded configuration from: {env_file}"
            else:
                status = f"Warning: {env_file} not found, using defaults/environment"

        values = {
            "email": os.getenv(ENV_EMAIL, ""),
            "api_token": os.getenv(ENV_API_TOKEN, ""),
            "base_url": os.getenv(ENV_BASE_URL, "") or DEFAULT_SETTINGS["BASE_URL"],
            "tenant": os.getenv(ENV_TENANT, ""),
            "auth_scheme": (os.getenv(ENV_AUTH_SCHEME, "") or DEFAULT_SETTINGS["AUTH_SCHEME"]).lower(),
            "debug": os.getenv(ENV_DEBUG, str(DEFAULT_SETTINGS["DEBUG"])).lower() == "true",
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        if status and values["debug"]:
            print(status)

        return cls(**values)

    def validate(self) -> List[str]:
        """Check that all required configuration values are present.

        Returns:
            A list of error messages; empty when the config is usable.
        """
        errors = []
        if not self.api_token:
            errors.append("api_token is required")
        if self.auth_scheme not in AUTH_SCHEMES:
            errors.append(
                f"auth_scheme must be one of: {', '.join(AUTH_SCHEMES)} (got '{self.auth_scheme}')"
            )
        elif self.auth_scheme == "basic" and not self.email:
            errors.append("email is required when auth_scheme is 'basic'")
        if not self.base_url:
            errors.append("base_url cannot be empty")
        return errors


@dataclass(frozen=True)
class ConfiguredProvider:
    """The shared object every resource mapper receives."""

    client: CompassGraphQLClient
    tenant: str = ""
    debug: bool = False

    def cloud_id_for(self, data: ResourceData, timeout: Optional[float] = None) -> str:
        """Return the resource's cloud id, deriving it from the tenant if unset.

        A derived value is written into the resource's cloud_id attribute; it
        is not cached anywhere else.

        Raises:
            ValidationError: If neither cloud_id nor a provider tenant is set.
            NotFoundError: If the tenant does not resolve.
        """
        cloud_id = data.get("cloud_id")
        if cloud_id:
            return cloud_id

        if not self.tenant:
            raise ValidationError("cloud_id is required when tenant is not configured in provider")

        try:
            cloud_id = self.client.resolve_cloud_id(self.tenant, timeout=timeout)
        except CompassProviderError as e:
            raise e.with_prefix(f"failed to get cloud_id from tenant '{self.tenant}'") from e

        data.set("cloud_id", cloud_id)
        return cloud_id

    def resources(self) -> Dict[str, object]:
        """Map each resource type name to its mapper, all sharing this provider."""
        return {
            ComponentResource.type_name: ComponentResource(self),
            ComponentLinkResource.type_name: ComponentLinkResource(self),
        }

    def resource(self, type_name: str):
        resources = self.resources()
        if type_name not in resources:
            raise ValidationError(
                f"unknown resource type '{type_name}'. Valid values are: {', '.join(sorted(resources))}"
            )
        return resources[type_name]


def configure_provider(config: ProviderConfig) -> ConfiguredProvider:
    """Validate the config and build the provider with its shared client.

    Raises:
        ValidationError: Listing every configuration problem found.
    """
    errors = config.validate()
    if errors:
        raise ValidationError("invalid provider configuration: " + "; ".join(errors))

    client = CompassGraphQLClient(
        base_url=config.base_url,
        api_token=config.api_token,
        email=config.email,
        auth_scheme=config.auth_scheme,
        debug=config.debug,
    )
    return ConfiguredProvider(client=client, tenant=config.tenant, debug=config.debug)
