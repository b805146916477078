"""
Settings — Default configuration values for the Compass provider.

This module provides the DEFAULT_SETTINGS dict that ProviderConfig uses as
fallback values when environment variables are not set. The actual
configuration is usually loaded from .env at runtime; these defaults make the
provider work out of the box against Atlassian cloud.

Configuration precedence (highest to lowest):
  1. CLI flags / explicit keyword arguments
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  BASE_URL      Compass API root, without the /graphql path
  AUTH_SCHEME   "basic" (email + API token) or "bearer" (API token only)
  DEBUG         Whether to print verbose output (default: False)
"""

GRAPHQL_PATH = "/graphql"

# Bound on a single HTTP round trip, in seconds
REQUEST_TIMEOUT = 30

# Appended to bare tenant names ("acme" -> "acme.atlassian.net")
TENANT_DOMAIN_SUFFIX = ".atlassian.net"

# Opt-in header required by the Compass beta fields when using basic auth
EXPERIMENTAL_API_HEADER = "X-ExperimentalApi"
EXPERIMENTAL_API_VALUE = "compass-beta"

AUTH_SCHEMES = ("basic", "bearer")

DEFAULT_SETTINGS = {
    "BASE_URL": "https://api.atlassian.com",
    "AUTH_SCHEME": "basic",
    "DEBUG": False,
}

# Environment variable names read by ProviderConfig.from_env()
ENV_EMAIL = "COMPASS_EMAIL"
ENV_API_TOKEN = "COMPASS_API_TOKEN"
ENV_BASE_URL = "COMPASS_BASE_URL"
ENV_TENANT = "COMPASS_TENANT"
ENV_AUTH_SCHEME = "COMPASS_AUTH_SCHEME"
ENV_DEBUG = "DEBUG"
