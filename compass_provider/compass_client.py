"""
Compass API Client — Handles authentication and GraphQL calls to Atlassian Compass.

This module is responsible for all HTTP communication with Compass. The
provider talks to a single API surface:

  GraphQL API — POST {base_url}/graphql with a JSON body of
  {"query": "...", "variables": {...}}. Every resource operation and the
  tenant lookup go through CompassGraphQLClient.execute().

Authentication (selected by auth_scheme, one policy per client):
  basic   Authorization: Basic base64(email:api_token)
          X-ExperimentalApi: compass-beta
  bearer  Authorization: Bearer api_token

Response envelope:
    {"data": {...}, "errors": [{"message": "...", "path": [...], ...}]}

    A non-empty "errors" list is raised as GraphQLError with all messages
    joined by "; ". Data is never returned alongside errors.

The client keeps no per-call state: headers and body are rebuilt for every
request and sent with requests.post, so one instance can serve concurrent
lifecycle callbacks.
"""

import base64
from typing import Any, Dict, Mapping, Optional

import requests

from .errors import GraphQLError, HTTPError, NotFoundError, TransportError, ValidationError
from .graphql_queries import GET_CLOUD_ID
from .settings import (
    AUTH_SCHEMES,
    EXPERIMENTAL_API_HEADER,
    EXPERIMENTAL_API_VALUE,
    GRAPHQL_PATH,
    REQUEST_TIMEOUT,
    TENANT_DOMAIN_SUFFIX,
)


def normalize_tenant_host(tenant: str) -> str:
    """Turn a tenant name into the site hostname Compass knows it by.

    Example: "acme" -> "acme.atlassian.net"; "acme.atlassian.net" is unchanged.

    Raises:
        ValidationError: If the tenant is empty.
    """
    tenant = (tenant or "").strip()
    if not tenant:
        raise ValidationError("tenant cannot be empty")
    if "." not in tenant:
        return tenant + TENANT_DOMAIN_SUFFIX
    return tenant


class CompassGraphQLClient:
    """Client for the Atlassian Compass GraphQL API.

    Attributes:
        base_url: API root without the /graphql path (trailing slash stripped).
        email: Atlassian account email (used by the basic scheme only).
        auth_scheme: "basic" or "bearer".
        timeout: Upper bound in seconds for a single request.
        debug: If True, print verbose request details.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        email: str = "",
        auth_scheme: str = "basic",
        timeout: float = REQUEST_TIMEOUT,
        debug: bool = False,
    ):
        """Initialize the client.

        Args:
            base_url: API root (e.g., "https://api.atlassian.com").
            api_token: Atlassian API token.
            email: Account email, required when auth_scheme is "basic".
            auth_scheme: Authentication policy, "basic" or "bearer".
            timeout: Request timeout in seconds.
            debug: Enable verbose output.

        Raises:
            ValidationError: If a required value is missing or the scheme is unknown.
        """
        if not base_url:
            raise ValidationError("base_url cannot be empty")
        if not api_token:
            raise ValidationError("api_token cannot be empty")
        if auth_scheme not in AUTH_SCHEMES:
            raise ValidationError(
                f"unsupported auth_scheme '{auth_scheme}'. Valid values are: {', '.join(AUTH_SCHEMES)}"
            )
        if auth_scheme == "basic" and not email:
            raise ValidationError("email cannot be empty when auth_scheme is 'basic'")

        self.base_url = base_url.rstrip("/")
        self.email = email
        self.auth_scheme = auth_scheme
        self.timeout = timeout
        self.debug = debug
        self._api_token = api_token

    @property
    def graphql_url(self) -> str:
        """The full GraphQL endpoint URL."""
        return f"{self.base_url}{GRAPHQL_PATH}"

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.auth_scheme == "bearer":
            headers["Authorization"] = f"Bearer {self._api_token}"
        else:
            credentials = f"{self.email}:{self._api_token}".encode("utf-8")
            headers["Authorization"] = f"Basic {base64.b64encode(credentials).decode('ascii')}"
            headers[EXPERIMENTAL_API_HEADER] = EXPERIMENTAL_API_VALUE
        return headers

    def execute(
        self,
        query: str,
        variables: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Execute a GraphQL query or mutation against Compass.

        Args:
            query: The GraphQL document.
            variables: Optional mapping of GraphQL variables; omitted from the
                body when empty.
            timeout: Optional per-call deadline in seconds, capped at the
                client's own timeout.

        Returns:
            The "data" portion of the response (an empty dict if null).

        Raises:
            ValidationError: If the query is empty.
            TransportError: If the request fails or the body is not a JSON envelope.
            HTTPError: If the API returns a non-200 status.
            GraphQLError: If the response contains errors.
        """
        if not query or not query.strip():
            raise ValidationError("GraphQL query cannot be empty")

        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = dict(variables)

        effective_timeout = self.timeout if timeout is None else min(timeout, self.timeout)

        if self.debug:
            print(f"  Executing GraphQL operation ({len(query)} chars) -> {self.graphql_url}")

        try:
            response = requests.post(
                self.graphql_url,
                json=payload,
                headers=self._build_headers(),
                timeout=effective_timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"failed to execute request: {e}", cause=e) from e

        if response.status_code != 200:
            raise HTTPError(response.status_code, response.text)

        try:
            result = response.json()
        except ValueError as e:
            raise TransportError(f"failed to decode response body: {e}", cause=e) from e

        if not isinstance(result, dict):
            raise TransportError("failed to decode response body: expected a JSON object")

        errors = result.get("errors") or []
        if errors:
            messages = [
                e.get("message", str(e)) if isinstance(e, dict) else str(e)
                for e in errors
            ]
            raise GraphQLError(messages)

        data = result.get("data")
        return data if isinstance(data, dict) else {}

    def resolve_cloud_id(self, tenant: str, timeout: Optional[float] = None) -> str:
        """Look up the cloud id of a tenant site.

        Tenant can be a bare name ("acme") or a full hostname
        ("acme.atlassian.net"). The API is expected to return at most one
        context for an exact hostname. timeout is passed on to execute().

        Returns:
            The cloud id string.

        Raises:
            ValidationError: If the tenant is empty.
            NotFoundError: If no context (or an empty cloud id) comes back.
        """
        host = normalize_tenant_host(tenant)

        if self.debug:
            print(f"  Resolving cloud id for tenant: {host}")

        data = self.execute(GET_CLOUD_ID, {"hostNames": [host]}, timeout=timeout)

        contexts = data.get("tenantContexts") or []
        if not contexts:
            raise NotFoundError(f"tenant '{host}' not found or inaccessible", {"tenant": host})

        cloud_id = (contexts[0] or {}).get("cloudId") or ""
        if not cloud_id:
            raise NotFoundError(f"tenant '{host}' not found or inaccessible", {"tenant": host})

        if self.debug:
            print(f"  Tenant {host} -> cloud id {cloud_id}")

        return cloud_id
