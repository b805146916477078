"""
compass-provider — Declarative Atlassian Compass resources over GraphQL.

This package maps the compass_component and compass_component_link resource
lifecycles (create, read, update, delete, import) onto the Compass GraphQL API:

  settings.py                 Defaults, timeouts and environment variable names.
  errors.py                   Exception hierarchy reported by every operation.
  compass_client.py           HTTP/GraphQL transport and tenant -> cloud id lookup.
  graphql_queries.py          The GraphQL documents each resource sends.
  resource_data.py            Local state record passed through the lifecycle.
  resource_base.py            Plumbing shared by the resource mappers.
  resource_component.py       compass_component mapper.
  resource_component_link.py  compass_component_link mapper.
  provider.py                 Provider configuration and shared client wiring.
"""

from .compass_client import CompassGraphQLClient, normalize_tenant_host
from .errors import (
    AmbiguousCreateError,
    CompassProviderError,
    GraphQLError,
    HTTPError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from .provider import ConfiguredProvider, ProviderConfig, configure_provider
from .resource_component import COMPONENT_TYPES, ComponentResource
from .resource_component_link import LINK_TYPES, ComponentLinkResource, parse_import_id
from .resource_data import ResourceData
