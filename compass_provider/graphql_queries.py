"""
GraphQL Query Definitions — Every document the provider sends to Compass.

Each resource mapper owns the subset it uses (see the *_QUERIES mappings at
the bottom); nothing here is mutated at runtime.

Tenant lookup:
  GET_CLOUD_ID                 tenantContexts(hostNames) -> [{cloudId}]

Components:
  CREATE_COMPONENT_MUTATION    compass.createComponent(cloudId, input)
  GET_COMPONENT_QUERY          compass.component(id)
  UPDATE_COMPONENT_MUTATION    compass.updateComponent(input)
  DELETE_COMPONENT_MUTATION    compass.deleteComponent(input)

Component links:
  CREATE_COMPONENT_LINK_MUTATION   compass.createComponentLink(input) -> success only
  GET_COMPONENT_LINKS_QUERY        compass.component(id).links
  UPDATE_COMPONENT_LINK_MUTATION   compass.updateComponentLink(input)
  DELETE_COMPONENT_LINK_MUTATION   compass.deleteComponentLink(input)

Note on component types:
  createComponent accepts the CompassComponentType enum value (SERVICE, ...),
  but component reads expose only an opaque typeId. The read query therefore
  does not ask for "type" at all.
"""

from types import MappingProxyType

GET_CLOUD_ID = """
query GetCloudId($hostNames: [String!]!) {
  tenantContexts(hostNames: $hostNames) {
    cloudId
  }
}
"""

CREATE_COMPONENT_MUTATION = """
mutation CreateComponent($cloudId: ID!, $input: CreateCompassComponentInput!) {
  compass {
    createComponent(cloudId: $cloudId, input: $input) {
      success
      errors {
        message
      }
      componentDetails {
        id
        name
        description
        typeId
        ownerId
      }
    }
  }
}
"""

GET_COMPONENT_QUERY = """
query GetComponent($id: ID!) {
  compass {
    component(id: $id) {
      ... on CompassComponent {
        id
        name
        description
        typeId
        ownerId
      }
      ... on QueryError {
        message
      }
    }
  }
}
"""

UPDATE_COMPONENT_MUTATION = """
mutation UpdateComponent($input: UpdateCompassComponentInput!) {
  compass {
    updateComponent(input: $input) {
      success
      errors {
        message
      }
      componentDetails {
        id
        name
        description
        typeId
        ownerId
      }
    }
  }
}
"""

DELETE_COMPONENT_MUTATION = """
mutation DeleteComponent($input: DeleteCompassComponentInput!) {
  compass {
    deleteComponent(input: $input) {
      success
      errors {
        message
      }
    }
  }
}
"""

CREATE_COMPONENT_LINK_MUTATION = """
mutation CreateComponentLink($input: CreateCompassComponentLinkInput!) {
  compass {
    createComponentLink(input: $input) {
      success
      errors {
        message
      }
    }
  }
}
"""

GET_COMPONENT_LINKS_QUERY = """
query GetComponentLinks($componentId: ID!) {
  compass {
    component(id: $componentId) {
      ... on CompassComponent {
        id
        links {
          id
          name
          type
          url
          objectId
        }
      }
      ... on QueryError {
        message
      }
    }
  }
}
"""

UPDATE_COMPONENT_LINK_MUTATION = """
mutation UpdateComponentLink($input: UpdateCompassComponentLinkInput!) {
  compass {
    updateComponentLink(input: $input) {
      success
      errors {
        message
      }
    }
  }
}
"""

DELETE_COMPONENT_LINK_MUTATION = """
mutation DeleteComponentLink($input: DeleteCompassComponentLinkInput!) {
  compass {
    deleteComponentLink(input: $input) {
      success
      errors {
        message
      }
    }
  }
}
"""

COMPONENT_QUERIES = MappingProxyType({
    "create": CREATE_COMPONENT_MUTATION,
    "read": GET_COMPONENT_QUERY,
    "update": UPDATE_COMPONENT_MUTATION,
    "delete": DELETE_COMPONENT_MUTATION,
})

COMPONENT_LINK_QUERIES = MappingProxyType({
    "create": CREATE_COMPONENT_LINK_MUTATION,
    "read": GET_COMPONENT_LINKS_QUERY,
    "update": UPDATE_COMPONENT_LINK_MUTATION,
    "delete": DELETE_COMPONENT_LINK_MUTATION,
})
