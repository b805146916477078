"""
Component Resource — compass_component lifecycle mapped onto GraphQL.

  create   createComponent(cloudId, input) then read
  read     component(id); an empty record clears the local id
  update   updateComponent(input) with only the changed fields, then read
  delete   deleteComponent(input: {id})
  import   the component id itself, then read

Attributes handled:
    name          required
    type          required, one of COMPONENT_TYPES, fixed after creation
    description   optional
    owner_id      optional
    cloud_id      optional; derived from the provider tenant when unset,
                  fixed after creation

Component reads only expose an opaque typeId, never the enum value used at
creation, so read keeps whatever "type" the local state already holds.
"""

from typing import Dict, Optional

from .errors import GraphQLError, NotFoundError, ValidationError
from .graphql_queries import COMPONENT_QUERIES
from .resource_base import BaseResource
from .resource_data import ResourceData

COMPONENT_TYPES = (
    "SERVICE",
    "LIBRARY",
    "APPLICATION",
    "INFRASTRUCTURE",
    "DATABASE",
    "DOCUMENTATION",
)

# local attribute -> API field, for the fields update may send
_MUTABLE_FIELDS: Dict[str, str] = {
    "name": "name",
    "description": "description",
    "owner_id": "ownerId",
}

_IMMUTABLE_FIELDS = ("type", "cloud_id")


class ComponentResource(BaseResource):
    """Maps compass_component onto Compass component mutations and queries."""

    type_name = "compass_component"
    label = "component"
    valid_types = COMPONENT_TYPES
    queries = COMPONENT_QUERIES

    def create(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        """Create the component and populate its state from a fresh read.

        Type and cloud id are checked before anything is sent.

        Raises:
            ValidationError: Bad type, missing name, or no way to get a cloud id.
            GraphQLError: If the API rejects the mutation.
        """
        component_type = self.validate_type(data.get("type"))
        self._require(data, "name")
        cloud_id = self.provider.cloud_id_for(data, timeout=timeout)

        component_input = {
            "name": data.get("name"),
            "type": component_type,
        }
        for attr in ("description", "owner_id"):
            value = data.get(attr)
            if value:
                component_input[_MUTABLE_FIELDS[attr]] = value

        if self.debug:
            print(f"  Creating component '{component_input['name']}' ({component_type})")

        result = self._call(
            "create component",
            self.queries["create"],
            {"cloudId": cloud_id, "input": component_input},
            timeout=timeout,
        )
        payload = self._mutation_payload(result, "createComponent")
        self._require_success(payload, "create component")

        component_id = (payload.get("componentDetails") or {}).get("id") or ""
        if not component_id:
            raise GraphQLError(["createComponent returned no component id"]).with_prefix(
                "failed to create component"
            )

        data.set_id(component_id)

        if self.debug:
            print(f"  Component created: {component_id}")

        return self.read(data, timeout=timeout)

    def read(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        """Refresh name, description and owner_id from the API.

        If the component no longer exists the id is cleared instead of
        raising. type is left as it is; a cloud_id absent from state is
        derived from the provider tenant when one is set.
        """
        component_id = self._require_id(data)

        result = self._call(
            "read component", self.queries["read"], {"id": component_id}, timeout=timeout
        )
        component = (result.get("compass") or {}).get("component") or {}

        if not component.get("id"):
            if self.debug:
                print(f"  Component {component_id} not found, clearing state")
            data.set_id("")
            return data

        self._fill_cloud_id(data, timeout=timeout)

        data.set("name", component.get("name") or "")
        data.set("description", component.get("description") or "")
        data.set("owner_id", component.get("ownerId") or "")
        return data

    def update(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        """Send the changed name/description/owner_id, then read.

        A type or cloud_id missing from the prior state (after an import) is
        taken from the plan; a type taken this way must still be valid.

        Raises:
            ValidationError: If a known type or cloud_id changed (nothing is
                sent), an adopted type is invalid, or the name was emptied.
        """
        component_id = self._require_id(data)

        adopted = self._check_immutable(data, _IMMUTABLE_FIELDS)
        if "type" in adopted:
            self.validate_type(data.get("type"))

        changed = data.changed_keys(_MUTABLE_FIELDS)
        if not changed:
            return self.read(data, timeout=timeout)

        if "name" in changed:
            self._require(data, "name")

        update_input = {"id": component_id}
        for attr in changed:
            # an emptied optional field is cleared with an explicit null
            update_input[_MUTABLE_FIELDS[attr]] = data.get(attr) or None

        if self.debug:
            print(f"  Updating component {component_id}: {', '.join(changed)}")

        result = self._call(
            "update component", self.queries["update"], {"input": update_input}, timeout=timeout
        )
        self._require_success(self._mutation_payload(result, "updateComponent"), "update component")

        return self.read(data, timeout=timeout)

    def delete(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        component_id = self._require_id(data)

        result = self._call(
            "delete component", self.queries["delete"], {"input": {"id": component_id}},
            timeout=timeout,
        )
        self._require_success(self._mutation_payload(result, "deleteComponent"), "delete component")

        if self.debug:
            print(f"  Component deleted: {component_id}")

        data.set_id("")
        return data

    def import_state(self, import_id: str, timeout: Optional[float] = None) -> ResourceData:
        """Adopt an existing component by id.

        Raises:
            ValidationError: If the id is empty.
            NotFoundError: If no such component exists.
        """
        component_id = (import_id or "").strip()
        if not component_id:
            raise ValidationError("invalid import id: expected a component id")

        data = self.read(ResourceData(id=component_id), timeout=timeout)
        if not data.exists:
            raise NotFoundError(
                "cannot import non-existent remote component", {"id": component_id}
            )
        return data
